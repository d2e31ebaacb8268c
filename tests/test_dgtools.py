import io
import socket

import pytest

from unixplay.dgtools import (
    format_sender,
    receive,
    receiver_main,
    reply_text,
    send_datagram,
    sender_main,
)
from unixplay.socklib import make_dgram_server_socket


@pytest.fixture
def server():
    sock = make_dgram_server_socket(0, "127.0.0.1")
    sock.settimeout(5)
    yield sock
    sock.close()


def test_reply_text_counts_bytes():
    assert reply_text(b"hello") == "Thanks for your 5 char message\n"
    assert reply_text("hello") == reply_text(b"hello")


def test_format_sender():
    assert format_sender(("127.0.0.1", 2020)) == "  from: 127.0.0.1:2020"


def test_send_datagram_returns_length(server):
    port = server.getsockname()[1]
    assert send_datagram("127.0.0.1", port, "ping") == 4
    assert server.recv(100) == b"ping"


def test_receive_reports_message_and_sender(server):
    port = server.getsockname()[1]
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as client:
        client.bind(("127.0.0.1", 0))
        client.sendto(b"hi there", ("127.0.0.1", port))
        out = io.StringIO()
        assert receive(server, out, count=1) == 1
        lines = out.getvalue().splitlines()
        assert lines[0] == "dgrecv: got a message: hi there"
        assert lines[1] == format_sender(client.getsockname())


def test_receive_with_reply(server):
    port = server.getsockname()[1]
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as client:
        client.settimeout(5)
        client.sendto(b"abc", ("127.0.0.1", port))
        receive(server, io.StringIO(), reply=True, count=1)
        answer = client.recv(100).decode()
    assert answer == reply_text(b"abc")


def test_receive_stops_at_empty_datagram(server):
    port = server.getsockname()[1]
    send_datagram("127.0.0.1", port, "one")
    send_datagram("127.0.0.1", port, b"")
    out = io.StringIO()
    assert receive(server, out) == 1
    assert out.getvalue().count("dgrecv: got a message:") == 1


def test_sender_main_usage():
    assert sender_main(["localhost", "2020"]) == 1


def test_sender_main_sends(server):
    port = server.getsockname()[1]
    assert sender_main(["127.0.0.1", str(port), "note"]) == 0
    assert server.recv(100) == b"note"


@pytest.mark.parametrize("args", [[], ["0"], ["-5"], ["abc"]])
def test_receiver_main_rejects_bad_port(args):
    assert receiver_main(args) == 1