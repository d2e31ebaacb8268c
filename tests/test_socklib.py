import socket

import pytest

from unixplay import socklib


def test_make_internet_address_numeric():
    assert socklib.make_internet_address("127.0.0.1", 2020) == ("127.0.0.1", 2020)


def test_get_internet_address_round_trip():
    addr = socklib.make_internet_address("127.0.0.1", 15000)
    assert socklib.get_internet_address(addr) == addr


def test_get_internet_address_converts_port_to_int():
    host, port = socklib.get_internet_address(("127.0.0.1", "13000"))
    assert host == "127.0.0.1"
    assert port == 13000


def test_stream_server_and_client_exchange():
    with socklib.make_server_socket(0, host="127.0.0.1") as server:
        host, port = server.getsockname()
        assert host == "127.0.0.1"
        assert server.type == socket.SOCK_STREAM
        with socklib.connect_to_server("127.0.0.1", port) as client:
            conn, _ = server.accept()
            with conn:
                client.sendall(b"ping")
                assert conn.recv(16) == b"ping"
                conn.sendall(b"pong")
                assert client.recv(16) == b"pong"


def test_make_server_socket_with_explicit_backlog():
    with socklib.make_server_socket(0, 5, "127.0.0.1") as server:
        assert server.getsockname()[1] > 0


def test_connect_to_closed_port_raises():
    probe = socklib.make_server_socket(0, host="127.0.0.1")
    port = probe.getsockname()[1]
    probe.close()
    with pytest.raises(OSError):
        socklib.connect_to_server("127.0.0.1", port)


def test_bind_to_used_port_raises():
    with socklib.make_server_socket(0, host="127.0.0.1") as first:
        port = first.getsockname()[1]
        with pytest.raises(OSError):
            socklib.make_server_socket(port, host="127.0.0.1")


def test_datagram_round_trip():
    with socklib.make_dgram_server_socket(0, host="127.0.0.1") as server:
        target = server.getsockname()
        with socklib.make_dgram_client_socket() as client:
            assert client.type == socket.SOCK_DGRAM
            client.sendto(b"hello", socklib.make_internet_address(*target))
            data, sender = server.recvfrom(1024)
            assert data == b"hello"
            host, port = socklib.get_internet_address(sender)
            assert host == "127.0.0.1"
            assert port == client.getsockname()[1]