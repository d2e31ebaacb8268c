import io
import socket

import pytest

from unixplay.licserver import LicenseServer, TicketError, TicketTable, main


def quiet_table():
    return TicketTable(log=io.StringIO())


def quiet_server(sock=None):
    log = io.StringIO()
    return LicenseServer(sock, TicketTable(log=log), log=log)


def test_issue_fills_slots_in_order():
    table = quiet_table()
    assert table.issue(1234) == "1234.0"
    assert table.issue(77) == "77.1"
    assert table.issue(88) == "88.2"
    assert table.tickets_out == 3


def test_issue_fails_when_all_out():
    table = quiet_table()
    for pid in (1, 2, 3):
        table.issue(pid)
    with pytest.raises(TicketError, match="no tickets available"):
        table.issue(4)


def test_release_frees_slot_for_reuse():
    table = quiet_table()
    table.issue(10)
    ticket = table.issue(20)
    table.release(ticket)
    assert table.tickets_out == 1
    assert table.issue(30) == ticket.replace("20", "30")


def test_release_rejects_unknown_ticket():
    table = quiet_table()
    table.issue(10)
    with pytest.raises(TicketError, match="invalid ticket"):
        table.release("11.0")
    with pytest.raises(TicketError):
        table.release("garbage")
    with pytest.raises(TicketError):
        table.release("10.9")
    assert table.tickets_out == 1


def test_validate():
    table = quiet_table()
    ticket = table.issue(42)
    assert table.validate(ticket) is True
    assert table.validate("43.0") is False
    table.release(ticket)
    assert table.validate(ticket) is False


def test_reclaim_frees_dead_holders():
    table = quiet_table()
    table.issue(100)
    table.issue(200)
    freed = table.reclaim(lambda pid: pid != 200)
    assert freed == ["200.1"]
    assert table.tickets_out == 1
    assert table.validate("100.0") is True


def test_handle_request_responses():
    server = quiet_server()
    assert server.handle_request("HELO 1234") == "TICK 1234.0"
    assert server.handle_request("VALD 1234.0") == "GOOD Valid ticket"
    assert server.handle_request("VALD 9.0") == "FAIL invalid ticket"
    assert server.handle_request("GBYE 1234.0") == "THNX See ya!"
    assert server.handle_request("GBYE 1234.0") == "FAIL invalid ticket"
    assert server.handle_request("XXXX") == "FAIL invalid request"


def test_handle_request_runs_out():
    server = quiet_server()
    for pid in (5, 6, 7):
        assert server.handle_request(f"HELO {pid}").startswith("TICK ")
    assert server.handle_request("HELO 8") == "FAIL no tickets available"


def test_narration_goes_to_log():
    log = io.StringIO()
    server = LicenseServer(None, TicketTable(log=log), log=log)
    server.handle_request("HELO 55", ("127.0.0.1", 4000))
    assert "\t\tSERVER: SAID: TICK 55.0 (127.0.0.1:4000)" in log.getvalue()


def test_reply_sent_over_udp():
    server_sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    client_sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        server_sock.bind(("127.0.0.1", 0))
        client_sock.bind(("127.0.0.1", 0))
        client_sock.settimeout(5)
        server = quiet_server(server_sock)
        response = server.handle_request("HELO 321", client_sock.getsockname())
        data, _ = client_sock.recvfrom(128)
        assert data.decode() == response
        assert response == "TICK 321.0"
    finally:
        server_sock.close()
        client_sock.close()


def test_serve_forever_needs_socket():
    with pytest.raises(ValueError):
        quiet_server().serve_forever()


def test_main_rejects_unknown_option():
    with pytest.raises(SystemExit) as info:
        main(["--bogus"])
    assert info.value.code == 2