"""A UDP license server that hands out a fixed number of tickets."""

from __future__ import annotations

import argparse
import os
import re
import socket
import sys
import time
from typing import Callable, TextIO

from unixplay.socklib import get_internet_address, make_dgram_server_socket

SERVER_PORTNUM = 2020
MSGLEN = 128
MAXUSERS = 3
TICKET_AVAIL = 0
RECLAIM_INTERVAL = 5

_TICKET = re.compile(r"\s*([+-]?\d+)\.\s*([+-]?\d+)")
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class TicketError(Exception):
    """Raised when a ticket cannot be issued or is not recognised."""


def _parse_pid(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def _parse_ticket(ticket: str) -> tuple[int, int] | None:
    match = _TICKET.match(ticket)
    if match is None:
        return None
    return int(match.group(1)), int(match.group(2))


def _process_alive(pid: int) -> bool:
    try:
        os.kill(pid, 0)
    except ProcessLookupError:
        return False
    except PermissionError:
        return True
    return True


def narrate(msg1: str, msg2: str, client: tuple | None = None, out: TextIO | None = None) -> None:
    """Write a line of server chatter to ``out`` (standard error by default)."""
    stream = sys.stderr if out is None else out
    line = f"\t\tSERVER: {msg1} {msg2} "
    if client is not None:
        host, port = get_internet_address(client)
        line += f"({host}:{port})"
    print(line, file=stream)


class TicketTable:
    """Fixed slots, each free or holding the pid of the process using it."""

    def __init__(self, size: int = MAXUSERS, log: TextIO | None = None) -> None:
        self.slots = [TICKET_AVAIL] * size
        self.tickets_out = 0
        self.log = log

    def issue(self, pid: int) -> str:
        """Give ``pid`` a ticket of the form ``pid.slot``.

        Raises ``TicketError`` when every ticket is out.
        """
        if self.tickets_out >= len(self.slots):
            raise TicketError("no tickets available")
        try:
            slot = self.slots.index(TICKET_AVAIL)
        except ValueError:
            narrate("database corrupt", "", out=self.log)
            raise TicketError("database corrupt") from None
        self.slots[slot] = pid
        self.tickets_out += 1
        return f"{pid}.{slot}"

    def _holds(self, ticket: str) -> int | None:
        parsed = _parse_ticket(ticket)
        if parsed is None:
            return None
        pid, slot = parsed
        if not 0 <= slot < len(self.slots) or pid == TICKET_AVAIL:
            return None
        return slot if self.slots[slot] == pid else None

    def release(self, ticket: str) -> None:
        """Take back a ticket; raises ``TicketError`` if it is not held."""
        slot = self._holds(ticket)
        if slot is None:
            narrate("Bogus ticket", ticket, out=self.log)
            raise TicketError("invalid ticket")
        self.slots[slot] = TICKET_AVAIL
        self.tickets_out -= 1

    def validate(self, ticket: str) -> bool:
        """Return whether ``ticket`` is currently held."""
        if self._holds(ticket) is None:
            narrate("Bogus ticket", ticket, out=self.log)
            return False
        return True

    def reclaim(self, is_alive: Callable[[int], bool] = _process_alive) -> list[str]:
        """Free tickets whose holders are no longer alive; return them."""
        freed = []
        for slot, pid in enumerate(self.slots):
            if pid != TICKET_AVAIL and not is_alive(pid):
                ticket = f"{pid}.{slot}"
                narrate("freeing", ticket, out=self.log)
                self.slots[slot] = TICKET_AVAIL
                self.tickets_out -= 1
                freed.append(ticket)
        return freed


class LicenseServer:
    """Answers HELO, GBYE and VALD requests arriving as datagrams."""

    def __init__(
        self,
        sock: socket.socket | None = None,
        table: TicketTable | None = None,
        reclaim_interval: float | None = RECLAIM_INTERVAL,
        log: TextIO | None = None,
    ) -> None:
        self.sock = sock
        self.log = log
        self.table = table if table is not None else TicketTable(log=log)
        self.reclaim_interval = reclaim_interval

    def _respond(self, request: str) -> str:
        body = request[5:]
        if request.startswith("HELO"):
            try:
                return f"TICK {self.table.issue(_parse_pid(body))}"
            except TicketError as err:
                return f"FAIL {err}"
        if request.startswith("GBYE"):
            try:
                self.table.release(body)
            except TicketError as err:
                return f"FAIL {err}"
            return "THNX See ya!"
        if request.startswith("VALD"):
            if self.table.validate(body):
                return "GOOD Valid ticket"
            return "FAIL invalid ticket"
        return "FAIL invalid request"

    def handle_request(self, request: str, client: tuple | None = None) -> str:
        """Act on one request, send the reply to ``client`` and return it."""
        response = self._respond(request)
        narrate("SAID:", response, client, out=self.log)
        if self.sock is not None and client is not None:
            try:
                self.sock.sendto(response.encode("latin-1"), client)
            except OSError as err:
                print(f"SERVER sendto failed: {err}", file=self.log or sys.stderr)
        return response

    def serve_forever(self) -> None:
        """Receive and answer requests, reclaiming dead tickets periodically."""
        if self.sock is None:
            raise ValueError("server has no socket")
        deadline = None
        if self.reclaim_interval is not None:
            deadline = time.monotonic() + self.reclaim_interval
        while True:
            if deadline is not None:
                self.sock.settimeout(max(0.0, deadline - time.monotonic()))
            try:
                data, client = self.sock.recvfrom(MSGLEN)
            except socket.timeout:
                self.table.reclaim()
                deadline = time.monotonic() + self.reclaim_interval
                continue
            except InterruptedError:
                continue
            request = data.decode("latin-1")
            narrate("GOT:", request, client, out=self.log)
            self.handle_request(request, client)


def main(argv: list[str] | None = None) -> int:
    """Run the license server on its well-known port."""
    parser = argparse.ArgumentParser(prog="lserv")
    parser.add_argument(
        "--no-reclaim",
        action="store_true",
        help="never take back tickets from dead processes",
    )
    args = parser.parse_args(argv)
    try:
        sock = make_dgram_server_socket(SERVER_PORTNUM)
    except OSError as err:
        print(f"make socket: {err}", file=sys.stderr)
        return 1
    interval = None if args.no_reclaim else RECLAIM_INTERVAL
    with sock:
        try:
            LicenseServer(sock, reclaim_interval=interval).serve_forever()
        except KeyboardInterrupt:
            return 0
    return 0