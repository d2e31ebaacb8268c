"""Client side of the UDP license server: ask for, check and return tickets."""

from __future__ import annotations

import argparse
import os
import socket
import sys
import time
from typing import TextIO

from unixplay.socklib import make_dgram_client_socket, make_internet_address

SERVER_PORTNUM = 2020
MSGLEN = 128
V1_WORK_TIME = 10
V2_WORK_TIME = 15


class LicenseError(Exception):
    """Raised when the server refuses a request or answers nonsense."""


class LicenseClient:
    """Talks to a license server on behalf of this process."""

    def __init__(
        self,
        host: str | None = None,
        port: int = SERVER_PORTNUM,
        pid: int | None = None,
        timeout: float | None = None,
        log: TextIO | None = None,
    ) -> None:
        self.pid = os.getpid() if pid is None else pid
        self.log = log
        self.ticket: str | None = None
        self.server = make_internet_address(host or socket.gethostname(), port)
        self.sock = make_dgram_client_socket()
        self.sock.settimeout(timeout)

    def __enter__(self) -> LicenseClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _narrate(self, msg1: str, msg2: str) -> None:
        stream = sys.stderr if self.log is None else self.log
        print(f"CLIENT [{self.pid}]: {msg1} {msg2}", file=stream)

    def _syserr(self, what: str, err: OSError) -> None:
        stream = sys.stderr if self.log is None else self.log
        print(f"CLIENT [{self.pid}]: {what}: {err}", file=stream)

    def transaction(self, message: str) -> str:
        """Send ``message`` to the server and return its reply."""
        try:
            self.sock.sendto(message.encode("latin-1"), self.server)
        except OSError as err:
            self._syserr("sendto", err)
            raise
        try:
            data, _ = self.sock.recvfrom(MSGLEN)
        except OSError as err:
            self._syserr("recvfrom", err)
            raise
        return data.decode("latin-1")

    def get_ticket(self) -> str:
        """Return a ticket, asking the server only if none is held yet.

        Raises ``LicenseError`` if the server does not hand one out.
        """
        if self.ticket is not None:
            return self.ticket
        response = self.transaction(f"HELO {self.pid}")
        if response.startswith("TICK"):
            self.ticket = response[5:]
            self._narrate("got ticket", self.ticket)
            return self.ticket
        if response.startswith("FAIL"):
            self._narrate("Could not get ticket", response)
        else:
            self._narrate("Unknown message:", response)
        raise LicenseError(response)

    def release_ticket(self) -> None:
        """Give the held ticket back; does nothing if none is held."""
        if self.ticket is None:
            return
        response = self.transaction(f"GBYE {self.ticket}")
        if response.startswith("THNX"):
            self._narrate("released ticket OK", "")
            self.ticket = None
            return
        if response.startswith("FAIL"):
            self._narrate("release failed", response[5:])
        else:
            self._narrate("Unknown message:", response)
        raise LicenseError(response)

    def validate_ticket(self) -> bool:
        """Ask the server whether the held ticket is still good.

        Returns True when no ticket is held. A refused ticket is dropped.
        """
        if self.ticket is None:
            return True
        response = self.transaction(f"VALD {self.ticket}")
        self._narrate("Validated ticket: ", response)
        if response.startswith("GOOD"):
            return True
        if response.startswith("FAIL"):
            self.ticket = None
            return False
        self._narrate("Unknown message:", response)
        return False

    def close(self) -> None:
        """Close the socket to the server."""
        self.sock.close()


def _do_regular_work(client: LicenseClient, validate: bool, work_time: float | None) -> None:
    print("SuperSleep version 1.0 Running - Licensed Software", flush=True)
    if not validate:
        time.sleep(V1_WORK_TIME if work_time is None else work_time)
        return
    pause = V2_WORK_TIME if work_time is None else work_time
    time.sleep(pause)
    try:
        good = client.validate_ticket()
    except OSError:
        good = False
    if not good:
        print("Server errors. Please Try later.", flush=True)
        return
    time.sleep(pause)


def main(argv: list[str] | None = None) -> int:
    """Get a ticket, do the licensed work, then give the ticket back."""
    parser = argparse.ArgumentParser(prog="lclnt")
    parser.add_argument(
        "--validate", action="store_true", help="check the ticket halfway through"
    )
    parser.add_argument("--host", default=None, help="server host (default: this host)")
    parser.add_argument("--port", type=int, default=SERVER_PORTNUM)
    parser.add_argument("--work-time", type=float, default=None, help="seconds per sleep")
    args = parser.parse_args(argv)
    try:
        client = LicenseClient(args.host, args.port)
    except OSError as err:
        print(f"Cannot create socket: {err}", file=sys.stderr)
        return 1
    with client:
        try:
            client.get_ticket()
        except (LicenseError, OSError):
            return 0
        _do_regular_work(client, args.validate, args.work_time)
        try:
            client.release_ticket()
        except (LicenseError, OSError):
            pass
    return 0