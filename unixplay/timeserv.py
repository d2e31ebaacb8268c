"""A time-of-day server over TCP and the client that asks it the time."""

from __future__ import annotations

import argparse
import socket
import sys
import time

from unixplay.socklib import connect_to_server, make_server_socket

PORTNUM = 13000
BUFSIZ = 8192


def time_message(when: float | None = None) -> str:
    """Return the text the server sends for the moment ``when``."""
    if when is None:
        when = time.time()
    return "The time here is ..\n" + time.ctime(when) + "\n"


def serve_time(sock: socket.socket, max_calls: int | None = None) -> int:
    """Answer calls on a listening socket with the current time.

    Serves forever unless ``max_calls`` is given; returns the calls served.
    """
    served = 0
    while max_calls is None or served < max_calls:
        conn, _ = sock.accept()
        print("Wow! got a call!", flush=True)
        with conn:
            conn.sendall(time_message().encode("ascii"))
        served += 1
    return served


def fetch_time(host: str, port: int) -> str:
    """Connect to a time server and return everything it sends."""
    chunks = []
    with connect_to_server(host, port) as sock:
        while chunk := sock.recv(BUFSIZ):
            chunks.append(chunk)
    return b"".join(chunks).decode("ascii", errors="replace")


def server_main(argv: list[str] | None = None) -> int:
    """Run the time server until interrupted."""
    parser = argparse.ArgumentParser(prog="timeserv")
    parser.add_argument("port", nargs="?", type=int, default=PORTNUM)
    args = parser.parse_args(argv)
    try:
        sock = make_server_socket(args.port)
    except OSError as err:
        print(f"bind: {err}", file=sys.stderr)
        return 1
    with sock:
        try:
            serve_time(sock)
        except KeyboardInterrupt:
            return 0
        except OSError as err:
            print(f"accept: {err}", file=sys.stderr)
            return 1
    return 0


def client_main(argv: list[str] | None = None) -> int:
    """Ask a time server for the time and print the answer."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 2:
        print("usage: timeclnt hostname portnumber", file=sys.stderr)
        return 1
    host, port_text = args
    try:
        port = int(port_text)
    except ValueError:
        print(f"{port_text}: not a port number", file=sys.stderr)
        return 1
    try:
        text = fetch_time(host, port)
    except OSError as err:
        print(f"connect: {err}", file=sys.stderr)
        return 1
    sys.stdout.write(text)
    sys.stdout.flush()
    return 0