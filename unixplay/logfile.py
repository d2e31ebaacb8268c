"""A log server on a Unix-domain datagram socket and its client."""

from __future__ import annotations

import argparse
import socket
import sys
import time
from typing import TextIO

SOCKNAME = "/tmp/logfilesock"
MSGLEN = 512


def format_entry(number: int, when: float, message: str) -> str:
    """Return the log line for message ``number`` received at ``when``."""
    return f"[{number:5d}] {time.ctime(when)} {message}"


def send_log_message(message: str | bytes, path: str = SOCKNAME) -> int:
    """Send ``message`` to the log server at ``path``; return bytes sent."""
    data = message.encode() if isinstance(message, str) else message
    with socket.socket(socket.AF_UNIX, socket.SOCK_DGRAM) as sock:
        return sock.sendto(data, path)


def serve_log(sock: socket.socket, out: TextIO | None = None, count: int | None = None) -> int:
    """Write a numbered, timestamped line for each datagram on ``sock``.

    Runs forever unless ``count`` is given; returns the lines written.
    """
    stream = sys.stdout if out is None else out
    written = 0
    while count is None or written < count:
        data = sock.recv(MSGLEN)
        message = data.decode(errors="replace")
        print(format_entry(written, time.time(), message), file=stream)
        stream.flush()
        written += 1
    return written


def server_main(argv: list[str] | None = None) -> int:
    """Bind the log socket and copy incoming messages to standard output."""
    parser = argparse.ArgumentParser(prog="logfiled")
    parser.add_argument("--socket", default=SOCKNAME, help="socket path to bind")
    args = parser.parse_args(argv)
    try:
        sock = socket.socket(socket.AF_UNIX, socket.SOCK_DGRAM)
    except OSError as err:
        print(f"socket: {err}", file=sys.stderr)
        return 2
    with sock:
        try:
            sock.bind(args.socket)
        except OSError as err:
            print(f"bind: {err}", file=sys.stderr)
            return 3
        try:
            serve_log(sock)
        except KeyboardInterrupt:
            return 0
    return 0


def client_main(argv: list[str] | None = None) -> int:
    """Send the one message given on the command line to the log server."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        print("usage: logfilec 'message'", file=sys.stderr)
        return 1
    try:
        send_log_message(args[0])
    except OSError as err:
        print(f"sendto: {err}", file=sys.stderr)
        return 3
    return 0