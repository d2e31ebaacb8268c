"""Send datagrams to a host and port, and receive and acknowledge them."""

from __future__ import annotations

import socket
import sys
from typing import TextIO

from unixplay.socklib import (
    get_internet_address,
    make_dgram_client_socket,
    make_dgram_server_socket,
    make_internet_address,
)

BUFSIZ = 8192


def send_datagram(host: str, port: int, message: str | bytes) -> int:
    """Send ``message`` to ``host``:``port``; return the bytes sent."""
    data = message.encode() if isinstance(message, str) else message
    address = make_internet_address(host, port)
    with make_dgram_client_socket() as sock:
        return sock.sendto(data, address)


def reply_text(message: str | bytes) -> str:
    """Return the acknowledgement sent back for ``message``."""
    data = message.encode() if isinstance(message, str) else message
    return f"Thanks for your {len(data)} char message\n"


def format_sender(addr: tuple) -> str:
    """Return the line that reports who sent a datagram."""
    host, port = get_internet_address(addr)
    return f"  from: {host}:{port}"


def receive(
    sock: socket.socket,
    out: TextIO | None = None,
    reply: bool = False,
    count: int | None = None,
) -> int:
    """Report datagrams arriving on ``sock``, optionally answering each.

    Stops at an empty datagram or after ``count`` messages; returns how
    many were reported.
    """
    stream = sys.stdout if out is None else out
    received = 0
    while count is None or received < count:
        data, addr = sock.recvfrom(BUFSIZ)
        if not data:
            break
        print(f"dgrecv: got a message: {data.decode(errors='replace')}", file=stream)
        print(format_sender(addr), file=stream)
        stream.flush()
        if reply:
            sock.sendto(reply_text(data).encode(), addr)
        received += 1
    return received


def sender_main(argv: list[str] | None = None) -> int:
    """Send the message given on the command line to host and port."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 3:
        print("usage: dgsend host port 'message'", file=sys.stderr)
        return 1
    host, port_text, message = args
    try:
        port = int(port_text)
    except ValueError:
        port = 0
    try:
        address = make_internet_address(host, port)
    except OSError as err:
        print(f"make addr: {err}", file=sys.stderr)
        return 4
    try:
        with make_dgram_client_socket() as sock:
            sock.sendto(message.encode(), address)
    except OSError as err:
        print(f"sendto failed: {err}", file=sys.stderr)
        return 3
    return 0


def receiver_main(argv: list[str] | None = None) -> int:
    """Listen on a port and report every datagram; ``--reply`` answers them."""
    args = sys.argv[1:] if argv is None else list(argv)
    reply = "--reply" in args
    args = [arg for arg in args if arg != "--reply"]
    try:
        port = int(args[0]) if args else 0
    except ValueError:
        port = 0
    if port <= 0:
        print("usage: dgrecv portnumber", file=sys.stderr)
        return 1
    try:
        sock = make_dgram_server_socket(port)
    except OSError as err:
        print(f"cannot make socket: {err}", file=sys.stderr)
        return 2
    with sock:
        try:
            receive(sock, reply=reply)
        except KeyboardInterrupt:
            return 0
    return 0