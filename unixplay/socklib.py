"""Helpers for building stream and datagram Internet sockets."""

from __future__ import annotations

import socket

BACKLOG = 1


def _local_address() -> str:
    """Return the IPv4 address this host's name resolves to."""
    return socket.gethostbyname(socket.gethostname())


def make_internet_address(hostname: str, port: int) -> tuple[str, int]:
    """Resolve ``hostname`` and pair it with ``port`` as an IPv4 address.

    Raises ``socket.gaierror`` if the name cannot be resolved.
    """
    return socket.gethostbyname(hostname), int(port)


def get_internet_address(addr: tuple) -> tuple[str, int]:
    """Split a socket address into its dotted-quad host and port."""
    host, port = addr[0], addr[1]
    return str(host), int(port)


def make_server_socket(
    portnum: int, backlog: int = BACKLOG, host: str | None = None
) -> socket.socket:
    """Return a TCP socket bound to ``host``:``portnum`` and listening.

    ``host`` defaults to the address of this machine's hostname.
    Any failure is raised as ``OSError``.
    """
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        address = make_internet_address(host or _local_address(), portnum)
        sock.bind(address)
        sock.listen(backlog)
    except OSError:
        sock.close()
        raise
    return sock


def connect_to_server(host: str, portnum: int) -> socket.socket:
    """Return a TCP socket connected to ``host``:``portnum``."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        sock.connect(make_internet_address(host, portnum))
    except OSError:
        sock.close()
        raise
    return sock


def make_dgram_server_socket(portnum: int, host: str | None = None) -> socket.socket:
    """Return a UDP socket bound to ``host``:``portnum``."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        sock.bind(make_internet_address(host or _local_address(), portnum))
    except OSError:
        sock.close()
        raise
    return sock


def make_dgram_client_socket() -> socket.socket:
    """Return an unbound UDP socket."""
    return socket.socket(socket.AF_INET, socket.SOCK_DGRAM)