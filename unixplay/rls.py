"""A remote directory listing server and its client."""

from __future__ import annotations

import socket
import subprocess
import sys

from unixplay.socklib import connect_to_server, make_server_socket

PORTNUM = 15000
BUFSIZ = 8192
MAX_DIRNAME = BUFSIZ - 5


def sanitize(dirname: str) -> str:
    """Keep only slashes and ASCII letters and digits."""
    return "".join(c for c in dirname if c == "/" or (c.isascii() and c.isalnum()))


def handle_client(conn: socket.socket) -> str:
    """Read a directory name from ``conn`` and send back its ``ls`` listing.

    Returns the sanitized directory name. Raises ``EOFError`` if the
    client sends nothing.
    """
    with conn.makefile("rb") as reader:
        line = reader.readline(MAX_DIRNAME)
    if not line:
        raise EOFError("reading dirname")
    dirname = sanitize(line.decode("latin-1"))
    command = ["ls", dirname] if dirname else ["ls"]
    result = subprocess.run(command, stdout=subprocess.PIPE, check=False)
    conn.sendall(result.stdout)
    return dirname


def serve(sock: socket.socket, max_calls: int | None = None) -> int:
    """Answer listing requests on a listening socket; returns calls served."""
    served = 0
    while max_calls is None or served < max_calls:
        conn, _ = sock.accept()
        with conn:
            handle_client(conn)
        served += 1
    return served


def request_listing(host: str, directory: str, port: int = PORTNUM) -> bytes:
    """Ask the server at ``host`` for a listing of ``directory``."""
    chunks = []
    with connect_to_server(host, port) as sock:
        sock.sendall(directory.encode() + b"\n")
        while chunk := sock.recv(BUFSIZ):
            chunks.append(chunk)
    return b"".join(chunks)


def server_main(argv: list[str] | None = None) -> int:
    """Run the listing server until interrupted."""
    args = sys.argv[1:] if argv is None else list(argv)
    if args:
        print("usage: rlsd", file=sys.stderr)
        return 1
    try:
        sock = make_server_socket(PORTNUM)
    except OSError as err:
        print(f"bind: {err}", file=sys.stderr)
        return 1
    with sock:
        try:
            serve(sock)
        except KeyboardInterrupt:
            return 0
        except EOFError as err:
            print(err, file=sys.stderr)
            return 1
        except OSError as err:
            print(f"accept: {err}", file=sys.stderr)
            return 1
    return 0


def client_main(argv: list[str] | None = None) -> int:
    """Print the remote listing of a directory."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 2:
        print("usage: rls hostname directory", file=sys.stderr)
        return 1
    host, directory = args
    try:
        listing = request_listing(host, directory)
    except OSError as err:
        print(f"connect: {err}", file=sys.stderr)
        return 1
    sys.stdout.flush()
    sys.stdout.buffer.write(listing)
    sys.stdout.buffer.flush()
    return 0