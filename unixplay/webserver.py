"""A minimal threaded HTTP/1.0 server that supports only GET."""

from __future__ import annotations

import os
import socket
import subprocess
import sys
import threading
import time
from typing import BinaryIO

from unixplay.socklib import make_server_socket

BUFSIZ = 8192
STATUS_URL = "status"

_CONTENT_TYPES = {
    "html": "text/html",
    "gif": "image/gif",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
}


class ServerStats:
    """Counters describing what the server has done since it started."""

    def __init__(self, started: float | None = None) -> None:
        self.started = time.time() if started is None else started
        self.requests = 0
        self.bytes_sent = 0
        self._lock = threading.Lock()

    def record_request(self) -> None:
        """Count one accepted call."""
        with self._lock:
            self.requests += 1

    def add_bytes(self, count: int) -> None:
        """Add ``count`` to the number of bytes sent out."""
        with self._lock:
            self.bytes_sent += count

    def report(self) -> str:
        """Return the text shown by the built-in status page."""
        with self._lock:
            requests, sent = self.requests, self.bytes_sent
        return (
            f"Server started: {time.ctime(self.started)}\n"
            f"Total requests: {requests}\n"
            f"Bytes sent out: {sent}\n"
        )


def file_type(name: str) -> str:
    """Return the text after the last dot of ``name``, or an empty string."""
    _, dot, extension = name.rpartition(".")
    return extension if dot else ""


def content_type(name: str) -> str:
    """Return the MIME type served for a file called ``name``."""
    return _CONTENT_TYPES.get(file_type(name), "text/plain")


def sanitize(path: str) -> str:
    """Rewrite a requested path so it stays below the served directory."""
    out: list[str] = []
    i = 0
    while i < len(path):
        if path.startswith("/../", i):
            i += 3
        elif path.startswith("//", i):
            i += 1
        else:
            out.append(path[i])
            i += 1
    cleaned = "".join(out)
    if cleaned.startswith("/"):
        cleaned = cleaned[1:]
    if cleaned in ("", "./", "./.."):
        cleaned = "."
    return cleaned


def http_reply(
    code: int, message: str, ctype: str, content: str | None = None
) -> bytes:
    """Build a status line, a content-type header and optional body text."""
    reply = f"HTTP/1.0 {code} {message}\r\nContent-type: {ctype}\r\n\r\n"
    if content is not None:
        reply += f"{content}\r\n"
    return reply.encode("latin-1")


def read_request(stream: BinaryIO) -> str:
    """Read the request line, then skip headers up to the blank CRLF line.

    Returns an empty string if the stream ends before any request line.
    """
    request = stream.readline(BUFSIZ).decode("latin-1")
    for header in iter(lambda: stream.readline(BUFSIZ), b""):
        if header == b"\r\n":
            break
    return request


class WebServer:
    """Serves files, directory listings, CGI programs and a status page."""

    def __init__(
        self,
        sock: socket.socket | None = None,
        root: str | os.PathLike[str] = ".",
        stats: ServerStats | None = None,
    ) -> None:
        self.sock = sock
        self.root = os.fspath(root)
        self.stats = stats if stats is not None else ServerStats()

    def _local(self, arg: str) -> str:
        return os.path.join(self.root, arg)

    def respond(self, request_line: str) -> bytes:
        """Return the full reply for one HTTP request line."""
        parts = request_line.split()
        if len(parts) < 2:
            return b""
        cmd, arg = parts[0], sanitize(parts[1])
        if cmd != "GET":
            return http_reply(
                501, "Not Implemented", "text/plain", "That command is not implemented"
            )
        if arg == STATUS_URL:
            return http_reply(200, "OK", "text/plain") + self.stats.report().encode()
        path = self._local(arg)
        if not os.path.exists(path):
            return http_reply(
                404, "Not Found", "text/plain", "The item you seek is not here"
            )
        if os.path.isdir(path):
            reply = self._listing(arg, path)
        elif file_type(arg) == "cgi":
            reply = self._run_cgi(arg, path)
        else:
            reply = self._cat(arg, path)
        self.stats.add_bytes(len(reply))
        return reply

    def _listing(self, arg: str, path: str) -> bytes:
        body = [f"Listing of Directory {arg}\n"]
        try:
            names = [".", ".."] + sorted(os.listdir(path))
        except OSError:
            names = []
        body.extend(f"{name}\n" for name in names)
        return http_reply(200, "OK", "text/plain") + "".join(body).encode(
            "utf-8", errors="replace"
        )

    def _run_cgi(self, arg: str, path: str) -> bytes:
        header = b"HTTP/1.0 200 OK\r\n"
        try:
            result = subprocess.run(
                [os.path.abspath(path)],
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                check=False,
            )
        except OSError as err:
            return header + f"{arg}: {err.strerror}\n".encode()
        return header + result.stdout

    def _cat(self, arg: str, path: str) -> bytes:
        try:
            with open(path, "rb") as fh:
                data = fh.read()
        except OSError:
            return b""
        return http_reply(200, "OK", content_type(arg)) + data

    def handle(self, conn: socket.socket) -> bytes:
        """Read one request from ``conn``, send the reply and close it."""
        with conn:
            with conn.makefile("rb") as reader:
                request = read_request(reader)
            print(f"got a call: request = {request}", end="", flush=True)
            reply = self.respond(request)
            if reply:
                conn.sendall(reply)
        return reply

    def serve_forever(self) -> None:
        """Accept calls and handle each one in its own thread."""
        if self.sock is None:
            raise ValueError("server has no listening socket")
        while True:
            conn, _ = self.sock.accept()
            self.stats.record_request()
            threading.Thread(target=self.handle, args=(conn,), daemon=True).start()


def main(argv: list[str] | None = None) -> int:
    """Serve the current directory on the port given as the only argument."""
    args = sys.argv[1:] if argv is None else list(argv)
    if not args:
        print("usage: tws portnum", file=sys.stderr)
        return 1
    try:
        port = int(args[0])
        sock = make_server_socket(port)
    except (ValueError, OSError) as err:
        print(f"making socket: {err}", file=sys.stderr)
        return 2
    with sock:
        try:
            WebServer(sock).serve_forever()
        except KeyboardInterrupt:
            return 0
    return 0