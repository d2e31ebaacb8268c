"""Keep the current time in a file, guarded by record locks."""

from __future__ import annotations

import argparse
import fcntl
import os
import sys
import time
from collections.abc import Iterator
from contextlib import contextmanager

BUFLEN = 10


@contextmanager
def locked(fd: int, exclusive: bool = True) -> Iterator[int]:
    """Hold a whole-file record lock on ``fd``, waiting until it is granted.

    An exclusive lock needs ``fd`` open for writing, a shared one for reading.
    """
    fcntl.lockf(fd, fcntl.LOCK_EX if exclusive else fcntl.LOCK_SH)
    try:
        yield fd
    finally:
        fcntl.lockf(fd, fcntl.LOCK_UN)


def _stamp(fd: int, message: str) -> None:
    with locked(fd, exclusive=True):
        os.lseek(fd, 0, os.SEEK_SET)
        os.write(fd, message.encode("ascii"))


def _open_for_writing(path: str) -> int:
    return os.open(path, os.O_CREAT | os.O_TRUNC | os.O_WRONLY, 0o644)


def write_time(path: str, when: float | None = None) -> str:
    """Write the time ``when`` (default now) to ``path``; return the text."""
    message = time.ctime(when) + "\n"
    fd = _open_for_writing(path)
    try:
        _stamp(fd, message)
    finally:
        os.close(fd)
    return message


def read_time(path: str) -> str:
    """Return the contents of ``path`` read under a shared lock."""
    fd = os.open(path, os.O_RDONLY)
    try:
        with locked(fd, exclusive=False):
            chunks = []
            while chunk := os.read(fd, BUFLEN):
                chunks.append(chunk)
    finally:
        os.close(fd)
    return b"".join(chunks).decode("ascii", errors="replace")


def writer_main(argv: list[str] | None = None) -> int:
    """Rewrite the time into a file every second."""
    parser = argparse.ArgumentParser(prog="file_ts")
    parser.add_argument("filename")
    parser.add_argument("--count", type=int, default=None, help="stop after N writes")
    parser.add_argument("--interval", type=float, default=1.0)
    args = parser.parse_args(argv)
    try:
        fd = _open_for_writing(args.filename)
    except OSError as err:
        print(f"{args.filename}: {err.strerror}", file=sys.stderr)
        return 2
    written = 0
    try:
        while args.count is None or written < args.count:
            _stamp(fd, time.ctime() + "\n")
            written += 1
            time.sleep(args.interval)
    except KeyboardInterrupt:
        pass
    except OSError as err:
        print(f"write: {err}", file=sys.stderr)
        return 4
    finally:
        os.close(fd)
    return 0


def reader_main(argv: list[str] | None = None) -> int:
    """Print the time stored in a file."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        print("usage: file_tc filename", file=sys.stderr)
        return 1
    try:
        text = read_time(args[0])
    except OSError as err:
        print(f"{args[0]}: {err.strerror}", file=sys.stderr)
        return 3
    sys.stdout.write(text)
    sys.stdout.flush()
    return 0