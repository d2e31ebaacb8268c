"""Watch several files for input at once, reporting timeouts."""

from __future__ import annotations

import os
import select
import sys
from collections.abc import Iterator, Sequence

BUFSIZ = 8192


def watch(paths: Sequence[str], timeout: float) -> Iterator[tuple[str | None, bytes]]:
    """Yield ``(path, data)`` whenever one of ``paths`` has input.

    Yields ``(None, b"")`` each time ``timeout`` seconds pass with no input.
    Runs until the caller stops; the files are closed when it does.
    """
    opened: list[tuple[str, int]] = []
    try:
        for path in paths:
            opened.append((path, os.open(path, os.O_RDONLY)))
        while True:
            ready, _, _ = select.select([fd for _, fd in opened], [], [], timeout)
            if not ready:
                yield None, b""
                continue
            for path, fd in opened:
                if fd in ready:
                    yield path, os.read(fd, BUFSIZ)
    finally:
        for _, fd in opened:
            os.close(fd)


def _seconds(text: str) -> int:
    try:
        return int(text)
    except ValueError:
        return 0


def main(argv: list[str] | None = None) -> int:
    """Report input on two files, or that none came within the timeout."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 3:
        print("usage: selectwatch file file timeout", file=sys.stderr)
        return 1
    first, second, timeout_text = args
    seconds = _seconds(timeout_text)
    try:
        for path, data in watch([first, second], seconds):
            if path is None:
                print(f"no input after {seconds} seconds", flush=True)
                continue
            sys.stdout.write(f"{path}: ")
            sys.stdout.flush()
            sys.stdout.buffer.write(data + b"\n")
            sys.stdout.buffer.flush()
    except KeyboardInterrupt:
        return 0
    except OSError as err:
        name = err.filename if err.filename is not None else "read"
        print(f"{name}: {err.strerror}", file=sys.stderr)
        return {first: 2, second: 3}.get(err.filename, 5)
    return 0