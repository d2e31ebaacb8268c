"""Small demonstrations of threads printing and sharing a counter."""

from __future__ import annotations

import argparse
import sys
import threading
import time
from collections.abc import Iterable
from typing import TextIO

NUM = 5


def repeat_message(
    message: str, times: int = NUM, delay: float = 1.0, out: TextIO | None = None
) -> None:
    """Write ``message`` ``times`` times, pausing ``delay`` seconds after each."""
    stream = sys.stdout if out is None else out
    for _ in range(times):
        stream.write(message)
        stream.flush()
        time.sleep(delay)


def run_concurrently(
    messages: Iterable[str],
    times: int = NUM,
    delay: float = 1.0,
    out: TextIO | None = None,
) -> None:
    """Repeat each message in its own thread and wait for all of them."""
    threads = [
        threading.Thread(target=repeat_message, args=(message, times, delay, out))
        for message in messages
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()


def increment_and_print(
    times: int = NUM, delay: float = 1.0, out: TextIO | None = None
) -> int:
    """Increment a counter while another thread prints it; return its final value."""
    stream = sys.stdout if out is None else out
    counter = 0

    def printer() -> None:
        for _ in range(times):
            print(f"count = {counter}", file=stream, flush=True)
            time.sleep(delay)

    thread = threading.Thread(target=printer)
    thread.start()
    for _ in range(times):
        counter += 1
        time.sleep(delay)
    thread.join()
    return counter


def main(argv: list[str] | None = None) -> int:
    """Run one of the demonstrations: single, multi or count."""
    parser = argparse.ArgumentParser(prog="threaddemo")
    parser.add_argument("mode", nargs="?", choices=["single", "multi", "count"], default="multi")
    parser.add_argument("--times", type=int, default=NUM)
    parser.add_argument("--delay", type=float, default=1.0)
    args = parser.parse_args(argv)
    if args.mode == "single":
        repeat_message("hello", args.times, args.delay)
        repeat_message("world\n", args.times, args.delay)
    elif args.mode == "multi":
        run_concurrently(["hello", "world\n"], args.times, args.delay)
    else:
        increment_and_print(args.times, args.delay)
    return 0