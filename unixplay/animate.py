"""Bounce strings back and forth across a terminal, one thread per string."""

from __future__ import annotations

import argparse
import curses
import os
import random
import threading
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

MAXMSG = 10
TUNIT_MS = 20
SINGLE_MESSAGE = " hello "
SINGLE_ROW = 10
SINGLE_DELAY_MS = 200


@dataclass
class Bouncer:
    """A string moving along one row and turning round at the edges.

    ``delay`` is the pause between moves in milliseconds. A padded bouncer
    is drawn with a blank on each side, which erases its previous position.
    """

    text: str
    row: int
    col: int = 0
    delay: int = SINGLE_DELAY_MS
    direction: int = 1
    padded: bool = True

    def __post_init__(self) -> None:
        if self.direction not in (1, -1):
            raise ValueError("direction must be +1 or -1")

    @property
    def display(self) -> str:
        """The text as it is drawn on the screen."""
        return f" {self.text} " if self.padded else self.text

    @property
    def length(self) -> int:
        """The number of columns the drawn text takes up."""
        return len(self.display)

    def step(self, width: int) -> int:
        """Move one column and turn round at either edge; return the new column."""
        self.col += self.direction
        if self.col <= 0 and self.direction == -1:
            self.direction = 1
        elif self.col + self.length >= width and self.direction == 1:
            self.direction = -1
        return self.col

    def reverse(self) -> None:
        """Turn round."""
        self.direction = -self.direction


def make_bouncers(strings: Iterable[str], rng: random.Random | None = None) -> list[Bouncer]:
    """Give each of at most ``MAXMSG`` strings its own row, speed and direction."""
    rng = random.Random(os.getpid()) if rng is None else rng
    bouncers = []
    for row, text in enumerate(list(strings)[:MAXMSG]):
        delay = (1 + rng.randrange(15)) * TUNIT_MS
        direction = 1 if rng.randrange(2) else -1
        bouncers.append(Bouncer(text, row, 0, delay, direction, padded=True))
    return bouncers


def apply_key(bouncers: Sequence[Bouncer], key: str | int) -> bool:
    """Act on one keystroke; return False when it asks to quit.

    ``Q`` quits, a space turns every string round, a digit turns that
    string round, ``f`` halves the delay (while above 2 ms) and ``s``
    doubles it.
    """
    if isinstance(key, int):
        if key < 0 or key >= 0x110000:
            return True
        key = chr(key)
    if key == "Q":
        return False
    if key == " ":
        for bouncer in bouncers:
            bouncer.reverse()
    elif key.isdigit() and key.isascii():
        index = int(key)
        if index < len(bouncers):
            bouncers[index].reverse()
    elif key == "f":
        for bouncer in bouncers:
            if bouncer.delay > 2:
                bouncer.delay //= 2
    elif key == "s":
        for bouncer in bouncers:
            bouncer.delay *= 2
    return True


def _animate(screen, bouncer: Bouncer, lock: threading.Lock, stop: threading.Event) -> None:
    while not stop.wait(bouncer.delay / 1000):
        with lock:
            if stop.is_set():
                return
            lines, cols = screen.getmaxyx()
            try:
                screen.addstr(bouncer.row, bouncer.col, bouncer.display)
            except curses.error:
                pass
            try:
                screen.move(lines - 1, cols - 1)
            except curses.error:
                pass
            screen.refresh()
        bouncer.step(cols)


def _run(screen, bouncers: list[Bouncer], rng: random.Random, show_help: bool) -> None:
    lock = threading.Lock()
    stop = threading.Event()
    screen.clear()
    lines, cols = screen.getmaxyx()
    if show_help:
        try:
            screen.addstr(lines - 1, 0, f"'Q' to quit, '0'..'{len(bouncers) - 1}' to bounce")
        except curses.error:
            pass
        for bouncer in bouncers:
            bouncer.col = rng.randrange(max(1, cols - bouncer.length - 3))
    screen.refresh()
    threads = [
        threading.Thread(target=_animate, args=(screen, b, lock, stop), daemon=True)
        for b in bouncers
    ]
    for thread in threads:
        thread.start()
    try:
        while apply_key(bouncers, screen.getch()):
            pass
    finally:
        with lock:
            stop.set()
        for thread in threads:
            thread.join()


def main(argv: list[str] | None = None) -> int:
    """Animate the strings given, or a single ``hello`` with ``--single``."""
    parser = argparse.ArgumentParser(prog="tanimate")
    parser.add_argument("strings", nargs="*")
    parser.add_argument(
        "--single", action="store_true", help="bounce one message; f/s change speed"
    )
    args = parser.parse_args(argv)
    rng = random.Random(os.getpid())
    if args.single:
        bouncers = [
            Bouncer(SINGLE_MESSAGE, SINGLE_ROW, 0, SINGLE_DELAY_MS, 1, padded=False)
        ]
    elif args.strings:
        bouncers = make_bouncers(args.strings, rng)
    else:
        print("usage: tanimate string ..")
        return 1
    try:
        curses.wrapper(_run, bouncers, rng, not args.single)
    except KeyboardInterrupt:
        return 0
    return 0