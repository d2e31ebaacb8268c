"""A tiny infix calculator that hands its work to ``dc`` over two pipes."""

from __future__ import annotations

import argparse
import contextlib
import re
import shlex
import subprocess
import sys
from collections.abc import Sequence

_EXPRESSION = re.compile(r"\s*([+-]?\d+)([-+*/^]+)\s*([+-]?\d+)")


def parse_expression(line: str) -> tuple[int, str, int]:
    """Split ``number op number`` into its parts.

    No space may come between the first number and the operator. A run of
    operator characters is accepted and its first one is used. Raises
    ``ValueError`` on anything else.
    """
    match = _EXPRESSION.match(line)
    if match is None:
        raise ValueError("syntax error")
    return int(match.group(1)), match.group(2)[0], int(match.group(3))


def to_dc_program(left: int, op: str, right: int) -> str:
    """Return the reverse-Polish text that makes dc print ``left op right``."""
    return f"{left}\n{right}\n{op}\np\n"


class DcCalculator:
    """A running ``dc`` process fed one calculation at a time."""

    def __init__(self, command: Sequence[str] = ("dc", "-")) -> None:
        self._proc = subprocess.Popen(
            list(command),
            stdin=subprocess.PIPE,
            stdout=subprocess.PIPE,
            text=True,
        )

    def __enter__(self) -> DcCalculator:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def evaluate(self, left: int, op: str, right: int) -> str:
        """Send one calculation and return the line dc prints back.

        Raises ``EOFError`` once dc has gone away.
        """
        try:
            self._proc.stdin.write(to_dc_program(left, op, right))
            self._proc.stdin.flush()
        except BrokenPipeError:
            raise EOFError("dc is not running") from None
        answer = self._proc.stdout.readline()
        if not answer:
            raise EOFError("dc closed its output")
        return answer

    def close(self) -> None:
        """Close both pipes, which makes dc exit, and wait for it."""
        with contextlib.suppress(OSError):
            self._proc.stdin.close()
        self._proc.stdout.close()
        self._proc.wait()


def main(argv: list[str] | None = None) -> int:
    """Read expressions from standard input and print dc's answers."""
    parser = argparse.ArgumentParser(prog="tinybc")
    parser.add_argument("--command", default="dc -", help="calculator to run")
    args = parser.parse_args(argv)
    try:
        calc = DcCalculator(shlex.split(args.command))
    except OSError as err:
        print(f"Cannot run dc: {err}", file=sys.stderr)
        return 5
    with calc:
        while True:
            print("tinybc: ", end="", flush=True)
            line = sys.stdin.readline()
            if not line:
                break
            try:
                left, op, right = parse_expression(line)
            except ValueError:
                print("syntax error")
                continue
            try:
                answer = calc.evaluate(left, op, right)
            except EOFError:
                break
            print(f"{left} {op} {right} = {answer}", end="", flush=True)
    return 0