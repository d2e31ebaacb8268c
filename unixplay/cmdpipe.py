"""Read from or write to a shell command as if it were a file."""

from __future__ import annotations

import argparse
import subprocess
import sys
from collections.abc import Iterable, Iterator

DEFAULT_COMMAND = "who|sort"


def read_command(command: str) -> Iterator[str]:
    """Run ``command`` with ``/bin/sh -c`` and yield its output lines."""
    with subprocess.Popen(command, shell=True, stdout=subprocess.PIPE, text=True) as proc:
        yield from proc.stdout


def numbered(lines: Iterable[str]) -> Iterator[str]:
    """Prefix each line with its index, counting from zero."""
    for index, line in enumerate(lines):
        yield f"{index:3d} {line}"


def write_command(command: str, text: str) -> int:
    """Feed ``text`` to ``command``'s standard input; return its exit status."""
    return subprocess.run(command, shell=True, input=text, text=True, check=False).returncode


def main(argv: list[str] | None = None) -> int:
    """Show a command's output with line numbers, or send text to it."""
    parser = argparse.ArgumentParser(prog="cmdpipe")
    parser.add_argument("command", nargs="?", default=DEFAULT_COMMAND)
    parser.add_argument("--plain", action="store_true", help="do not number lines")
    parser.add_argument("--send", metavar="TEXT", help="write TEXT to the command")
    args = parser.parse_args(argv)
    if args.send is not None:
        return write_command(args.command, args.send)
    lines = read_command(args.command)
    if not args.plain:
        lines = numbered(lines)
    for line in lines:
        sys.stdout.write(line)
    sys.stdout.flush()
    return 0