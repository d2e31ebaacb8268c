"""Count words in files, one thread per file."""

from __future__ import annotations

import re
import sys
from concurrent.futures import ThreadPoolExecutor

# A word ends where an ASCII letter or digit is followed by anything else.
# A word running up to the end of the data has no such follower and is not
# counted.
_WORD_END_TEXT = re.compile(r"[A-Za-z0-9](?=[^A-Za-z0-9])")
_WORD_END_BYTES = re.compile(rb"[A-Za-z0-9](?=[^A-Za-z0-9])")


def count_words(data: str | bytes) -> int:
    """Return how many times a letter or digit is followed by another character."""
    if isinstance(data, (bytes, bytearray)):
        return len(_WORD_END_BYTES.findall(data))
    return len(_WORD_END_TEXT.findall(data))


def count_file(path: str) -> int:
    """Count the words in the file at ``path``; raises ``OSError`` if unreadable."""
    with open(path, "rb") as fh:
        return count_words(fh.read())


def _count_or_report(path: str) -> int:
    try:
        return count_file(path)
    except OSError as err:
        print(f"{path}: {err.strerror or err}", file=sys.stderr)
        return 0


def count_files(paths: list[str]) -> list[tuple[str, int]]:
    """Count each file in its own thread; return ``(path, count)`` in order.

    A file that cannot be read is reported on standard error and counts 0.
    """
    paths = list(paths)
    if not paths:
        return []
    with ThreadPoolExecutor(max_workers=len(paths)) as pool:
        counts = list(pool.map(_count_or_report, paths))
    return list(zip(paths, counts))


def main(argv: list[str] | None = None) -> int:
    """Print the word count of two files and their total."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 2:
        print("usage: twordcount file1 file2")
        return 1
    results = count_files(args)
    for path, count in results:
        print(f"{count:5d}: {path}")
    total = sum(count for _, count in results)
    print(f"{total:5d}: total words")
    return 0