"""Split a string into an argument list on a set of delimiter characters."""

from __future__ import annotations

import re
import sys

DEFAULT_DELIMITERS = " \t"


def make_argv(text: str, delimiters: str = DEFAULT_DELIMITERS) -> list[str]:
    """Split ``text`` at any character in ``delimiters``, dropping empty tokens."""
    if not delimiters:
        return [text] if text else []
    pattern = f"[{re.escape(delimiters)}]"
    return [token for token in re.split(pattern, text) if token]


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if len(args) != 1:
        print("Usage: argtest string", file=sys.stderr)
        return 1
    print("The argument array contains:")
    for index, token in enumerate(make_argv(args[0])):
        print(f"{index}:{token}")
    return 0