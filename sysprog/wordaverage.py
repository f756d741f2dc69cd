"""Average number of words per non-empty line."""

from __future__ import annotations

import sys

LINE_DELIMITER = "\n"
WORD_DELIMITER = " "

SAMPLE = "Hello, World!\n\nThis is a string with multiple newlines\nand spaces."


def _count_words(line: str) -> int:
    return sum(1 for word in line.split(WORD_DELIMITER) if word)


def word_average(text: str) -> float:
    """Return words per line, skipping empty lines; 0.0 if there are none."""
    lines = [line for line in text.split(LINE_DELIMITER) if line]
    if not lines:
        return 0.0
    return sum(_count_words(line) for line in lines) / len(lines)


def main(argv: list[str] | None = None) -> int:
    text = " ".join(sys.argv[1:] if argv is None else argv) or SAMPLE
    print(f"word average is {word_average(text):f}")
    return 0