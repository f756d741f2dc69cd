"""An in-memory log of timestamped messages."""

from __future__ import annotations

import os
import time

from .tracelist import Entry


class MessageLog:
    """Collects messages in order and renders or saves them."""

    def __init__(self) -> None:
        self._entries: list[Entry] = []

    def __len__(self) -> int:
        return len(self._entries)

    def add(self, message: str, when: float | None = None) -> None:
        """Append ``message`` stamped with ``when`` (default: now)."""
        self._entries.append(Entry(time.time() if when is None else when, message))

    def clear(self) -> None:
        """Discard every logged message."""
        self._entries.clear()

    def text(self) -> str:
        """Return the whole log as one string, one message per line."""
        return "".join(
            f"{time.ctime(entry.time)}: {entry.text}\n" for entry in self._entries
        )

    def save(self, filename: str | os.PathLike[str]) -> None:
        """Write the log to ``filename``, replacing its contents."""
        with open(filename, "w", encoding="utf-8") as fh:
            fh.write(self.text())