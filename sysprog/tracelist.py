"""A list that several independent traversers can walk at once."""

from __future__ import annotations

from dataclasses import dataclass

TRAV_INIT_SIZE = 8

_END = object()


@dataclass(frozen=True)
class Entry:
    """A timestamped piece of text."""

    time: float
    text: str


class TraversalList:
    """Append-only list read through numbered traversal keys."""

    def __init__(self) -> None:
        self._entries: list[Entry] = []
        self._cursors: list[object] = []

    def __len__(self) -> int:
        return len(self._entries)

    def add(self, entry: Entry) -> None:
        """Append ``entry`` to the end of the list."""
        self._entries.append(Entry(entry.time, entry.text))

    def access(self) -> int:
        """Start a new traversal at the head and return its key.

        Raises ValueError if the list is empty.
        """
        if not self._entries:
            raise ValueError("list is empty")
        if not self._cursors:
            self._cursors = [None] * TRAV_INIT_SIZE
            self._cursors[0] = 0
            return 0
        for key, cursor in enumerate(self._cursors):
            if cursor is None:
                self._cursors[key] = 0
                return key
        key = len(self._cursors)
        self._cursors.extend([None] * key)
        self._cursors[key] = 0
        return key

    def _check_key(self, key: int) -> None:
        if not 0 <= key < len(self._cursors):
            raise ValueError(f"invalid traversal key {key}")

    def get(self, key: int) -> Entry | None:
        """Return the next entry for ``key``, or None once the end is reached.

        Returning None releases the key; using it again raises ValueError.
        """
        self._check_key(key)
        cursor = self._cursors[key]
        if cursor is None:
            raise ValueError(f"traversal key {key} is not in use")
        if cursor is _END:
            self._cursors[key] = None
            return None
        entry = self._entries[cursor]
        self._cursors[key] = _END if cursor == len(self._entries) - 1 else cursor + 1
        return entry

    def free_key(self, key: int) -> None:
        """Release the traversal ``key``."""
        self._check_key(key)
        self._cursors[key] = None