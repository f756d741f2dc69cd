"""File-descriptor helpers that retry on interrupted system calls."""

from __future__ import annotations

import os
import select

BLKSIZE = getattr(select, "PIPE_BUF", 512)


def close_fd(fd: int) -> None:
    """Close ``fd``, retrying if the call is interrupted by a signal."""
    while True:
        try:
            os.close(fd)
            return
        except InterruptedError:
            continue


def wait_child() -> tuple[int, int]:
    """Wait for any child process and return ``(pid, status)``.

    Raises ChildProcessError when there are no children to wait for.
    """
    while True:
        try:
            return os.wait()
        except InterruptedError:
            continue


def read_fd(fd: int, size: int) -> bytes:
    """Read up to ``size`` bytes from ``fd``; an empty result means end of file."""
    while True:
        try:
            return os.read(fd, size)
        except InterruptedError:
            continue


def write_all(fd: int, data: bytes) -> int:
    """Write all of ``data`` to ``fd`` and return the number of bytes written."""
    view = memoryview(data)
    total = 0
    while total < len(view):
        try:
            written = os.write(fd, view[total:])
        except InterruptedError:
            continue
        total += written
    return total


def read_block(fd: int, size: int) -> bytes:
    """Read exactly ``size`` bytes from ``fd``.

    Returns ``b""`` if end of file comes before any byte is read, and
    raises EOFError if it comes after only part of the block was read.
    """
    chunks: list[bytes] = []
    remaining = size
    while remaining > 0:
        chunk = read_fd(fd, remaining)
        if not chunk:
            if not chunks:
                return b""
            raise EOFError(
                f"end of file after {size - remaining} of {size} bytes"
            )
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


def read_write(fromfd: int, tofd: int) -> int:
    """Copy at most one block from ``fromfd`` to ``tofd``.

    Returns the number of bytes copied, 0 at end of file.
    """
    data = read_fd(fromfd, BLKSIZE)
    if not data:
        return 0
    write_all(tofd, data)
    return len(data)


def copy_fd(fromfd: int, tofd: int) -> int:
    """Copy everything from ``fromfd`` to ``tofd`` and return the byte count."""
    total = 0
    while (copied := read_write(fromfd, tofd)) > 0:
        total += copied
    return total