"""Reading lines, waiting on descriptors and copying between them."""

from __future__ import annotations

import select

from .restart import read_fd, read_write, write_all

BLKSIZE = 1024
FD_SETSIZE = 1024


def _valid_fd(fd: int) -> bool:
    return 0 <= fd < FD_SETSIZE


def read_line(fd: int, nbytes: int) -> bytes:
    """Read one newline-terminated line of fewer than ``nbytes`` bytes from ``fd``.

    Returns ``b""`` at end of file. Raises ValueError if end of file comes
    in the middle of a line or if no newline fits in ``nbytes - 1`` bytes.
    """
    line = bytearray()
    while len(line) < nbytes - 1:
        byte = read_fd(fd, 1)
        if not byte:
            if not line:
                return b""
            raise ValueError("end of file before newline")
        line += byte
        if byte == b"\n":
            return bytes(line)
    raise ValueError(f"no newline within {nbytes - 1} bytes")


def which_is_ready(fd1: int, fd2: int) -> int:
    """Block until ``fd1`` or ``fd2`` is readable and return that descriptor.

    ``fd1`` is preferred when both are ready. Raises ValueError for a
    descriptor outside the range select can watch.
    """
    if not (_valid_fd(fd1) and _valid_fd(fd2)):
        raise ValueError(f"descriptor out of range: {fd1}, {fd2}")
    ready, _, _ = select.select([fd1, fd2], [], [])
    return fd1 if fd1 in ready else fd2


def copy_two(fromfd1: int, tofd1: int, fromfd2: int, tofd2: int) -> int:
    """Copy ``fromfd1`` to ``tofd1`` and ``fromfd2`` to ``tofd2`` as data arrives.

    Stops as soon as either source reaches end of file or fails, and
    returns the total number of bytes copied. Returns 0 without copying
    if any descriptor is out of range.
    """
    if not all(_valid_fd(fd) for fd in (fromfd1, tofd1, fromfd2, tofd2)):
        return 0
    total = 0
    while True:
        try:
            ready, _, _ = select.select([fromfd1, fromfd2], [], [])
        except OSError:
            return total
        for source, target in ((fromfd1, tofd1), (fromfd2, tofd2)):
            if source not in ready:
                continue
            try:
                copied = read_write(source, target)
            except OSError:
                return total
            if copied <= 0:
                return total
            total += copied


def copy_file(fromfd: int, tofd: int) -> int:
    """Copy ``fromfd`` to ``tofd`` until end of file or an error.

    Returns the number of bytes written.
    """
    total = 0
    while True:
        try:
            data = read_fd(fromfd, BLKSIZE)
        except OSError:
            break
        if not data:
            break
        try:
            total += write_all(tofd, data)
        except OSError:
            break
    return total