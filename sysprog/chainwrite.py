"""A chain of processes all writing their identity into one file."""

from __future__ import annotations

import os
import sys
import time
from enum import Enum

from .processes import ProcessRecord, _atoi
from .restart import close_fd, write_all

PAUSE = 1.0


class WriteMode(Enum):
    """How each process of the chain opens and writes the file."""

    APPEND = "append"
    FPRINTF = "fprintf"
    ONE_WRITE = "onewrite"
    OPEN = "open"
    OPEN_SEEK = "openseek"
    OPEN_FORK = "openfork"


_APPEND_FLAGS = os.O_WRONLY | os.O_CREAT | os.O_APPEND
_TRUNC_FLAGS = os.O_WRONLY | os.O_CREAT | os.O_TRUNC
_CREATE_PERMS = 0o604
_SEEK_PERMS = 0o644


def _two_parts(fd: int, record: ProcessRecord, pause: bool) -> None:
    write_all(fd, f"i:{record.index} process:{record.pid} ".encode())
    if pause:
        time.sleep(PAUSE)
    write_all(fd, f"parent:{os.getppid()} child:{record.child}\n".encode())


def _write(record: ProcessRecord, filename: str, mode: WriteMode, shared: int | None) -> None:
    if mode is WriteMode.OPEN_FORK:
        assert shared is not None
        _two_parts(shared, record, True)
        return
    if mode is WriteMode.FPRINTF:
        with open(filename, "a", encoding="utf-8") as fh:
            fh.write(
                f"i:{record.index} process:{record.pid}. "
                f"parent:{record.ppid} child:{record.child}\n"
            )
        time.sleep(PAUSE)
        return
    if mode is WriteMode.OPEN_SEEK:
        fd = os.open(filename, os.O_WRONLY | os.O_CREAT, _SEEK_PERMS)
    else:
        flags = _TRUNC_FLAGS if mode is WriteMode.OPEN else _APPEND_FLAGS
        fd = os.open(filename, flags, _CREATE_PERMS)
    try:
        if mode is WriteMode.OPEN_SEEK:
            os.lseek(fd, 0, os.SEEK_END)
            _two_parts(fd, record, False)
        elif mode is WriteMode.ONE_WRITE:
            write_all(
                fd,
                (
                    f"i:{record.index} process:{record.pid}. "
                    f"parent:{record.ppid} child:{record.child}\n "
                ).encode(),
            )
            time.sleep(PAUSE)
        else:
            _two_parts(fd, record, True)
    finally:
        close_fd(fd)


def _cleanup(shared: int | None, child: int) -> None:
    if shared is not None:
        close_fd(shared)
    if child > 0:
        try:
            os.waitpid(child, 0)
        except ChildProcessError:
            pass


def chain_write(n: int, filename: str, mode: WriteMode = WriteMode.APPEND) -> ProcessRecord:
    """Fork a chain of processes that each write their identity to ``filename``.

    The chain has ``n + 1`` processes (``n`` for OPEN_SEEK, whose count
    starts at 1). Each process waits for its child before exiting, so
    the file is complete when this returns the calling process's record.
    Raises OSError if the calling process cannot fork or write.
    """
    filename = os.fspath(filename)
    origin = os.getpid()
    shared = (
        os.open(filename, _TRUNC_FLAGS, _CREATE_PERMS)
        if mode is WriteMode.OPEN_FORK
        else None
    )
    index = 1 if mode is WriteMode.OPEN_SEEK else 0
    child = 0
    while index < n:
        sys.stdout.flush()
        sys.stderr.flush()
        try:
            child = os.fork()
        except OSError as exc:
            if os.getpid() == origin:
                _cleanup(shared, 0)
                raise
            try:
                os.write(2, f"Failed to fork: {exc.strerror}\n".encode())
                _cleanup(shared, 0)
            finally:
                os._exit(1)
        if child:
            break
        index += 1

    record = ProcessRecord(index, os.getpid(), os.getppid(), child)
    if os.getpid() == origin:
        try:
            _write(record, filename, mode, shared)
        finally:
            _cleanup(shared, child)
        return record

    code = 0
    try:
        try:
            _write(record, filename, mode, shared)
        except OSError as exc:
            os.write(2, f"Failed to open file: {exc.strerror}\n".encode())
            code = 1
        finally:
            _cleanup(shared, child)
    finally:
        os._exit(code)


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    usage = "Usage: chainwrite [mode] processes filename"
    if len(args) == 3:
        try:
            mode = WriteMode(args[0])
        except ValueError:
            print(usage, file=sys.stderr)
            return 1
        args = args[1:]
    elif len(args) == 2:
        mode = WriteMode.APPEND
    else:
        print(usage, file=sys.stderr)
        return 1
    try:
        chain_write(_atoi(args[0]), args[1], mode)
    except OSError as exc:
        print(f"Failed to open file: {exc.strerror}", file=sys.stderr)
        return 1
    return 0