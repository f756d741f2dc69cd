"""Small commands built on the descriptor helpers."""

from __future__ import annotations

import os
import sys

from .fileio import copy_file, read_line
from .restart import close_fd

READ_BUFSIZE = 80
REDIRECT_FILE = "myfile.txt"


def copyfile_main(argv: list[str] | None = None) -> int:
    """Copy one file into a newly created file and report the byte count."""
    args = sys.argv[1:] if argv is None else argv
    if len(args) != 2:
        print("Usage: copyfile from_file to_file", file=sys.stderr)
        return 1
    source, target = args
    try:
        fromfd = os.open(source, os.O_RDONLY)
    except OSError as exc:
        print(f"Failed to open input file: {exc.strerror}", file=sys.stderr)
        return 1
    try:
        try:
            tofd = os.open(target, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
        except OSError as exc:
            print(f"Failed to create output file: {exc.strerror}", file=sys.stderr)
            return 1
        try:
            copied = copy_file(fromfd, tofd)
        finally:
            close_fd(tofd)
    finally:
        close_fd(fromfd)
    print(f"{copied} bytes copied from {source} to {target}")
    return 0


def _copy_to_stdout(fd: int) -> None:
    copied = copy_file(fd, sys.stdout.fileno() if False else 1)
    print(f"Bytes read:{copied}", file=sys.stderr)
    sys.stderr.flush()


def monitor_main(argv: list[str] | None = None) -> int:
    """Copy two files to standard output, one from a parent and one from a child."""
    args = sys.argv[1:] if argv is None else argv
    if len(args) != 2:
        print("Usage: monitorfork file1 file2", file=sys.stderr)
        return 1
    fds = []
    for name in args:
        try:
            fds.append(os.open(name, os.O_RDONLY))
        except OSError as exc:
            print(f"Failed to open file {name}:{exc.strerror}", file=sys.stderr)
            for fd in fds:
                close_fd(fd)
            return 1
    fd1, fd2 = fds
    sys.stdout.flush()
    sys.stderr.flush()
    try:
        pid = os.fork()
    except OSError as exc:
        print(f"Failed to create child process: {exc.strerror}", file=sys.stderr)
        return 1
    if pid == 0:
        try:
            _copy_to_stdout(fd2)
        finally:
            os._exit(0)
    _copy_to_stdout(fd1)
    close_fd(fd1)
    close_fd(fd2)
    os.waitpid(pid, 0)
    return 0


def readline_main(argv: list[str] | None = None) -> int:
    """Echo each line of standard input to standard error with its length."""
    while True:
        try:
            line = read_line(0, READ_BUFSIZE)
        except (ValueError, OSError):
            print("readline returned -1", file=sys.stderr)
            return 1
        if not line:
            return 0
        print(f"Number of bytes read: {len(line)}", file=sys.stderr)
        sys.stderr.write(line.decode(errors="replace"))


def redirect_main(argv: list[str] | None = None) -> int:
    """Send standard output to myfile.txt (appending) and write "ok" to it."""
    try:
        fd = os.open(
            REDIRECT_FILE, os.O_WRONLY | os.O_CREAT | os.O_APPEND, 0o644
        )
    except OSError as exc:
        print(f"Failed to open {REDIRECT_FILE}: {exc.strerror}", file=sys.stderr)
        return 1
    try:
        os.dup2(fd, 1)
    except OSError as exc:
        print(f"Failed to redirect std output: {exc.strerror}", file=sys.stderr)
        return 1
    try:
        close_fd(fd)
    except OSError as exc:
        print(f"Failed to close {REDIRECT_FILE}: {exc.strerror}", file=sys.stderr)
        return 1
    try:
        os.write(1, b"ok")
    except OSError as exc:
        print(f"Failed to write to file: {exc.strerror}", file=sys.stderr)
        return 1
    return 0