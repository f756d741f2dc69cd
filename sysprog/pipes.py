"""Passing data through pipes between a parent and a child process."""

from __future__ import annotations

import os
import subprocess
import sys

from .restart import close_fd, read_fd, write_all

BUFSIZ = 8192
BUFOUT = "Hello"


def _report(bufin: str) -> str:
    line = f"[{os.getpid()}]:my bufin is {{{bufin}}}, my bufout is {{{BUFOUT}}}"
    os.write(2, f"{line}\n".encode())
    return line


def parent_write_pipe() -> str:
    """Have the parent send "Hello" to a forked child through a pipe.

    Both processes report their buffers on standard error; the parent
    waits for the child and returns its own line.
    """
    readfd, writefd = os.pipe()
    sys.stdout.flush()
    sys.stderr.flush()
    try:
        childpid = os.fork()
    except OSError:
        close_fd(readfd)
        close_fd(writefd)
        raise
    if childpid == 0:
        try:
            data = read_fd(readfd, BUFSIZ)
            _report(data.split(b"\0", 1)[0].decode(errors="replace"))
        finally:
            os._exit(0)
    try:
        write_all(writefd, BUFOUT.encode() + b"\0")
        line = _report("Empty")
    finally:
        close_fd(readfd)
        close_fd(writefd)
        os.waitpid(childpid, 0)
    return line


def ls_sort_pipeline() -> int:
    """Run ``ls -l`` piped into a numeric sort on the size column.

    Output goes to standard output; returns the exit status of sort.
    Raises OSError if either program cannot be started.
    """
    sys.stdout.flush()
    ls = subprocess.Popen(["ls", "-l"], stdout=subprocess.PIPE)
    try:
        sort = subprocess.run(["sort", "-n", "-k", "5"], stdin=ls.stdout, check=False)
    finally:
        if ls.stdout is not None:
            ls.stdout.close()
        ls.wait()
    return sort.returncode


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if args == ["parentwrite"]:
        parent_write_pipe()
        return 0
    if args == ["lssort"]:
        try:
            return ls_sort_pipeline()
        except OSError as exc:
            print(f"Failed to setup pipeline: {exc.strerror}", file=sys.stderr)
            return 1
    print("Usage: pipes {parentwrite|lssort}", file=sys.stderr)
    return 1