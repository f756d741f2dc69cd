"""Process chains, fans and trees built with fork, and child status reports."""

from __future__ import annotations

import os
import re
import sys
import time
from dataclasses import dataclass, field

from .restart import wait_child

TREE_PAUSE = 30.0


@dataclass(frozen=True)
class ProcessRecord:
    """What one process of a chain, fan or tree knows about itself."""

    index: int
    pid: int
    ppid: int
    child: int
    children: tuple[int, ...] = field(default=())

    @property
    def line(self) -> str:
        return (
            f"i:{self.index}  process ID:{self.pid}  "
            f"parent ID:{self.ppid}  child ID:{self.child}\n"
        )


def _flush() -> None:
    sys.stdout.flush()
    sys.stderr.flush()


def _emit(record: ProcessRecord) -> None:
    os.write(2, record.line.encode())


def _reap(pid: int) -> None:
    try:
        os.waitpid(pid, 0)
    except ChildProcessError:
        pass


def _fork() -> int:
    _flush()
    try:
        return os.fork()
    except OSError:
        return -1


def run_chain(n: int, wait: bool = False) -> ProcessRecord:
    """Build a chain of ``n`` forked processes, each the child of the previous one.

    Every process reports its line on standard error. With ``wait`` each
    process waits for its own child before reporting. Descendants exit;
    the calling process returns its own record.
    """
    origin = os.getpid()
    index = 0
    child = 0
    while index < n:
        child = _fork()
        if child != 0:
            break
        index += 1
    if os.getpid() != origin:
        try:
            if wait and child > 0:
                _reap(child)
            _emit(ProcessRecord(index, os.getpid(), os.getppid(), child))
        finally:
            os._exit(0)
    if wait and child > 0:
        _reap(child)
    record = ProcessRecord(index, os.getpid(), os.getppid(), child)
    _emit(record)
    return record


def run_fan(n: int, wait: bool = False) -> ProcessRecord:
    """Fork ``n`` children of the calling process.

    Every process reports its line on standard error. With ``wait`` the
    calling process waits for all of its children before reporting. The
    returned record lists the children's process IDs.
    """
    origin = os.getpid()
    children: list[int] = []
    index = 0
    child = 0
    while index < n:
        child = _fork()
        if child <= 0:
            break
        children.append(child)
        index += 1
    if os.getpid() != origin:
        try:
            _emit(ProcessRecord(index, os.getpid(), os.getppid(), child))
        finally:
            os._exit(0)
    if wait:
        for pid in children:
            _reap(pid)
    record = ProcessRecord(index, os.getpid(), os.getppid(), child, tuple(children))
    _emit(record)
    return record


def run_tree(n: int, pause: float = TREE_PAUSE) -> ProcessRecord:
    """Fork ``n`` times in every process, giving a tree of 2**n processes.

    Every process reports its line on standard error and then sleeps for
    ``pause`` seconds. Descendants wait for their own children and exit;
    the calling process returns its record, listing its direct children.
    """
    origin = os.getpid()
    children: list[int] = []
    index = 0
    child = 0
    while index < n:
        child = _fork()
        if child == -1:
            break
        if child:
            children.append(child)
        else:
            children = []
        index += 1
    record = ProcessRecord(index, os.getpid(), os.getppid(), child, tuple(children))
    if os.getpid() != origin:
        try:
            _emit(record)
            time.sleep(pause)
            for pid in children:
                _reap(pid)
        finally:
            os._exit(0)
    _emit(record)
    time.sleep(pause)
    return record


def describe_status(pid: int, status: int) -> str | None:
    """Describe how child ``pid`` ended, given its wait ``status``."""
    if os.WIFEXITED(status):
        code = os.WEXITSTATUS(status)
        if code == 0:
            return f"Child {pid} terminated normally"
        return f"Child {pid} terminated with return status {code}"
    if os.WIFSIGNALED(status):
        return f"Child {pid} terminated due to uncaught signal {os.WTERMSIG(status)}"
    if os.WIFSTOPPED(status):
        return f"Child {pid} stopped due to signal {os.WSTOPSIG(status)}"
    return None


def show_return_status() -> str | None:
    """Wait for any child, print how it ended and return that description."""
    try:
        pid, status = wait_child()
    except ChildProcessError as exc:
        print(f"Failed to wait for child: {exc.strerror}", file=sys.stderr)
        return None
    message = describe_status(pid, status)
    if message is not None:
        print(message)
    return message


def process_ids() -> str:
    """Fork once; parent and child each print their own and the saved ID.

    The ID is read before the fork, so both report the parent's ID.
    Returns the parent's line.
    """
    mypid = os.getpid()
    _flush()
    childpid = os.fork()
    if childpid == 0:
        try:
            os.write(1, f"I am child {os.getpid()}, ID = {mypid}\n".encode())
        finally:
            os._exit(0)
    line = f"I am parent {os.getpid()}, ID = {mypid}"
    os.write(1, f"{line}\n".encode())
    _reap(childpid)
    return line


def _atoi(text: str) -> int:
    match = re.match(r"\s*([+-]?\d+)", text)
    return int(match.group(1)) if match else 0


_RUNNERS = {
    "chain": lambda n: run_chain(n, False),
    "chainwait": lambda n: run_chain(n, True),
    "fan": lambda n: run_fan(n, False),
    "fanwait": lambda n: run_fan(n, True),
    "tree": lambda n: run_tree(n, TREE_PAUSE),
}


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if args == ["ids"]:
        process_ids()
        return 0
    if len(args) != 2 or args[0] not in _RUNNERS:
        print(
            "Usage: processes {chain|chainwait|fan|fanwait|tree} processes | ids",
            file=sys.stderr,
        )
        return 1
    _RUNNERS[args[0]](_atoi(args[1]))
    return 0