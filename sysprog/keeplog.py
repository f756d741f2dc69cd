"""Run commands read from standard input and keep a history of them."""

from __future__ import annotations

import subprocess
import sys
import time
from typing import Callable, TextIO

from .tracelist import Entry, TraversalList


class CommandLog:
    """Runs shell commands and records each one with its start time."""

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._history = TraversalList()

    def run(self, cmd: str) -> int:
        """Run ``cmd`` through the shell, record it and return its exit code."""
        started = self._clock()
        sys.stdout.flush()
        result = subprocess.run(cmd, shell=True, check=False)
        self._history.add(Entry(started, cmd))
        return result.returncode

    def show_history(self, stream: TextIO) -> None:
        """Write every recorded command with its time to ``stream``."""
        try:
            key = self._history.access()
        except ValueError:
            stream.write("No History\n")
            return
        while (entry := self._history.get(key)) is not None:
            stream.write(f"Command: {entry.text}\nTime: {time.ctime(entry.time)}\n\n")


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if len(args) > 1 or (args and args[0] != "history"):
        print("Usage: keeplog [history]", file=sys.stderr)
        return 1
    history = bool(args)

    log = CommandLog()
    for line in sys.stdin:
        cmd = line[:-1] if line.endswith("\n") else line
        if history and cmd == "history":
            log.show_history(sys.stdout)
            continue
        try:
            log.run(cmd)
        except OSError as exc:
            print(f"Failed to execute command: {exc}", file=sys.stderr)
            break

    print("\n\n>>>>>>The list of commands executed is:")
    log.show_history(sys.stdout)
    return 0