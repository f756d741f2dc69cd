"""Working directory, tree walking and file time helpers."""

from __future__ import annotations

import os
import sys
import time
from typing import Callable


def current_directory() -> str:
    """Return the current working directory."""
    return os.getcwd()


def depth_first_apply(path: str, func: Callable[[str], int]) -> int:
    """Apply ``func`` to every non-directory under ``path``, depth first.

    Entries are visited in name order. The walk stops at the first call
    that returns a non-zero value, which is returned; otherwise 0.
    Raises OSError if ``path`` cannot be examined or a directory cannot
    be listed. Entries that cannot be examined are reported and skipped.
    """
    if not os.path.isdir(os.stat(path) and path):
        return func(path)
    with os.scandir(path) as entries:
        names = sorted(entry.name for entry in entries)
    for name in names:
        fullpath = os.path.join(path, name)
        try:
            os.stat(fullpath)
        except OSError as exc:
            print(f"Stat Failed.: {fullpath}: {exc.strerror}", file=sys.stderr)
            continue
        result = depth_first_apply(fullpath, func)
        if result != 0:
            return result
    return 0


def format_access_mod(path: str) -> str:
    """Return a line giving the last access and modification times of ``path``."""
    info = os.stat(path)
    return (
        f"{path} accessed: {time.ctime(info.st_atime)} "
        f"modified: {time.ctime(info.st_mtime)}\n"
    )


def print_access_mod(path: str) -> None:
    """Print the access and modification times of ``path``, or an error."""
    try:
        line = format_access_mod(path)
    except OSError as exc:
        print(f"Failed to get file status: {exc.strerror}", file=sys.stderr)
        return
    sys.stdout.write(line)


def cwd_main(argv: list[str] | None = None) -> int:
    """Print the current working directory."""
    try:
        cwd = current_directory()
    except OSError as exc:
        print(f"Failed to get current working directory: {exc.strerror}", file=sys.stderr)
        return 1
    print(f"Current working directory: {cwd}")
    return 0