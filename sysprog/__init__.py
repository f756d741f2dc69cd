"""POSIX system programming building blocks: descriptor I/O, processes, pipes, directories and small command-line tools."""

__version__ = "0.1.0"