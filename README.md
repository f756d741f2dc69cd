# sysprog

Building blocks for POSIX system programming, and a set of small
command-line tools that show them at work: restartable reads and writes on
file descriptors, copying between descriptors, waiting on two inputs with
`select`, chains, fans and trees of forked processes, pipes between
processes, and depth-first directory walking.

It needs a POSIX system (Linux, the BSDs, macOS) because much of it uses
`fork`, and Python 3.10 or later. There are no third-party dependencies.

## Installing

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Library

### Restartable descriptor I/O — `sysprog.restart`

Calls interrupted by a signal are retried rather than reported.

- `read_fd(fd, size)` reads up to `size` bytes; `b""` means end of file.
- `write_all(fd, data)` writes every byte of `data`, however many partial
  writes it takes, and returns the count.
- `read_block(fd, size)` reads exactly `size` bytes. It returns `b""` if end
  of file comes first, and raises `EOFError` if it comes after part of the
  block.
- `read_write(fromfd, tofd)` moves one block (`PIPE_BUF` bytes at most) and
  returns how many bytes it moved, 0 at end of file.
- `copy_fd(fromfd, tofd)` copies until end of file and returns the byte count.
- `close_fd(fd)` closes a descriptor; `wait_child()` waits for any child and
  returns `(pid, status)`, raising `ChildProcessError` if there is none.

### Descriptor utilities — `sysprog.fileio`

- `read_line(fd, nbytes)` reads one newline-terminated line a byte at a time.
  It returns `b""` at end of file and raises `ValueError` if end of file
  comes in mid-line or no newline fits in `nbytes - 1` bytes.
- `which_is_ready(fd1, fd2)` blocks until one of two descriptors is readable
  and returns it, preferring `fd1` when both are.
- `copy_two(fromfd1, tofd1, fromfd2, tofd2)` copies two streams at once,
  serving whichever input is ready, and stops as soon as either reaches end
  of file or fails. It returns the total bytes copied.
- `copy_file(fromfd, tofd)` copies one descriptor to another in 1024-byte
  blocks until end of file or an error.

### Text helpers

```python
from sysprog.argv import make_argv
from sysprog.wordaverage import word_average

make_argv("  ls   -l\t/tmp ", " \t")      # ['ls', '-l', '/tmp']
word_average("one two\nthree four five")  # 2.5
```

`word_average` skips empty lines and returns `0.0` when there are no lines.

### Lists and logs

- `sysprog.tracelist.TraversalList` is an append-only list of `Entry(time,
  text)` records that several traversers can walk independently: `access()`
  hands out a key (raising `ValueError` on an empty list), `get(key)` returns
  the next entry or `None` at the end (which releases the key), and
  `free_key(key)` releases a key early.
- `sysprog.keeplog.CommandLog` runs shell commands with `run(cmd)`, which
  returns the exit code, and keeps a timestamped history that
  `show_history(stream)` writes out (or `No History`).
- `sysprog.messagelog.MessageLog` collects messages with
  `add(message, when=None)`, renders them one per line as
  `<time>: <message>` with `text()`, writes that text to a file with
  `save(filename)` and empties itself with `clear()`.

### Directories — `sysprog.dirs`

- `current_directory()` returns the working directory.
- `depth_first_apply(path, func)` calls `func` on every non-directory under
  `path`, in name order, and stops at the first non-zero result, which it
  returns.
- `format_access_mod(path)` returns a line with a file's last access and
  modification times; `print_access_mod(path)` prints it, or an error on
  standard error.

### Processes and pipes

- `sysprog.processes` builds chains (`run_chain(n, wait)`), fans
  (`run_fan(n, wait)`) and trees (`run_tree(n, pause)`) of forked processes;
  each process reports its index and IDs on standard error.
  `describe_status(pid, status)` turns a wait status into a sentence,
  `show_return_status()` waits for a child and prints that sentence, and
  `process_ids()` shows that a process ID saved before a fork is the
  parent's in both processes.
- `sysprog.chainwrite.chain_write(n, filename, mode)` has a chain of
  processes each write a line to one file. `WriteMode` (`APPEND`, `FPRINTF`,
  `ONE_WRITE`, `OPEN`, `OPEN_SEEK`, `OPEN_FORK`) picks how the file is opened
  and written, so shared and separate file offsets can be compared.
- `sysprog.pipes.parent_write_pipe()` has a parent send `Hello` to its child
  through a pipe; `ls_sort_pipeline()` runs `ls -l` into `sort -n -k 5`.

## Commands

| Command | What it does |
| --- | --- |
| `sysprog-keeplog [history]` | Runs commands read from standard input, then lists them with their times; with `history`, the line `history` lists them on the spot |
| `sysprog-makeargv STRING` | Splits a string on spaces and tabs and prints the tokens |
| `sysprog-wordaverage [WORDS...]` | Prints the average words per line of the arguments, or of a built-in sample when none are given |
| `sysprog-copyfile FROM TO` | Copies a file to a new file (which must not exist) and reports the byte count |
| `sysprog-monitor FILE1 FILE2` | Parent and child each copy one file to standard output |
| `sysprog-readline` | Reads standard input line by line, echoing each line and its length to standard error |
| `sysprog-redirect` | Sends standard output to `myfile.txt` (appending) and writes `ok` to it |
| `sysprog-cwd` | Prints the current working directory |
| `sysprog-procs {chain\|chainwait\|fan\|fanwait\|tree} N` or `sysprog-procs ids` | Builds processes that each report their IDs |
| `sysprog-chainwrite [MODE] N FILE` | Has a chain of processes write to one file; MODE is `append` (default), `fprintf`, `onewrite`, `open`, `openseek` or `openfork` |
| `sysprog-pipes {parentwrite\|lssort}` | Passes data through a pipe to a child, or runs `ls -l` into `sort` |

Each command prints its usage to standard error and exits with status 1 when
given the wrong arguments.

## What it does not do

- There is no disk-usage command: `depth_first_apply` walks a tree and calls
  your function, but adding up sizes is left to that function.
- `MessageLog` lives in memory only; nothing is kept between runs unless you
  call `save`.
- The process and pipe tools rely on `fork` and do not run on Windows.