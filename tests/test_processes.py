import os
import re
import signal
import sys

from sysprog.processes import (
    ProcessRecord,
    describe_status,
    main,
    process_ids,
    run_chain,
    run_fan,
    run_tree,
    show_return_status,
)

LINE = re.compile(
    r"i:(\d+)  process ID:(\d+)  parent ID:(\d+)  child ID:(-?\d+)"
)

NORMAL = "pass"
CODE_THREE = "raise SystemExit(3)"
SELF_KILL = "import os, signal; os.kill(os.getpid(), signal.SIGKILL)"
SELF_STOP = "import os, signal; os.kill(os.getpid(), signal.SIGSTOP)"


def _records(err):
    return [tuple(int(x) for x in m.groups()) for m in LINE.finditer(err)]


def _child_status(code):
    return os.posix_spawn(
        sys.executable, [sys.executable, "-c", code], dict(os.environ)
    )


def test_record_line_format():
    record = ProcessRecord(1, 20, 10, 30)
    assert record.line == "i:1  process ID:20  parent ID:10  child ID:30\n"


def test_chain_of_zero_reports_only_caller(capfd):
    record = run_chain(0, False)
    assert record.index == 0
    assert record.child == 0
    err = capfd.readouterr().err
    assert err == f"i:0  process ID:{os.getpid()}  parent ID:{os.getppid()}  child ID:0\n"


def test_chain_wait_reports_in_reverse_order(capfd):
    record = run_chain(2, True)
    assert record.pid == os.getpid()
    assert record.child > 0
    recs = _records(capfd.readouterr().err)
    assert [r[0] for r in recs] == [2, 1, 0]
    by_pid = {r[1]: r for r in recs}
    for index, pid, ppid, child in recs:
        if child > 0:
            assert by_pid[child][2] == pid
    assert recs[-1][3] == record.child


def test_chain_without_wait(capfd):
    record = run_chain(1, False)
    os.waitpid(record.child, 0)
    recs = _records(capfd.readouterr().err)
    assert sorted(r[0] for r in recs) == [0, 1]
    child_rec = next(r for r in recs if r[0] == 1)
    assert child_rec[1] == record.child
    assert child_rec[3] == 0


def test_fan_wait_children_share_parent(capfd):
    record = run_fan(3, True)
    assert record.index == 3
    assert len(record.children) == 3
    assert record.child == record.children[-1]
    recs = _records(capfd.readouterr().err)
    assert len(recs) == 4
    assert recs[-1][1] == os.getpid()
    for index, pid, ppid, child in recs[:-1]:
        assert ppid == os.getpid()
        assert child == 0
        assert pid in record.children
    assert sorted(r[0] for r in recs[:-1]) == [0, 1, 2]


def test_fan_without_wait(capfd):
    record = run_fan(2, False)
    for pid in record.children:
        os.waitpid(pid, 0)
    recs = _records(capfd.readouterr().err)
    assert len(recs) == 3
    assert {r[1] for r in recs} == {os.getpid(), *record.children}


def test_tree_doubles_processes(capfd):
    record = run_tree(2, 0)
    assert len(record.children) == 2
    for pid in record.children:
        os.waitpid(pid, 0)
    recs = _records(capfd.readouterr().err)
    assert len({r[1] for r in recs}) == 4
    assert all(r[0] == 2 for r in recs)


def test_describe_normal_exit():
    pid = _child_status(NORMAL)
    _, status = os.waitpid(pid, 0)
    assert describe_status(pid, status) == f"Child {pid} terminated normally"


def test_describe_exit_code():
    pid = _child_status(CODE_THREE)
    _, status = os.waitpid(pid, 0)
    assert describe_status(pid, status) == f"Child {pid} terminated with return status 3"


def test_describe_signal():
    pid = _child_status(SELF_KILL)
    _, status = os.waitpid(pid, 0)
    assert describe_status(pid, status) == (
        f"Child {pid} terminated due to uncaught signal {int(signal.SIGKILL)}"
    )


def test_describe_stopped():
    pid = _child_status(SELF_STOP)
    _, status = os.waitpid(pid, os.WUNTRACED)
    try:
        assert describe_status(pid, status) == (
            f"Child {pid} stopped due to signal {int(signal.SIGSTOP)}"
        )
    finally:
        os.kill(pid, signal.SIGKILL)
        os.waitpid(pid, 0)


def test_show_return_status_reports_child(capfd):
    pid = _child_status(CODE_THREE)
    message = show_return_status()
    assert message == f"Child {pid} terminated with return status 3"
    assert message in capfd.readouterr().out


def test_show_return_status_without_children(capfd):
    assert show_return_status() is None
    assert "Failed to wait for child" in capfd.readouterr().err


def test_process_ids_both_report_parent_id(capfd):
    line = process_ids()
    me = os.getpid()
    assert line == f"I am parent {me}, ID = {me}"
    out = capfd.readouterr().out
    child_lines = [l for l in out.splitlines() if l.startswith("I am child")]
    assert len(child_lines) == 1
    assert child_lines[0].endswith(f", ID = {me}")


def test_main_usage(capfd):
    assert main([]) == 1
    assert main(["bogus", "2"]) == 1
    assert "Usage" in capfd.readouterr().err


def test_main_chainwait(capfd):
    assert main(["chainwait", "2"]) == 0
    assert len(_records(capfd.readouterr().err)) == 3