import io
import time

from sysprog.keeplog import CommandLog, main


def test_empty_history():
    out = io.StringIO()
    CommandLog().show_history(out)
    assert out.getvalue() == "No History\n"


def test_run_records_command():
    log = CommandLog(clock=lambda: 0.0)
    assert log.run("true") == 0
    out = io.StringIO()
    log.show_history(out)
    assert out.getvalue() == f"Command: true\nTime: {time.ctime(0.0)}\n\n"


def test_run_returns_exit_code():
    log = CommandLog()
    assert log.run("exit 4") == 4
    out = io.StringIO()
    log.show_history(out)
    assert out.getvalue().startswith("Command: exit 4\n")


def test_history_order_and_repeatable():
    log = CommandLog()
    log.run("true")
    log.run(":")
    for _ in range(2):
        out = io.StringIO()
        log.show_history(out)
        commands = [ln for ln in out.getvalue().splitlines() if ln.startswith("Command:")]
        assert commands == ["Command: true", "Command: :"]


def test_main_bad_arguments(capsys):
    assert main(["other"]) == 1
    assert "Usage" in capsys.readouterr().err
    assert main(["history", "extra"]) == 1


def test_main_with_history(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("true\nhistory\n"))
    assert main(["history"]) == 0
    out = capsys.readouterr().out
    assert out.count("Command: true\n") == 2
    assert ">>>>>>The list of commands executed is:" in out
    assert "Command: history" not in out


def test_main_without_history_runs_history_as_command(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("true"))
    assert main([]) == 0
    out = capsys.readouterr().out
    assert out.count("Command: true\n") == 1