import contextlib
import os

from sysprog.filecmds import (
    copyfile_main,
    monitor_main,
    readline_main,
    redirect_main,
)


@contextlib.contextmanager
def stdin_bytes(data):
    r, w = os.pipe()
    os.write(w, data)
    os.close(w)
    saved = os.dup(0)
    os.dup2(r, 0)
    os.close(r)
    try:
        yield
    finally:
        os.dup2(saved, 0)
        os.close(saved)


def test_copyfile_main_copies(tmp_path, capsys):
    src = tmp_path / "a.txt"
    dst = tmp_path / "b.txt"
    src.write_bytes(b"hello world\n")
    assert copyfile_main([str(src), str(dst)]) == 0
    assert dst.read_bytes() == b"hello world\n"
    out = capsys.readouterr().out
    assert out == f"{len(b'hello world')+1} bytes copied from {src} to {dst}\n"


def test_copyfile_main_refuses_existing_target(tmp_path, capsys):
    src = tmp_path / "a.txt"
    dst = tmp_path / "b.txt"
    src.write_bytes(b"new")
    dst.write_bytes(b"old")
    assert copyfile_main([str(src), str(dst)]) == 1
    assert dst.read_bytes() == b"old"
    assert "Failed to create output file" in capsys.readouterr().err


def test_copyfile_main_missing_input(tmp_path, capsys):
    assert copyfile_main([str(tmp_path / "nope"), str(tmp_path / "x")]) == 1
    assert "Failed to open input file" in capsys.readouterr().err


def test_copyfile_main_usage(capsys):
    assert copyfile_main(["only"]) == 1
    assert "Usage" in capsys.readouterr().err


def test_monitor_main_copies_both(tmp_path, capfd):
    f1 = tmp_path / "one"
    f2 = tmp_path / "two"
    f1.write_bytes(b"AAAA")
    f2.write_bytes(b"BBBBBB")
    assert monitor_main([str(f1), str(f2)]) == 0
    out = capfd.readouterr().out
    assert sorted(out) == sorted("AAAA" + "BBBBBB")


def test_monitor_main_missing_file(tmp_path, capsys):
    f1 = tmp_path / "one"
    f1.write_bytes(b"x")
    assert monitor_main([str(f1), str(tmp_path / "missing")]) == 1
    assert "Failed to open file" in capsys.readouterr().err


def test_readline_main_echoes_lines(capsys):
    with stdin_bytes(b"hi\nthere\n"):
        assert readline_main([]) == 0
    err = capsys.readouterr().err
    assert err == (
        "Number of bytes read: 3\nhi\n" "Number of bytes read: 6\nthere\n"
    )


def test_readline_main_partial_line_fails(capsys):
    with stdin_bytes(b"ok\nbroken"):
        assert readline_main([]) == 1
    err = capsys.readouterr().err
    assert err.endswith("readline returned -1\n")


def test_redirect_main_appends_ok(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "myfile.txt").write_bytes(b"start:")
    saved = os.dup(1)
    try:
        result = redirect_main([])
    finally:
        os.dup2(saved, 1)
        os.close(saved)
    assert result == 0
    assert (tmp_path / "myfile.txt").read_bytes() == b"start:ok"