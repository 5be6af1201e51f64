import os
import sys

import pytest

from minitools.shell.runner import (
    Redirection,
    Stage,
    change_directory,
    parse_pipeline,
    run_pipeline,
)

PY = sys.executable


def test_parse_simple_command():
    assert parse_pipeline(["ls", "-l"]) == [Stage(["ls", "-l"], [])]


def test_parse_pipe_and_redirections():
    stages = parse_pipeline(["sort", "<", "in", "|", "uniq", ">>", "out", ""])
    assert stages == [
        Stage(["sort"], [Redirection("<", "in")]),
        Stage(["uniq"], [Redirection(">>", "out")]),
    ]
    assert stages[0].redirections[0].is_input
    assert not stages[1].redirections[0].is_input


def test_parse_stops_at_ampersand():
    assert parse_pipeline(["sleep", "1", "&", "echo", "x"]) == [Stage(["sleep", "1"])]


def test_parse_missing_target():
    with pytest.raises(ValueError):
        parse_pipeline(["ls", ">", ""])


def test_unknown_redirection_operator():
    with pytest.raises(ValueError):
        Redirection("<<", "file")


def test_change_directory(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = tmp_path / "sub"
    target.mkdir()
    assert change_directory(["cd", str(target)]) is True
    assert os.getcwd() == str(target.resolve())
    monkeypatch.setenv("HOME", str(tmp_path))
    assert change_directory(["cd"]) is True
    assert os.getcwd() == str(tmp_path.resolve())
    assert change_directory(["cd", str(tmp_path / "missing")]) is False
    with pytest.raises(ValueError):
        change_directory(["ls"])


def test_output_redirection(tmp_path):
    out = tmp_path / "out.txt"
    stages = parse_pipeline([PY, "-c", "print('hi')", ">", str(out)])
    processes = run_pipeline(stages)
    assert [p.returncode for p in processes] == [0]
    assert out.read_text() == "hi\n"


def test_pipe_and_input_redirection(tmp_path):
    source = tmp_path / "in.txt"
    source.write_text("abc\n")
    out = tmp_path / "out.txt"
    words = [
        PY, "-c", "import sys; sys.stdout.write(sys.stdin.read())", "<", str(source),
        "|",
        PY, "-c", "import sys; sys.stdout.write(sys.stdin.read().upper())",
        ">", str(out),
    ]
    processes = run_pipeline(parse_pipeline(words))
    assert len(processes) == 2
    assert out.read_text() == "abc\n".upper()


def test_append_redirection(tmp_path):
    out = tmp_path / "log.txt"
    out.write_text("first\n")
    run_pipeline(parse_pipeline([PY, "-c", "print('second')", ">>", str(out)]))
    assert out.read_text() == "first\nsecond\n"


def test_append_to_missing_file_reports_error(tmp_path, capfd):
    out = tmp_path / "missing.txt"
    run_pipeline(parse_pipeline([PY, "-c", "pass", ">>", str(out)]))
    assert not out.exists()
    assert str(out) in capfd.readouterr().err


def test_exit_status_is_kept():
    processes = run_pipeline([Stage([PY, "-c", "raise SystemExit(4)"])])
    assert processes[0].returncode == 4


def test_background_returns_without_waiting():
    processes = run_pipeline(
        [Stage([PY, "-c", "import time; time.sleep(30)"])], background=True
    )
    try:
        assert processes[0].poll() is None
    finally:
        processes[0].kill()
        processes[0].wait()


def test_empty_stage_runs_nothing():
    assert run_pipeline(parse_pipeline([""])) == []


def test_missing_command_raises():
    with pytest.raises(OSError):
        run_pipeline([Stage(["/nonexistent/command/for/test"])])