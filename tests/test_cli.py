# tests/test_cli.py

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

import main as main_module
from display import ANSI_RE
from fakes import FailingStorage


@pytest.fixture()
def run(tmp_path: Path, monkeypatch):
    """Invoke the tasklog command with scripted stdin against a tmp data file."""
    calls: list[dict] = []
    monkeypatch.setattr(main_module, "setup_logging", lambda **kw: calls.append(kw))
    data_file = tmp_path / "data.json"

    def _run(stdin: str, *extra: str):
        runner = CliRunner()
        result = runner.invoke(
            main_module.main,
            ["--data-file", str(data_file), "--no-alt-screen", *extra],
            input=stdin,
            env={"TASKLOG_LOG_DIR": str(tmp_path / "logs")},
        )
        stored = json.loads(data_file.read_text(encoding="utf-8")) if data_file.exists() else {}
        return result, {k: json.loads(v) for k, v in stored.items()}

    _run.logging_calls = calls
    return _run


def test_add_inline_and_exit(run) -> None:
    result, stored = run("add Buy milk\nexit\n")

    assert result.exit_code == 0, result.output
    assert "Goodbye." in result.output
    assert stored["tasks"] == ["Buy milk"]
    assert stored["logs"] == ['Task added: "Buy milk"']


def test_add_prompt_then_remove(run) -> None:
    result, stored = run("add\nWalk dog\nrm 1\nexit\n")

    assert result.exit_code == 0, result.output
    assert stored["tasks"] == []
    assert stored["logs"] == ['Task added: "Walk dog"', 'Task removed: "Walk dog"']


def test_empty_add_shows_warning(run) -> None:
    result, stored = run("add\n   \n\nexit\n")

    assert result.exit_code == 0, result.output
    assert "Please enter a task!" in result.output
    assert stored == {}


def test_remove_log_row(run) -> None:
    run("add a\nexit\n")
    result, stored = run("rml 1\nexit\n")

    assert result.exit_code == 0, result.output
    assert stored["tasks"] == ["a"]
    assert stored["logs"] == []


def test_bad_row_numbers_and_unknown_command(run) -> None:
    result, _ = run("rm x\n\nrm 5\n\nrm\n\nfrobnicate\n\nexit\n")

    assert result.exit_code == 0, result.output
    assert "Invalid row number." in result.output
    assert "No row #5 in tasks." in result.output
    assert "Usage: rm <n>" in result.output
    assert "Unknown command" in result.output


def test_help_and_eof(run) -> None:
    result, _ = run("help\n\n")

    assert result.exit_code == 0, result.output
    assert "Commands:" in result.output
    assert "Interrupted. Goodbye." in result.output


def test_restart_shows_persisted_rows(run) -> None:
    run("add A\nadd B\nexit\n")
    result, stored = run("exit\n")

    output = ANSI_RE.sub("", result.output)
    assert "1. A" in output
    assert "2. B" in output
    assert stored["logs"] == ['Task added: "A"', 'Task added: "B"']


def test_log_level_option_reaches_logging_setup(run) -> None:
    run("exit\n", "--log-level", "debug")
    assert run.logging_calls[-1]["file_level"] == 10


def test_unwritable_data_file_reports_and_exits(run, tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")

    result, _ = run("add A\nexit\n", "--data-file", str(blocker / "data.json"))

    assert result.exit_code != 0
    assert "Could not access" in result.output
    assert "Goodbye." not in result.output


def test_log_write_failure_reports_and_exits(run, monkeypatch) -> None:
    monkeypatch.setattr(main_module, "Storage", FailingStorage)

    result, stored = run("add A\nexit\n")

    assert result.exit_code != 0
    assert "Could not access" in result.output
    assert stored == {"tasks": ["A"]}
