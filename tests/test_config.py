# tests/test_config.py

from __future__ import annotations

import logging
from pathlib import Path

from config import Settings, load_settings, parse_bool, parse_level
from theme import resolve_hex


def test_defaults_without_env(tmp_path: Path) -> None:
    s = load_settings(environ={}, env_file=tmp_path / "missing.env")
    assert s == Settings()


def test_env_file_values_are_used(tmp_path: Path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text(
        "TASKLOG_DATA_FILE=/tmp/x.json\nTASKLOG_ALT_SCREEN=off\nTASKLOG_LOG_LEVEL=debug\n",
        encoding="utf-8",
    )

    s = load_settings(environ={}, env_file=env_file)

    assert s.data_file == Path("/tmp/x.json")
    assert s.alt_screen is False
    assert s.log_level == logging.DEBUG


def test_real_env_beats_env_file(tmp_path: Path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("TASKLOG_LOG_DIR=/from/file\n", encoding="utf-8")

    s = load_settings(environ={"TASKLOG_LOG_DIR": "/from/env"}, env_file=env_file)

    assert s.log_dir == Path("/from/env")


def test_blank_values_fall_back_to_defaults(tmp_path: Path) -> None:
    s = load_settings(environ={"TASKLOG_DATA_FILE": "  ", "TASKLOG_ALT_SCREEN": ""},
                      env_file=tmp_path / "missing.env")
    assert s.data_file == Settings().data_file
    assert s.alt_screen is True


def test_parsers() -> None:
    assert parse_bool("Yes", False) is True
    assert parse_bool("0", True) is False
    assert parse_bool("maybe", True) is True
    assert parse_level("WARNING") == logging.WARNING
    assert parse_level("15") == 15
    assert parse_level("bogus", logging.ERROR) == logging.ERROR


def test_resolve_hex(monkeypatch) -> None:
    monkeypatch.setenv("TASKLOG_TASK", "ff00AA")
    assert resolve_hex("TASKLOG_TASK", "#000000") == "#ff00AA"
    monkeypatch.setenv("TASKLOG_TASK", "#12345")
    assert resolve_hex("TASKLOG_TASK", "#000000") == "#000000"
