# tests/conftest.py

from __future__ import annotations

import json
from pathlib import Path
from typing import Callable

import pytest

from main import App, build_app
from storage import Storage


@pytest.fixture()
def data_file(tmp_path: Path) -> Path:
    return tmp_path / "tasklog.json"


@pytest.fixture()
def storage(data_file: Path) -> Storage:
    """File-backed store in a per-test tmp dir."""
    return Storage(data_file)


@pytest.fixture()
def app(storage: Storage) -> App:
    return build_app(storage)


@pytest.fixture()
def reload_app(data_file: Path) -> Callable[[], App]:
    """Rebuild the whole object graph from what is on disk (a fresh start)."""

    def _reload() -> App:
        return build_app(Storage(data_file))

    return _reload


@pytest.fixture()
def persisted(data_file: Path) -> Callable[[str], object]:
    """Read a collection's list straight from the JSON file."""

    def _read(key: str) -> object:
        raw = json.loads(data_file.read_text(encoding="utf-8"))
        return json.loads(raw[key])

    return _read
