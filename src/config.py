"""Settings loaded from TASKLOG_* environment variables (+ optional .env).

Priority: real environment variable > project .env file > default.
The .env file is read with python-dotenv and never mutates os.environ.
"""
from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional, Union

from dotenv import dotenv_values

ENV_PREFIX = 'TASKLOG'
PROJECT_ROOT = Path(__file__).resolve().parent.parent
ENV_FILE = PROJECT_ROOT / '.env'
DATA_DIR = PROJECT_ROOT / 'data'

_TRUTHY = {'1', 'true', 'yes', 'y', 'on'}
_FALSY = {'0', 'false', 'no', 'n', 'off', ''}


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def read_env_file(path: Union[str, Path] = ENV_FILE) -> Dict[str, str]:
    path = Path(path)
    if not path.exists():
        return {}
    return {k: v for k, v in dotenv_values(path).items() if v is not None}


def env_value(name: str, default: Optional[str] = None,
              environ: Optional[Mapping[str, str]] = None,
              dotenv: Optional[Mapping[str, str]] = None) -> Optional[str]:
    environ = os.environ if environ is None else environ
    dotenv = _DOTENV if dotenv is None else dotenv
    v = environ.get(name)
    if v is not None:
        return v
    return dotenv.get(name, default)


def parse_bool(raw: Optional[str], default: bool) -> bool:
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    return default


def parse_level(raw: Optional[str], default: int = logging.INFO) -> int:
    if raw is None or not raw.strip():
        return default
    raw = raw.strip()
    if raw.isdigit():
        return int(raw)
    level = logging.getLevelName(raw.upper())
    return level if isinstance(level, int) else default


@dataclass
class Settings:
    data_file: Path = DATA_DIR / 'tasklog.json'
    log_dir: Path = DATA_DIR / 'logs'
    log_level: int = logging.INFO
    alt_screen: bool = True


def load_settings(environ: Optional[Mapping[str, str]] = None,
                  env_file: Union[str, Path, None] = None) -> Settings:
    dotenv = read_env_file(env_file) if env_file is not None else _DOTENV

    def get(suffix: str) -> Optional[str]:
        raw = env_value(_k(suffix), environ=environ, dotenv=dotenv)
        return raw if raw is None or raw.strip() else None

    defaults = Settings()
    data_file = get('DATA_FILE')
    log_dir = get('LOG_DIR')
    return Settings(
        data_file=Path(data_file).expanduser() if data_file else defaults.data_file,
        log_dir=Path(log_dir).expanduser() if log_dir else defaults.log_dir,
        log_level=parse_level(get('LOG_LEVEL'), defaults.log_level),
        alt_screen=parse_bool(get('ALT_SCREEN'), defaults.alt_screen),
    )


_DOTENV: Dict[str, str] = read_env_file()
