"""Logging configuration for tasklog.

The REPL owns the terminal, so the console only gets warnings and errors;
everything else goes to a log file.
"""
from __future__ import annotations
import logging
import sys
from pathlib import Path
from typing import Union

LOG_FILE_NAME = 'tasklog.log'


def setup_logging(
    *,
    log_dir: Union[str, Path],
    file_level: int = logging.INFO,
    console_level: int = logging.WARNING,
) -> Path:
    """Install a file handler and a stderr handler on the root logger.

    Call this once, before the first log record. Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(min(file_level, console_level))
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(console_level)
    ch.setFormatter(fmt)
    root.addHandler(ch)

    fh = logging.FileHandler(str(log_file), encoding="utf-8")
    fh.setLevel(file_level)
    fh.setFormatter(fmt)
    root.addHandler(fh)

    logging.captureWarnings(True)
    return log_file
