"""Centralized logging configuration for ttynamed.

Console logs go to stderr: stdout carries command output (a resolved
device path is meant to be captured by shell substitution).
"""

from __future__ import annotations

import contextlib
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, TextIO, Union

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"
_MAX_BYTES = 256 * 1024
_BACKUP_COUNT = 2

LOG_LEVELS: dict[str, int] = {
    "critical": logging.CRITICAL,
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


def coerce_level(level: Union[int, str]) -> int:
    if isinstance(level, str):
        name = level.strip().lower()
        if name not in LOG_LEVELS:
            raise ValueError(f"Unknown log level '{level}'")
        return LOG_LEVELS[name]
    return int(level)


def configure_logging(
    level: Union[int, str] = logging.WARNING,
    *,
    console: bool = True,
    stream: Optional[TextIO] = None,
    log_file: Optional[Union[str, Path]] = None,
) -> None:
    """Configure root logging with a consistent formatter and handlers.

    Existing root handlers are replaced, so calling this again reconfigures
    logging from scratch.

    Args:
        level: Desired logging level (int or name such as "info").
        console: Whether to emit logs to the console stream.
        stream: Console stream; defaults to ``sys.stderr``.
        log_file: Optional path for a rotating file handler.
    """

    numeric_level = coerce_level(level)
    root = logging.getLogger()

    for handler in list(root.handlers):
        root.removeHandler(handler)
        with contextlib.suppress(Exception):
            handler.close()

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)

    if console:
        stream_handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
        stream_handler.setLevel(numeric_level)
        stream_handler.setFormatter(formatter)
        root.addHandler(stream_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=_MAX_BYTES,
            backupCount=_BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    if not root.handlers:
        root.addHandler(logging.NullHandler())

    root.setLevel(numeric_level)
    logging.captureWarnings(True)


__all__ = ["configure_logging", "coerce_level", "LOG_FORMAT", "LOG_DATEFMT", "LOG_LEVELS"]
