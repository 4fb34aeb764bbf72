"""Logging for the Library API.

`setup_logging()` installs two handlers on the root logger: a rich console
handler at the configured level, and a size-rotated file handler that keeps
DEBUG and above. Log file location and rotation come from the `[logging]`
section of config.ini.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from rich.logging import RichHandler


FILE_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
DEFAULT_MAX_BYTES = 5 * 1024 * 1024
DEFAULT_BACKUP_COUNT = 3

# Chatty at INFO; only their warnings reach our handlers
QUIET_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool", "oracledb", "httpx")

_installed: list[logging.Handler] = []


def _console_handler(level: int) -> logging.Handler:
    handler = RichHandler(
        level=level,
        rich_tracebacks=True,
        markup=False,
        show_path=False,
        log_time_format="[%H:%M:%S]",
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    return handler


def _file_handler(log_file: Path, max_bytes: int, backup_count: int) -> logging.Handler:
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        log_file,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S"))
    return handler


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[Path] = None,
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
) -> None:
    """Install console (and, when `log_file` is given, file) handlers once.

    Calling it again is a no-op until `reset_logging()` runs.
    """
    if _installed:
        return

    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    handlers = [_console_handler(level)]
    if log_file is not None:
        handlers.append(_file_handler(log_file, max_bytes, backup_count))

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for handler in handlers:
        root.addHandler(handler)
        _installed.append(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def reset_logging() -> None:
    """Detach and close the handlers installed by setup_logging()."""
    root = logging.getLogger()
    while _installed:
        handler = _installed.pop()
        root.removeHandler(handler)
        handler.close()


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
