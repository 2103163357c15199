# src/taskboard/logging_setup.py

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_FILE_NAME = "taskboard.log"

# Console floors per logger prefix (most specific first). The REPL prints its
# own replies, so per-mutation debug lines and console lifecycle messages only
# reach the file; persistence failures and skipped records still surface.
_CONSOLE_FLOORS: tuple[tuple[str, int], ...] = (
    ("taskboard.tasks.task_store", logging.WARNING),
    ("taskboard.tasks.task_codec", logging.WARNING),
    ("taskboard.storage", logging.WARNING),
    ("taskboard.connectors", logging.WARNING),
    ("taskboard.core.debounce", logging.WARNING),
    ("taskboard", logging.NOTSET),
    ("py.warnings", logging.ERROR),
)


def console_floor(logger_name: str) -> int:
    for prefix, level in _CONSOLE_FLOORS:
        if logger_name == prefix or logger_name.startswith(prefix + "."):
            return level
    # Third-party loggers.
    return logging.ERROR


def parse_level(name: str | int | None, default: int = logging.INFO) -> int:
    """Map "debug" / "WARNING" / 10 to a logging level; unknown names give `default`."""
    if isinstance(name, int):
        return name
    level = logging.getLevelName(str(name or "").strip().upper())
    return level if isinstance(level, int) else default


class _ConsoleFilter(logging.Filter):
    def __init__(self, level: int) -> None:
        super().__init__()
        self.level = level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= max(self.level, console_floor(record.name))


def setup_logging(
    *,
    log_dir: str | Path = ".local/taskboard",
    console_level: int | str = logging.INFO,
    file_level: int | str = logging.DEBUG,
    max_bytes: int = 1_000_000,
    backup_count: int = 3,
) -> Path:
    """
    Console: filtered by _CONSOLE_FLOORS, at `console_level` or above.
    File: everything at `file_level`, rotated (every store mutation logs a line).

    Call once, before the store is created. Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setFormatter(fmt)
    ch.addFilter(_ConsoleFilter(parse_level(console_level)))
    root.addHandler(ch)

    fh = RotatingFileHandler(
        str(log_file), maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
    )
    fh.setLevel(parse_level(file_level, logging.DEBUG))
    fh.setFormatter(fmt)
    root.addHandler(fh)

    logging.captureWarnings(True)
    return log_file
