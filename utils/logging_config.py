"""Logging setup: console output plus a per-run debug log file."""

from __future__ import annotations

import sys
from datetime import datetime
from pathlib import Path

from loguru import logger

# Fetches, sort/search computations and change streams run on worker threads
LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{thread.name}</cyan> | {name}:{function}:{line} - <level>{message}</level>"
)


def configure_logging(
    logs_dir: Path,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    retention: int = 5,
) -> Path | None:
    """
    Send log records to stderr and to a new log file under ``logs_dir``.

    The console only shows ``console_level`` and above; the file keeps
    ``file_level`` and above so stale-result drops and sync activity can be
    traced after the fact.

    Returns the log file path, or None when the directory is not writable.
    """
    logger.remove()
    logger.add(sys.stderr, level=console_level, format=LOG_FORMAT, enqueue=True)

    try:
        logs_dir.mkdir(parents=True, exist_ok=True)
        log_file = logs_dir / f"business_cards_{datetime.now():%Y%m%d_%H%M%S}.log"
        logger.add(
            log_file,
            level=file_level,
            format=LOG_FORMAT,
            rotation="5 MB",
            retention=retention,
            backtrace=True,
            diagnose=False,
            enqueue=True,
        )
    except OSError as exc:
        logger.warning(f"File logging disabled; unable to write to {logs_dir}: {exc}")
        return None

    logger.debug(f"Logging to {log_file} (console level {console_level})")
    return log_file
