"""Diagnostics for serverlog itself, built on top of :mod:`loguru`.

These are the package's own messages (writer lifecycle, rotation, fatal I/O
errors). They never reach the application's daily logfiles.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

CONSOLE_FORMAT = "<dim>{time:HH:mm:ss}</dim> <magenta>serverlog</magenta> <level>{level: <8}</level> {message}"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} serverlog {level: <8} {thread.name} {message}"


def setup_logging(log_file: Optional[Path] = None, level: str = "WARNING") -> None:
    """Route serverlog diagnostics to stderr and, optionally, a file.

    Only warnings and worse are shown by default; the writer and overseer
    lifecycle messages are DEBUG/INFO.

    Args:
        log_file: Optional file path for a diagnostics sink. Never point this
            at the application's daily logfiles.
        level: Minimum log level (string understood by loguru).
    """

    logger.remove()
    logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT, colorize=True)
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(log_file, level=level, format=FILE_FORMAT, colorize=False)


__all__ = ["setup_logging", "logger", "CONSOLE_FORMAT", "FILE_FORMAT"]
