"""Logging setup for Romanum.

Modules log through get_logger("<module>") under the "romanum" namespace.
Only the CLI calls setup_logging.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime

from . import config

ROOT_LOGGER = "romanum"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class StructuredFormatter(logging.Formatter):
    """One line per record: ISO timestamp, level, logger name, message.

    Tracebacks, when present, follow on the next lines.
    """

    def __init__(self) -> None:
        super().__init__(LOG_FORMAT)

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        return datetime.fromtimestamp(record.created).isoformat()


def setup_logging(level: str | None = None, log_file: str | None = None) -> logging.Logger:
    """Configure the "romanum" logger for stderr and an optional file.

    Calling it again replaces the previous handlers.

    Args:
        level: Level name; defaults to config.LOG_LEVEL
        log_file: Optional path, appended to in UTF-8
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(getattr(logging, (level or config.LOG_LEVEL).upper(), logging.WARNING))

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(StructuredFormatter())
        logger.addHandler(handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
