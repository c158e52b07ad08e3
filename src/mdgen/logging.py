"""Loggers for the build pipeline; handlers are installed only by the CLI"""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "mdgen"
_CONSOLE_FORMAT = "[mdgen] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Logger for one mdgen component: get_logger("parse") -> 'mdgen.parse'."""
    return logging.getLogger(f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME)


def _handler(handler: logging.Handler, level: int, fmt: str) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def configure_logging(*, verbose: bool = False, log_file: Path | None = None) -> logging.Logger:
    """Send mdgen records to stderr, and to log_file when given.

    Build progress is INFO; per-document cache decisions are DEBUG (verbose).
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # handlers from an earlier command in the same process are replaced
    for old in list(logger.handlers):
        logger.removeHandler(old)

    logger.addHandler(_handler(logging.StreamHandler(), level, _CONSOLE_FORMAT))
    if log_file is not None:
        logger.addHandler(_handler(logging.FileHandler(log_file, encoding="utf-8"), level, _FILE_FORMAT))
    return logger
