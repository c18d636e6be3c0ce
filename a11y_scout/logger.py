# === FILE: a11y_scout/logger.py ===
"""Logging setup for **A11yScout**.

All crawl components log through children of the ``A11yScout`` logger
(``A11yScout.crawler``, ``A11yScout.render.http`` ...), obtained with
:func:`get_logger`. Records go to stderr, so the JSON printed by the CLI on
stdout stays machine-readable, and optionally to a rotating log file.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Union

DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOGGER_NAME: Final[str] = "A11yScout"
LOG_FILE_MAX_BYTES: Final[int] = 5 * 1024 * 1024
LOG_FILE_BACKUPS: Final[int] = 3

_LevelT = Union[int, str]


def _stderr_handler(fmt: str) -> logging.StreamHandler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def _rotating_handler(file: Path | str, fmt: str) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        filename=str(file),
        maxBytes=LOG_FILE_MAX_BYTES,
        backupCount=LOG_FILE_BACKUPS,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def configure(
    *,
    level: _LevelT = "INFO",
    log_file: str | Path | None = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Replace the handlers of the ``A11yScout`` logger.

    Parameters
    ----------
    level
        Numeric or textual level applied to the whole ``A11yScout`` tree.
    log_file
        Optional path of a rotating log file, written in addition to stderr.
    log_format
        :class:`logging.Formatter` format string shared by both handlers.
    """
    root = logging.getLogger(LOGGER_NAME)
    root.setLevel(level)

    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    root.addHandler(_stderr_handler(log_format))
    if log_file is not None:
        root.addHandler(_rotating_handler(log_file, log_format))

    root.propagate = False
    return root


def init_logging(
    level: _LevelT = "INFO",
    log_file: str | Path | None = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """CLI entry point for :func:`configure` (positional level allowed)."""
    return configure(level=level, log_file=log_file, log_format=log_format)


def get_logger(name: str) -> logging.Logger:
    """Child logger under the project logger, e.g. ``A11yScout.crawler``."""
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


logger: logging.Logger = configure()

__all__ = ["DEFAULT_FORMAT", "LOGGER_NAME", "logger", "configure", "init_logging", "get_logger"]
