"""Logging configuration for the blog engine.

Application logs go to stdout through named loggers; HTTP access lines go to
a separate append-only file.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

ACCESS_LOGGER_NAME = "blog_engine.access"


def setup_logging(
    level: int = logging.INFO,
    module_name: str = "blog_engine",
) -> logging.Logger:
    """Configure and return a logger with consistent formatting.

    Args:
        level: Logging level (default INFO).
        module_name: Name for the logger instance.

    Returns:
        Configured logger.
    """
    logger = logging.getLogger(module_name)

    if logger.handlers:
        return logger

    logger.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    return logger


def set_debug(enabled: bool) -> None:
    """Switch every blog_engine logger between DEBUG and INFO."""
    level = logging.DEBUG if enabled else logging.INFO
    for name in list(logging.root.manager.loggerDict):
        if name.startswith("blog_engine") and name != ACCESS_LOGGER_NAME:
            logger = logging.getLogger(name)
            logger.setLevel(level)
            for handler in logger.handlers:
                handler.setLevel(level)


def setup_access_log(path: str | Path) -> logging.Logger:
    """Return the access logger, appending bare lines to ``path``.

    The parent directory is created when missing. Calling this again with a
    different path replaces the file handler.
    """
    log_path = Path(path)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(ACCESS_LOGGER_NAME)
    logger.setLevel(logging.INFO)
    logger.propagate = False

    for handler in list(logger.handlers):
        if isinstance(handler, logging.FileHandler):
            if Path(handler.baseFilename) == log_path.resolve():
                return logger
            logger.removeHandler(handler)
            handler.close()

    handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    return logger


def sanitize_log_field(value: str) -> str:
    """Escape line breaks and tabs so a value stays on one log line."""
    return value.replace("\n", "\\n").replace("\r", "\\r").replace("\t", "\\t")
