"""
Unified logging module
======================

Provides the shared logging configuration for the tablelens package.

Usage:
    from tablelens.logger import get_logger

    logger = get_logger(__name__)
    logger.info("Processing table: %s", table_id)
    logger.debug("Column %d classified as %s", idx, column_type)
"""

import logging
import sys
from typing import Optional

# Default log format with timestamp, level, and module name
DEFAULT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_LEVEL = logging.INFO

ROOT_LOGGER_NAME = "tablelens"

# Global flag to track if root logger has been configured
_root_configured = False


def _configure_root_logger() -> None:
    """
    Attach a stdout handler to the package root logger.

    Runs only once; guarded by the module-level ``_root_configured`` flag.
    """
    global _root_configured
    if _root_configured:
        return

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.DEBUG)
    console_handler.setFormatter(logging.Formatter(DEFAULT_FORMAT, datefmt=DEFAULT_DATE_FORMAT))

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(_level_from_settings())
    root_logger.addHandler(console_handler)
    root_logger.propagate = False

    _root_configured = True


def _level_from_settings() -> int:
    # Imported lazily: config must stay importable without logging side effects.
    from tablelens.config import get_settings

    name = str(get_settings().LOG_LEVEL or "").strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else DEFAULT_LEVEL


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Return a logger for *name*, configuring the package root on first use.

    Args:
        name: logger name, normally the calling module's ``__name__``
        level: optional explicit level for this logger only
    """
    _configure_root_logger()

    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level)
    return logger


def set_level(level: int, logger_name: Optional[str] = None) -> None:
    """
    Set the level of *logger_name*, or of the package root when omitted.

    Example:
        set_level(logging.DEBUG)                              # every tablelens module
        set_level(logging.DEBUG, "tablelens.table.column_types")  # classifier only
    """
    logger = logging.getLogger(logger_name or ROOT_LOGGER_NAME)
    logger.setLevel(level)
