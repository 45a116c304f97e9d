"""
Logging utilities for the list pager.

Provides a centralized logging configuration for the entire package.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

# Package root logger
_root_logger = logging.getLogger("list_pager")

# Level to restore on enable()
_saved_level: int | None = None


def setup_logging(
    level: str | int = "INFO",
    format: str | None = None,
    stream: TextIO | None = None,
    file: str | None = None,
) -> None:
    """
    Configure logging for the list pager.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL) or int
        format: Custom log format string
        stream: Output stream (defaults to stderr)
        file: Optional file path to write logs. When given, no stream
            handler is installed so log lines never land on the drawn list.
            The file is created on the first record.

    Example:
        from list_pager.logging import setup_logging

        # Basic setup
        setup_logging("DEBUG")

        # Keep the terminal clean while the list is running
        setup_logging("DEBUG", file="pager.log")
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    _root_logger.setLevel(level)
    _root_logger.handlers.clear()

    if format is None:
        format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

    formatter = logging.Formatter(format)

    if file:
        file_handler = logging.FileHandler(file, encoding="utf-8", delay=True)
        file_handler.setFormatter(formatter)
        file_handler.setLevel(level)
        _root_logger.addHandler(file_handler)
        return

    stream_handler = logging.StreamHandler(stream or sys.stderr)
    stream_handler.setFormatter(formatter)
    stream_handler.setLevel(level)
    _root_logger.addHandler(stream_handler)


def get_logger(name: str) -> logging.Logger:
    """
    Get a child logger for a submodule.

    Args:
        name: Submodule name (e.g., "pager", "events")

    Returns:
        Logger instance
    """
    if name.startswith("list_pager."):
        return logging.getLogger(name)
    return logging.getLogger(f"list_pager.{name}")


def set_level(level: str | int) -> None:
    """Set the log level for the list pager."""
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    _root_logger.setLevel(level)


def disable() -> None:
    """Disable all logging for the list pager."""
    global _saved_level
    if _saved_level is None:
        _saved_level = _root_logger.level
    # child loggers inherit this effective level
    _root_logger.setLevel(logging.CRITICAL + 1)


def enable() -> None:
    """Re-enable logging for the list pager."""
    global _saved_level
    if _saved_level is not None:
        _root_logger.setLevel(_saved_level)
        _saved_level = None
