#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcomponents/logging_utils.py
"""Logging setup for applications embedding mdcomponents.

Every module logs through ``logging.getLogger(__name__)``, so all records
sit below the ``mdcomponents`` logger. :func:`configure_logging` attaches
handlers to that logger only and leaves the host's root logger alone.

Examples
--------
    >>> logger = configure_logging("DEBUG", trace_mode=True)
    >>> logger.name
    'mdcomponents'

"""

from __future__ import annotations

import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "mdcomponents"

TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
SIMPLE_FORMAT = "%(levelname)s: %(message)s"


def resolve_log_level(log_level: int | str) -> int:
    """Turn a numeric level or level name into a numeric level; unknown names give INFO."""
    if isinstance(log_level, int):
        return log_level
    level = logging.getLevelName(str(log_level).upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
    logger_name: str = PACKAGE_LOGGER,
) -> logging.Logger:
    """Send compiler, tokenizer and parser log records to stderr and optionally a file.

    Calling this again replaces the handlers installed by the previous call.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or string name (e.g., "DEBUG").
    log_file : str, optional
        Path of a file that receives the same records as stderr.
    trace_mode : bool, default False
        When true, emit timestamps and logger names, which shows which
        module matched an extension or dropped an image.
    logger_name : str, default "mdcomponents"
        Logger to configure; pass ``""`` for the root logger.

    Returns
    -------
    logging.Logger
        The configured logger.

    """
    resolved_level = resolve_log_level(log_level)

    logger = logging.getLogger(logger_name)
    logger.setLevel(resolved_level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if trace_mode:
        formatter = logging.Formatter(TRACE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    else:
        formatter = logging.Formatter(SIMPLE_FORMAT)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(resolved_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as exc:
            logger.warning(f"Could not create log file {log_file}: {exc}")
        else:
            file_handler.setLevel(resolved_level)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)
            logger.debug(f"Logging to file: {log_file}")

    # Named loggers would otherwise repeat every record through the root handlers
    logger.propagate = logger_name == ""
    return logger


__all__ = ["configure_logging", "resolve_log_level"]
