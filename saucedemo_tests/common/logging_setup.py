"""
================================================================================
Logging Setup
================================================================================

Centralized Loguru configuration for the suite and the runner.

Author: Automation Team
License: MIT
================================================================================
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from .config_loader import ConfigLoader


DEFAULT_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}"

_logger_initialized: bool = False


def init_logger(
    level: Optional[str] = None,
    format_str: Optional[str] = None,
    log_file: Optional[str] = None,
    force: bool = False,
) -> None:
    """
    Initializes the global Loguru logger with consistent configuration.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to config value.
        format_str: Custom log format string. Defaults to config value.
        log_file: Optional log file path. Defaults to `logging.file`.
        force: Reconfigure even if already initialized.
    """
    global _logger_initialized

    if _logger_initialized and not force:
        return

    config = ConfigLoader.default()
    log_level = (level or config.get("logging.level", "INFO")).upper()
    log_format = format_str or config.get("logging.format", DEFAULT_FORMAT)

    logger.remove()
    logger.add(
        sys.stderr,
        level=log_level,
        format=log_format,
        colorize=True,
        backtrace=True,
        diagnose=False,
    )

    log_file = log_file or config.get("logging.file", None)
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            level=log_level,
            format=log_format.replace("{level: <8}", "{level}"),  # Remove padding for file
            rotation=config.get("logging.rotation", "10 MB"),
            retention=config.get("logging.retention", "7 days"),
            compression="zip",
        )

    _logger_initialized = True
    logger.debug(f"Logger initialized with level: {log_level}")


def get_logger():
    """Return the Loguru logger, initializing it on first use."""
    if not _logger_initialized:
        init_logger()
    return logger


__all__ = [
    "init_logger",
    "get_logger",
]
