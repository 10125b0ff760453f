"""Logging setup for the console application.

The console is shared with the interactive menu, so the console handler
only shows warnings and errors; the optional log file receives everything
at the configured level.
"""

import logging
import sys
from typing import Optional

from .config import Settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_log_level(level_name: str) -> int:
    """Convert log level name to logging constant."""
    levels = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    return levels.get(level_name.upper(), logging.INFO)


def configure_logging(settings: Settings, console_level: Optional[int] = None) -> logging.Logger:
    """
    Configure the ``personal_training`` logger hierarchy.

    Args:
        settings: Application settings (log level and optional log file)
        console_level: Override for the console handler level

    Returns:
        The package root logger
    """
    logger = logging.getLogger("personal_training")
    level = get_log_level(settings.log_level)
    logger.setLevel(level)

    # Avoid duplicate handlers when called twice
    if logger.handlers:
        return logger

    formatter = logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level if console_level is not None else logging.WARNING)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if settings.log_file:
        settings.log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(settings.log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger
