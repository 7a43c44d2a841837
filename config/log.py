"""Logging configuration for the Academic Records service."""
import logging
import os
import sys
from typing import Optional

from .settings import settings

APP_LOGGER_NAME = "academic_records"

_logger: Optional[logging.Logger] = None


def setup_logging() -> logging.Logger:
    """
    Set up and return the application logger.

    Logs go to stdout and, when ``settings.log_file`` is set, to that file
    as well. Calling this more than once returns the same logger.
    """
    global _logger
    if _logger:
        return _logger

    logger = logging.getLogger(APP_LOGGER_NAME)
    logger.setLevel(settings.log_level.upper())

    # Prevent adding multiple handlers if called again
    if not logger.handlers:
        formatter = logging.Formatter(settings.log_format)

        console = logging.StreamHandler(sys.stdout)
        console.setFormatter(formatter)
        logger.addHandler(console)

        if settings.log_file:
            try:
                log_dir = os.path.dirname(settings.log_file)
                if log_dir and not os.path.exists(log_dir):
                    os.makedirs(log_dir)
                file_handler = logging.FileHandler(settings.log_file, mode="a", encoding="utf-8")
                file_handler.setFormatter(formatter)
                logger.addHandler(file_handler)
            except OSError as e:
                # Continue with console logging only
                logger.error(f"Failed to create file handler for {settings.log_file}: {e}")

    _logger = logger
    logger.debug("Logger initialized.")
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return the application logger, or a named child of it."""
    logger = _logger or setup_logging()
    if name:
        return logger.getChild(name)
    return logger
