"""Configuration module."""
from .settings import Settings, get_settings, settings
from .log import setup_logging, get_logger

__all__ = [
    "Settings",
    "get_settings",
    "settings",
    "setup_logging",
    "get_logger",
]
