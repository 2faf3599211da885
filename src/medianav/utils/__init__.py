"""Utility modules for medianav."""

from medianav.utils.config import BrowserSettings, load_settings, resolve_setting
from medianav.utils.debug import setup_logger

__all__ = [
    "BrowserSettings",
    "load_settings",
    "resolve_setting",
    "setup_logger",
]
