"""Domain models for the medianav application."""

from medianav.models.core import (
    FileEntry,
    FilterKind,
    MediaCategory,
    SortKey,
    ViewMode,
)
from medianav.models.favorite import FavoriteEntry
from medianav.models.state import BrowserState, NavStatus

__all__ = [
    "BrowserState",
    "FavoriteEntry",
    "FileEntry",
    "FilterKind",
    "MediaCategory",
    "NavStatus",
    "SortKey",
    "ViewMode",
]
