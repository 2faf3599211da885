"""Core domain models for medianav.

This module defines the data structures shared by the classifier, lister,
sorter, filter engine and navigation controller.
- FileEntry is the classified, immutable view of one filesystem object.
- SortKey, FilterKind and ViewMode are closed enums so that browser settings
  stay serializable and can be passed between threads freely.
- All file paths are absolute for safety and cross-platform correctness.

Design:
- Category flags on FileEntry are computed independently by the classifier;
  an extension could satisfy two categories and both flags would be set.
- FileEntry is frozen: a listing is rebuilt from scratch on every fetch
  instead of being mutated in place.
"""

from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import FrozenSet

from pydantic import BaseModel, ConfigDict, model_validator

SIZE_UNITS = ("B", "KB", "MB", "GB", "TB")


class MediaCategory(str, Enum):
    """Category of a file derived from its extension and mime type."""

    VIDEO = "video"
    AUDIO = "audio"
    IMAGE = "image"
    DOCUMENT = "document"
    ARCHIVE = "archive"


class SortKey(str, Enum):
    """Field a listing is ordered by (always after the directories-first rule)."""

    NAME = "name"
    SIZE = "size"
    DATE = "date"
    TYPE = "type"


class FilterKind(str, Enum):
    """The single category filter that may be active on a listing."""

    NONE = "none"
    VIDEO = "video"
    AUDIO = "audio"
    IMAGE = "image"
    DOCUMENT = "document"


class ViewMode(str, Enum):
    """How a collaborator lays out the listing."""

    LIST = "list"
    GRID = "grid"


def format_file_size(size: int) -> str:
    """Format a byte count for display.

    Divides by 1024 while walking up the B/KB/MB/GB/TB ladder and stops at TB
    even when the value is still larger than 1024.

    Args:
        size: Size in bytes.

    Returns:
        The size with one fractional digit, e.g. ``"1.5 KB"``.

    Example:
        >>> format_file_size(1536)
        '1.5 KB'
    """
    value = float(size)
    unit_index = 0
    while value >= 1024 and unit_index < len(SIZE_UNITS) - 1:
        value /= 1024
        unit_index += 1
    return f"{value:.1f} {SIZE_UNITS[unit_index]}"


class FileEntry(BaseModel):
    """A classified filesystem entry.

    Built by :func:`medianav.core.classifier.classify` for every listing and
    discarded when the next listing replaces it.
    """

    model_config = ConfigDict(frozen=True)

    path: Path
    """Absolute path; unique within a listing."""

    name: str
    """Display name (last path component)."""

    is_directory: bool
    """Whether the entry is a directory."""

    size: int = 0
    """Size in bytes (always 0 for directories)."""

    modified: datetime
    """Last modification time."""

    extension: str = ""
    """Lowercase extension without the dot (empty for directories)."""

    mime_type: str = "application/octet-stream"
    """Mime type derived from the extension table."""

    is_video: bool = False
    is_audio: bool = False
    is_image: bool = False
    is_document: bool = False
    is_archive: bool = False

    @property
    def display_size(self) -> str:
        """Human readable size, empty for directories."""
        if self.is_directory:
            return ""
        return format_file_size(self.size)

    @property
    def categories(self) -> FrozenSet[MediaCategory]:
        """All categories whose flag is set on this entry."""
        flags = {
            MediaCategory.VIDEO: self.is_video,
            MediaCategory.AUDIO: self.is_audio,
            MediaCategory.IMAGE: self.is_image,
            MediaCategory.DOCUMENT: self.is_document,
            MediaCategory.ARCHIVE: self.is_archive,
        }
        return frozenset(category for category, flag in flags.items() if flag)

    @property
    def is_playable(self) -> bool:
        """Whether the playback collaborator can open this entry."""
        return self.is_video or self.is_audio

    @model_validator(mode="after")
    def validate_entry(self: "FileEntry") -> "FileEntry":
        """Ensure the path is absolute and directories carry no size.

        Raises:
            ValueError: If the path is relative or a directory has a size.
        """
        if not self.path.is_absolute():
            raise ValueError(f"Path must be absolute: {self.path}")
        if self.is_directory and self.size != 0:
            raise ValueError(f"Directory size must be 0: {self.path}")
        return self
