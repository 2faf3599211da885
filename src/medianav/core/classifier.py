"""Classifier for filesystem entries.

This module maps a raw filesystem path to a :class:`FileEntry`, deriving the
mime type from a fixed extension table and the media-category flags from the
mime prefix or a fixed extension set.
"""

import logging
import os
import stat as stat_module
from datetime import datetime
from pathlib import Path
from typing import Dict, FrozenSet, Optional

from medianav.models.core import FileEntry, MediaCategory

# Logger for this module
logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "application/octet-stream"

MIME_TYPES: Dict[str, str] = {
    # Video
    "mp4": "video/mp4",
    "avi": "video/x-msvideo",
    "mkv": "video/x-matroska",
    "mov": "video/quicktime",
    "wmv": "video/x-ms-wmv",
    "flv": "video/x-flv",
    "3gp": "video/3gpp",
    "webm": "video/webm",
    "m4v": "video/x-m4v",
    "ts": "video/mp2t",
    # Audio
    "mp3": "audio/mpeg",
    "wav": "audio/wav",
    "aac": "audio/aac",
    "flac": "audio/flac",
    "ogg": "audio/ogg",
    "m4a": "audio/mp4",
    "wma": "audio/x-ms-wma",
    "amr": "audio/amr",
    # Image
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "bmp": "image/bmp",
    "webp": "image/webp",
    "svg": "image/svg+xml",
    # Document
    "txt": "text/plain",
    "pdf": "application/pdf",
    "doc": "application/msword",
    "docx": (
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
    ),
    "xls": "application/vnd.ms-excel",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "ppt": "application/vnd.ms-powerpoint",
    "pptx": (
        "application/vnd.openxmlformats-officedocument.presentationml.presentation"
    ),
    # Archive
    "zip": "application/zip",
    "rar": "application/x-rar-compressed",
    "7z": "application/x-7z-compressed",
    "tar": "application/x-tar",
    "gz": "application/gzip",
}

CATEGORY_EXTENSIONS: Dict[MediaCategory, FrozenSet[str]] = {
    MediaCategory.VIDEO: frozenset(
        {"mp4", "avi", "mkv", "mov", "wmv", "flv", "3gp", "webm", "m4v", "ts"}
    ),
    MediaCategory.AUDIO: frozenset(
        {"mp3", "wav", "aac", "flac", "ogg", "m4a", "wma", "amr"}
    ),
    MediaCategory.IMAGE: frozenset(
        {"jpg", "jpeg", "png", "gif", "bmp", "webp", "svg"}
    ),
    MediaCategory.DOCUMENT: frozenset(
        {"txt", "pdf", "doc", "docx", "xls", "xlsx", "ppt", "pptx"}
    ),
    MediaCategory.ARCHIVE: frozenset({"zip", "rar", "7z", "tar", "gz"}),
}

# Document and archive have no mime prefix check.
CATEGORY_MIME_PREFIXES: Dict[MediaCategory, Optional[str]] = {
    MediaCategory.VIDEO: "video/",
    MediaCategory.AUDIO: "audio/",
    MediaCategory.IMAGE: "image/",
    MediaCategory.DOCUMENT: None,
    MediaCategory.ARCHIVE: None,
}


def extension_of(name: str) -> str:
    """Return the lowercase text after the last dot of *name*.

    Args:
        name: A file name (not a full path).

    Returns:
        The extension without the dot, or an empty string if there is none.
    """
    if "." not in name:
        return ""
    return name.rsplit(".", 1)[1].lower()


def mime_type_for(extension: str) -> str:
    """Look up the mime type for an extension, defaulting to a binary type."""
    return MIME_TYPES.get(extension.lower(), DEFAULT_MIME_TYPE)


def is_category(extension: str, mime_type: str, category: MediaCategory) -> bool:
    """Check one category flag.

    The mime prefix and the extension set are checked independently; either
    one is enough.
    """
    prefix = CATEGORY_MIME_PREFIXES[category]
    if prefix is not None and mime_type.startswith(prefix):
        return True
    return extension in CATEGORY_EXTENSIONS[category]


def _stat(path: Path) -> os.stat_result:
    try:
        return path.stat()
    except FileNotFoundError:
        # Dangling symlink: describe the link itself.
        return path.lstat()


def classify(path: Path) -> FileEntry:
    """Build a :class:`FileEntry` for *path*.

    Args:
        path: The filesystem entry to classify.

    Returns:
        The classified entry. Directories get size 0, no extension and no
        category flags.

    Raises:
        OSError: If the entry cannot be stat'ed at all.
    """
    path = path.absolute()
    st = _stat(path)
    is_directory = stat_module.S_ISDIR(st.st_mode)
    extension = "" if is_directory else extension_of(path.name)
    mime_type = mime_type_for(extension)

    return FileEntry(
        path=path,
        name=path.name or str(path),
        is_directory=is_directory,
        size=0 if is_directory else st.st_size,
        modified=datetime.fromtimestamp(st.st_mtime),
        extension=extension,
        mime_type=mime_type,
        is_video=is_category(extension, mime_type, MediaCategory.VIDEO),
        is_audio=is_category(extension, mime_type, MediaCategory.AUDIO),
        is_image=is_category(extension, mime_type, MediaCategory.IMAGE),
        is_document=is_category(extension, mime_type, MediaCategory.DOCUMENT),
        is_archive=is_category(extension, mime_type, MediaCategory.ARCHIVE),
    )
