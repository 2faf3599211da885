"""Shared fixtures for the medianav test suite."""

from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

import pytest

from medianav.core.classifier import extension_of, is_category, mime_type_for
from medianav.models.core import FileEntry, MediaCategory

EntryFactory = Callable[..., FileEntry]


@pytest.fixture
def make_entry(tmp_path: Path) -> EntryFactory:
    """Build FileEntry objects without touching the disk.

    Flags are derived with the classifier's own helpers so the entries look
    exactly like classified ones.
    """

    def factory(
        name: str,
        *,
        is_directory: bool = False,
        size: int = 0,
        modified: Optional[datetime] = None,
    ) -> FileEntry:
        extension = "" if is_directory else extension_of(name)
        mime = mime_type_for(extension)
        return FileEntry(
            path=tmp_path / name,
            name=name,
            is_directory=is_directory,
            size=0 if is_directory else size,
            modified=modified or datetime(2024, 1, 1, 12, 0, 0),
            extension=extension,
            mime_type=mime,
            is_video=is_category(extension, mime, MediaCategory.VIDEO),
            is_audio=is_category(extension, mime, MediaCategory.AUDIO),
            is_image=is_category(extension, mime, MediaCategory.IMAGE),
            is_document=is_category(extension, mime, MediaCategory.DOCUMENT),
            is_archive=is_category(extension, mime, MediaCategory.ARCHIVE),
        )

    return factory


@pytest.fixture
def media_tree(tmp_path: Path) -> Path:
    """Create a small library with media nested at several depths.

    Layout::

        library/
            Movies/
                Action/
                    heat.mkv
                    heat.srt
                clip.MP4
            Music/
                Albums/
                    Live/
                        track01.flac
                song.mp3
            notes.txt
            cover.jpg
    """
    root = tmp_path / "library"
    files = {
        "Movies/Action/heat.mkv": b"v" * 300,
        "Movies/Action/heat.srt": b"s" * 10,
        "Movies/clip.MP4": b"v" * 200,
        "Music/Albums/Live/track01.flac": b"a" * 50,
        "Music/song.mp3": b"a" * 40,
        "notes.txt": b"n" * 5,
        "cover.jpg": b"i" * 20,
    }
    for relative, content in files.items():
        target = root / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(content)
    return root
