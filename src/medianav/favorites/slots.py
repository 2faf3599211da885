"""Persisted string slots backing the favorites store.

A slot holds exactly one text blob per installation. :class:`FileSlot` keeps
it in a file and replaces that file atomically on every write; a reader never
sees a half-written blob.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional, Protocol

# Logger for this module
logger = logging.getLogger(__name__)


class PreferenceSlot(Protocol):
    """A single persisted string value."""

    def read(self) -> Optional[str]:
        """Return the stored blob, or None if nothing was stored yet."""
        ...

    def write(self, blob: str) -> None:
        """Replace the stored blob."""
        ...


class MemorySlot:
    """In-memory slot, useful for tests and throwaway sessions."""

    def __init__(self, blob: Optional[str] = None) -> None:
        self.blob = blob

    def read(self) -> Optional[str]:
        return self.blob

    def write(self, blob: str) -> None:
        self.blob = blob


class FileSlot:
    """Slot stored in a UTF-8 text file.

    Args:
        path: File holding the blob; parent directories are created on the
            first write.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def read(self) -> Optional[str]:
        if not self.path.exists():
            return None
        try:
            return self.path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            # Corrupt blob: treat it as empty; the next write replaces it.
            logger.warning(f"Ignoring unreadable favorites file {self.path}: {e}")
            return None

    def write(self, blob: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(blob)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.debug(f"Wrote {len(blob)} characters to {self.path}")
