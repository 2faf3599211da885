"""Directory enumeration for medianav.

This module lists a directory's immediate children, collects media files from
a whole subtree, and discovers storage roots.
- Every function absorbs filesystem errors: a missing path, a non-directory,
  or an unreadable directory gives an empty result instead of an exception.
- Recursive collection skips unreadable subdirectories without aborting and
  remembers visited directories by ``(st_dev, st_ino)`` so that symlink
  cycles cannot recurse forever.

Design:
- These functions are synchronous; :class:`medianav.fs.lister.FileLister`
  runs them off the event loop.
- Classification happens here, so callers only ever see FileEntry objects.
"""

import logging
import os
from pathlib import Path
from typing import List, Optional, Set, Tuple

from medianav.core.classifier import classify
from medianav.core.sorter import sort_entries
from medianav.models.core import FileEntry, MediaCategory, SortKey

# Logger for this module
logger = logging.getLogger(__name__)

_CATEGORY_FLAGS = {
    MediaCategory.VIDEO: "is_video",
    MediaCategory.AUDIO: "is_audio",
    MediaCategory.IMAGE: "is_image",
    MediaCategory.DOCUMENT: "is_document",
    MediaCategory.ARCHIVE: "is_archive",
}


def _is_listable(directory: Path) -> bool:
    try:
        return directory.is_dir()
    except OSError:
        return False


def list_directory(
    path: Path, sort_key: Optional[SortKey] = SortKey.NAME
) -> List[FileEntry]:
    """List the immediate children of *path*.

    Args:
        path: Directory to list.
        sort_key: Order of the result, or None to keep directory order.

    Returns:
        Classified children, or an empty list if *path* does not exist, is
        not a directory, or cannot be read.
    """
    directory = Path(path)
    if not _is_listable(directory):
        logger.debug(f"Not a listable directory: {directory}")
        return []

    try:
        children = list(directory.iterdir())
    except OSError as e:
        logger.warning(f"Error listing directory {directory}: {e}")
        return []

    entries: List[FileEntry] = []
    for child in children:
        try:
            entries.append(classify(child))
        except OSError as e:
            # Entry vanished or cannot be stat'ed; leave it out.
            logger.debug(f"Skipping {child}: {e}")

    if sort_key is None:
        return entries
    return sort_entries(entries, sort_key)


def _collect(
    directory: Path,
    flag: str,
    found: List[FileEntry],
    visited: Set[Tuple[int, int]],
    depth: int,
    max_depth: Optional[int],
) -> None:
    try:
        st = directory.stat()
    except OSError as e:
        logger.debug(f"Skipping unreadable directory {directory}: {e}")
        return
    identity = (st.st_dev, st.st_ino)
    if identity in visited:
        logger.debug(f"Skipping already visited directory {directory}")
        return
    visited.add(identity)

    try:
        children = list(directory.iterdir())
    except OSError as e:
        logger.debug(f"Skipping unreadable directory {directory}: {e}")
        return

    for child in children:
        if _is_listable(child):
            if max_depth is None or depth < max_depth:
                _collect(child, flag, found, visited, depth + 1, max_depth)
            continue
        try:
            entry = classify(child)
        except OSError as e:
            logger.debug(f"Skipping {child}: {e}")
            continue
        if getattr(entry, flag):
            found.append(entry)


def collect_media(
    path: Path,
    category: MediaCategory,
    sort_key: Optional[SortKey] = SortKey.NAME,
    *,
    max_depth: Optional[int] = None,
) -> List[FileEntry]:
    """Recursively collect every file of *category* under *path*.

    Directories are traversed but never returned.

    Args:
        path: Root of the scan.
        category: Which category flag a file must have.
        sort_key: Order of the result, or None to keep discovery order.
        max_depth: How many directory levels below *path* to descend
            (None for no limit, 0 for *path* only).

    Returns:
        Matching files, or an empty list if *path* is not a readable directory.
    """
    root = Path(path)
    if not _is_listable(root):
        return []

    found: List[FileEntry] = []
    _collect(root, _CATEGORY_FLAGS[category], found, set(), 0, max_depth)
    logger.debug(f"Collected {len(found)} {category.value} files under {root}")

    if sort_key is None:
        return found
    return sort_entries(found, sort_key)


def storage_roots(
    primary_root: Path,
    mount_dir: Path,
    primary_alias: str,
) -> List[Path]:
    """Return the primary root followed by readable mounted volumes.

    Args:
        primary_root: Always reported first.
        mount_dir: Directory whose readable subdirectories are extra volumes.
        primary_alias: Subdirectory name (case-insensitive) under *mount_dir*
            that aliases the primary root and is therefore excluded.

    Returns:
        List of absolute root paths.
    """
    roots = [Path(primary_root).absolute()]
    try:
        candidates = sorted(Path(mount_dir).iterdir())
    except OSError as e:
        logger.debug(f"No mounted volumes under {mount_dir}: {e}")
        return roots

    for candidate in candidates:
        if candidate.name.lower() == primary_alias.lower():
            continue
        if _is_listable(candidate) and os.access(candidate, os.R_OK):
            roots.append(candidate.absolute())
    return roots


def parent_path(path: Path) -> Optional[Path]:
    """Return the parent of *path*, or None at the filesystem root."""
    current = Path(path).absolute()
    parent = current.parent
    if parent == current:
        return None
    return parent
