"""Filesystem mutation operations for medianav.

Provides create, delete, rename, copy and move helpers used by the browser.
Every helper reports its outcome as a boolean; OS errors are logged here and
never propagate to callers.

Recursive delete and copy have no rollback: a failure halfway through a tree
can leave it partially deleted or partially copied.
"""

import logging
import os
import shutil
from pathlib import Path

# Logger for this module
logger = logging.getLogger(__name__)


def _valid_name(name: str) -> bool:
    """Check that *name* is a single, non-empty path component."""
    if not name or name in {".", ".."}:
        return False
    separators = {"/", os.sep}
    if os.altsep:
        separators.add(os.altsep)
    return not any(sep in name for sep in separators)


def _is_within(candidate: Path, ancestor: Path) -> bool:
    """Return True if *candidate* is *ancestor* or lies below it."""
    candidate = candidate.resolve()
    ancestor = ancestor.resolve()
    return candidate == ancestor or ancestor in candidate.parents


def create_directory(parent: Path, name: str) -> bool:
    """Create the single directory *parent*/*name*.

    Returns:
        False if the name is invalid, the directory exists, or the parent is
        missing.
    """
    if not _valid_name(name):
        logger.warning(f"Invalid directory name: {name!r}")
        return False
    target = Path(parent) / name
    try:
        target.mkdir()
    except OSError as e:
        logger.warning(f"Error creating directory {target}: {e}")
        return False
    return True


def delete_file(path: Path) -> bool:
    """Delete a file, or a directory with everything below it.

    Symlinks are removed without touching their targets.
    """
    target = Path(path)
    try:
        if target.is_dir() and not target.is_symlink():
            shutil.rmtree(target)
        else:
            target.unlink()
    except OSError as e:
        logger.warning(f"Error deleting {target}: {e}")
        return False
    return True


def rename_file(path: Path, new_name: str) -> bool:
    """Rename *path* to *new_name* inside the same parent directory.

    Returns:
        False if the name is invalid, the target already exists, or the
        rename fails.
    """
    source = Path(path)
    if not _valid_name(new_name):
        logger.warning(f"Invalid file name: {new_name!r}")
        return False
    target = source.parent / new_name
    if os.path.lexists(target):
        logger.warning(f"Cannot rename {source}: {target} already exists")
        return False
    try:
        source.rename(target)
    except OSError as e:
        logger.warning(f"Error renaming {source} -> {target}: {e}")
        return False
    return True


def copy_file(src: Path, dst: Path) -> bool:
    """Copy *src* to *dst*, recursively for directories.

    Existing destination files are overwritten. A directory cannot be copied
    into itself, and a file cannot replace an existing directory.

    Example:
        >>> from pathlib import Path
        >>> from medianav.fs.operations import copy_file
        >>> src = Path('a.txt')
        >>> src.write_text('hello')
        >>> copy_file(src, Path('b.txt'))
        True
    """
    source = Path(src)
    target = Path(dst)
    try:
        if source.is_dir():
            if _is_within(target, source):
                logger.warning(f"Cannot copy {source} into itself ({target})")
                return False
            shutil.copytree(source, target, symlinks=True, dirs_exist_ok=True)
        else:
            if target.is_dir():
                logger.warning(f"Cannot replace directory {target} with a file")
                return False
            shutil.copy2(source, target)
    except OSError as e:
        logger.warning(f"Error copying {source} -> {target}: {e}")
        return False
    return True


def move_file(src: Path, dst: Path) -> bool:
    """Move *src* to *dst* by copying and then deleting the source.

    If the copy fails the source is untouched and any destination created by
    the failed copy is removed. If the copy succeeds but the source cannot be
    deleted, the source stays in place (the data now exists twice) and the
    move still reports success.
    """
    source = Path(src)
    target = Path(dst)
    existed = os.path.lexists(target)

    if not copy_file(source, target):
        if not existed and os.path.lexists(target):
            delete_file(target)
        return False

    if not delete_file(source):
        logger.warning(f"Moved {source} -> {target} but the source remains")
    return True
