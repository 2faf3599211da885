"""Filesystem listing and operations for medianav."""

from medianav.fs.lister import FileLister
from medianav.fs.listing import collect_media, list_directory, parent_path, storage_roots
from medianav.fs.operations import (
    copy_file,
    create_directory,
    delete_file,
    move_file,
    rename_file,
)

__all__ = [
    "FileLister",
    "collect_media",
    "copy_file",
    "create_directory",
    "delete_file",
    "list_directory",
    "move_file",
    "parent_path",
    "rename_file",
    "storage_roots",
]
