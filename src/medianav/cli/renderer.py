"""Renderer for CLI output.

This module renders listings and favorites as Rich tables.
Directories are shown first in bold blue; files are coloured by category.
"""

from typing import Iterable, Optional

from rich.console import Console
from rich.table import Table

from medianav.models.core import FileEntry, MediaCategory
from medianav.models.favorite import FavoriteEntry

CATEGORY_STYLES = {
    MediaCategory.VIDEO: "magenta",
    MediaCategory.AUDIO: "green",
    MediaCategory.IMAGE: "cyan",
    MediaCategory.DOCUMENT: "yellow",
    MediaCategory.ARCHIVE: "red",
}


def _entry_style(entry: FileEntry) -> str:
    if entry.is_directory:
        return "bold blue"
    for category, style in CATEGORY_STYLES.items():
        if category in entry.categories:
            return style
    return "white"


def render_listing(
    entries: Iterable[FileEntry],
    console: Optional[Console] = None,
    title: Optional[str] = None,
) -> None:
    """Render a listing as a table with a summary line.

    Args:
        entries: The entries to show, already sorted and filtered.
        console: Optional Console instance to use for rendering.
        title: Optional table title, usually the listed directory.
    """
    console = console or Console()
    entries = list(entries)

    table = Table(title=title)
    table.add_column("Name")
    table.add_column("Size", justify="right")
    table.add_column("Modified")
    table.add_column("Type")

    for entry in entries:
        table.add_row(
            entry.name + ("/" if entry.is_directory else ""),
            entry.display_size,
            entry.modified.strftime("%Y-%m-%d %H:%M"),
            "dir" if entry.is_directory else entry.mime_type,
            style=_entry_style(entry),
        )

    console.print(table)

    directories = sum(1 for entry in entries if entry.is_directory)
    console.print(f"Directories: {directories} | Files: {len(entries) - directories}")


def render_favorites(
    favorites: Iterable[FavoriteEntry], console: Optional[Console] = None
) -> None:
    """Render the favorites list as a table."""
    console = console or Console()

    table = Table(title="Favorites")
    table.add_column("Name", style="bold")
    table.add_column("Path", style="cyan")
    table.add_column("Added")

    for favorite in favorites:
        table.add_row(
            favorite.display_name,
            favorite.path,
            favorite.added_at.strftime("%Y-%m-%d %H:%M"),
        )

    console.print(table)
