"""Tests for the renderer module."""

import io
from datetime import datetime, timezone

from rich.console import Console

from medianav.cli.renderer import render_favorites, render_listing
from medianav.models.favorite import FavoriteEntry


def _console() -> Console:
    return Console(file=io.StringIO(), width=200, color_system=None)


def test_render_listing(make_entry) -> None:
    """Test the table lists every entry and ends with a summary line."""
    console = _console()
    entries = [
        make_entry("Shows", is_directory=True),
        make_entry("movie.mkv", size=1536),
        make_entry("song.mp3", size=10),
    ]

    render_listing(entries, console=console, title="/media")
    output = console.file.getvalue()

    assert "/media" in output
    assert "Shows/" in output
    assert "1.5 KB" in output
    assert "video/x-matroska" in output
    assert "2024-01-01 12:00" in output
    assert output.strip().splitlines()[-1] == "Directories: 1 | Files: 2"


def test_render_empty_listing() -> None:
    console = _console()
    render_listing([], console=console)
    assert "Directories: 0 | Files: 0" in console.file.getvalue()


def test_render_favorites() -> None:
    console = _console()
    favorites = [
        FavoriteEntry(
            path="/storage/Movies",
            added_at=datetime(2024, 2, 3, 4, 5, tzinfo=timezone.utc),
        ),
        FavoriteEntry(path="/storage/Music", name="Tunes"),
    ]

    render_favorites(favorites, console=console)
    output = console.file.getvalue()

    assert "Favorites" in output
    assert "Movies" in output
    assert "/storage/Movies" in output
    assert "2024-02-03 04:05" in output
    assert "Tunes" in output
