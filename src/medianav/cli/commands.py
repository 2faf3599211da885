"""CLI commands for medianav.

This module implements the user-facing commands: directory listing, recursive
media scans, storage roots, favorites management and settings.
- Uses Typer for declarative CLI structure and option parsing.
- All table output is routed through Rich via ConsoleManager; ``--json``
  writes machine-readable output to stdout instead.
- Settings are resolved through utils.config (CLI > env > config > default).

Design:
- Commands are thin: each builds the relevant core object (controller, lister
  or favorites store) and drives it with ``asyncio.run``.
- Exit codes are defined as an Enum for clarity and maintainability.
"""

import asyncio
import json
import os
import sys
from enum import Enum
from pathlib import Path
from typing import Annotated, Any, Iterable, Optional

import typer

from medianav.cli.console import ConsoleManager, rich_enabled
from medianav.cli.renderer import render_favorites, render_listing
from medianav.core.navigation import NavigationController
from medianav.favorites.store import FavoriteStore
from medianav.fs.lister import FileLister
from medianav.models.core import FilterKind, MediaCategory, SortKey
from medianav.models.state import BrowserState
from medianav.utils.config import (
    BrowserSettings,
    get_setting,
    load_settings,
    set_setting,
)
from medianav.utils.debug import setup_logger

app = typer.Typer(
    name="medianav",
    help="Browse, classify and filter local media files.",
    add_completion=True,
)
fav_app = typer.Typer(help="Manage favorite directories.")
config_app = typer.Typer(help="Read and write medianav settings.")
app.add_typer(fav_app, name="fav")
app.add_typer(config_app, name="config")


class ExitCode(int, Enum):
    """Exit codes for CLI commands."""

    SUCCESS = 0
    ERROR = 1


DIRECTORY = Annotated[
    Path,
    typer.Argument(help="Directory to browse"),
]

SORT = Annotated[
    Optional[SortKey],
    typer.Option(
        "--sort",
        "-s",
        case_sensitive=False,
        help="Sort key (name, size, date, type). Defaults to the browse.sort setting.",
    ),
]

FILTER = Annotated[
    FilterKind,
    typer.Option(
        "--filter",
        "-f",
        case_sensitive=False,
        help="Only show entries of one category",
    ),
]

KIND = Annotated[
    MediaCategory,
    typer.Option(
        "--kind",
        "-k",
        case_sensitive=False,
        help="Category of files to collect",
    ),
]

JSON_OUTPUT = Annotated[
    bool,
    typer.Option(
        "--json",
        help="Output results in JSON format",
    ),
]

NAME = Annotated[
    str,
    typer.Option(
        "--name",
        "-n",
        help="Display name (defaults to the last path segment)",
    ),
]


@app.callback()
def callback(
    no_rich: bool = typer.Option(
        False,
        "--no-rich",
        help=(
            "Disable Rich coloured output and spinners. "
            "Can also be set with the MEDIANAV_NO_RICH environment variable."
        ),
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show debug logging (same as MEDIANAV_DEBUG=1).",
    ),
) -> None:
    """Configure logging and global output options."""
    setup_logger(verbose)
    if no_rich:
        os.environ["MEDIANAV_NO_RICH"] = "1"


def _write_json(records: Iterable[Any]) -> None:
    payload = [record.model_dump(mode="json") for record in records]
    sys.stdout.write(json.dumps(payload, indent=2, ensure_ascii=False) + "\n")


def _require_directory(path: Path) -> Path:
    path = path.expanduser().absolute()
    if not path.is_dir():
        with ConsoleManager() as console:
            console.print(f"[red]Error: Not a directory: {path}[/red]")
        raise typer.Exit(ExitCode.ERROR)
    return path


def _favorite_key(path: Path) -> str:
    return str(path.expanduser().absolute())


async def _browse(
    path: Path, settings: BrowserSettings, filter_kind: FilterKind
) -> BrowserState:
    async with NavigationController(
        FileLister(settings), sort_key=settings.sort, active_filter=filter_kind
    ) as navigation:
        return await navigation.navigate_to_directory(path)


@app.command("ls")
def list_command(
    path: DIRECTORY = Path("."),
    sort: SORT = None,
    filter_kind: FILTER = FilterKind.NONE,
    json_output: JSON_OUTPUT = False,
) -> None:
    """List the immediate children of a directory."""
    directory = _require_directory(path)
    settings = load_settings(sort=sort.value if sort else None)
    state = asyncio.run(_browse(directory, settings, filter_kind))

    if json_output:
        _write_json(state.items)
        return
    with ConsoleManager() as console:
        render_listing(state.items, console=console, title=str(state.current_path))


@app.command()
def scan(
    path: DIRECTORY = Path("."),
    kind: KIND = MediaCategory.VIDEO,
    sort: SORT = None,
    json_output: JSON_OUTPUT = False,
) -> None:
    """Recursively collect media files of one category."""
    directory = _require_directory(path)
    settings = load_settings(sort=sort.value if sort else None)
    lister = FileLister(settings)

    if json_output:
        _write_json(asyncio.run(lister.get_media_files(directory, kind, settings.sort)))
        return
    with ConsoleManager() as console:
        if rich_enabled():
            with console.status(f"[cyan]Scanning {directory}...", spinner="dots"):
                entries = asyncio.run(
                    lister.get_media_files(directory, kind, settings.sort)
                )
        else:
            entries = asyncio.run(lister.get_media_files(directory, kind, settings.sort))
        if not entries:
            console.print(f"[yellow]No {kind.value} files found.[/yellow]")
            return
        render_listing(entries, console=console, title=f"{kind.value}: {directory}")


@app.command()
def roots() -> None:
    """Show the primary storage root and mounted volumes."""
    lister = FileLister(load_settings())
    with ConsoleManager() as console:
        for root in asyncio.run(lister.get_storage_roots()):
            console.print(str(root))


@fav_app.command("add")
def fav_add(path: DIRECTORY, name: NAME = "") -> None:
    """Add a directory to the favorites."""
    store = FavoriteStore.from_settings(load_settings())
    key = _favorite_key(path)
    with ConsoleManager() as console:
        if not asyncio.run(store.add_favorite(key, name)):
            console.print(f"[yellow]Already a favorite: {key}[/yellow]")
            raise typer.Exit(ExitCode.ERROR)
        console.print(f"[green]Added favorite:[/green] {key}")


@fav_app.command("remove")
def fav_remove(path: DIRECTORY) -> None:
    """Remove a directory from the favorites."""
    store = FavoriteStore.from_settings(load_settings())
    key = _favorite_key(path)
    with ConsoleManager() as console:
        if not asyncio.run(store.remove_favorite(key)):
            console.print(f"[yellow]Not a favorite: {key}[/yellow]")
            raise typer.Exit(ExitCode.ERROR)
        console.print(f"[green]Removed favorite:[/green] {key}")


@fav_app.command("toggle")
def fav_toggle(path: DIRECTORY, name: NAME = "") -> None:
    """Star a directory if it is not starred, otherwise unstar it."""
    store = FavoriteStore.from_settings(load_settings())
    key = _favorite_key(path)
    starred = asyncio.run(store.toggle_favorite(key, name))
    with ConsoleManager() as console:
        console.print(f"{'Starred' if starred else 'Unstarred'}: {key}")


@fav_app.command("list")
def fav_list(json_output: JSON_OUTPUT = False) -> None:
    """Show all favorites."""
    store = FavoriteStore.from_settings(load_settings())
    favorites = asyncio.run(store.list_favorites())
    if json_output:
        _write_json(favorites)
        return
    with ConsoleManager() as console:
        if not favorites:
            console.print("[yellow]No favorites yet.[/yellow]")
            return
        render_favorites(favorites, console=console)


@config_app.command("set")
def config_set(key: str, value: str) -> None:
    """Store a setting, e.g. ``medianav config set browse.sort date``."""
    set_setting(key, int(value) if value.isdigit() else value)
    with ConsoleManager() as console:
        console.print(f"{key} = {value}")


@config_app.command("get")
def config_get(key: str) -> None:
    """Print a setting from the config file."""
    value = get_setting(key)
    with ConsoleManager() as console:
        if value is None:
            console.print(f"[yellow]{key} is not set[/yellow]")
            raise typer.Exit(ExitCode.ERROR)
        console.print(f"{key} = {value}")


@app.command()
def version() -> None:
    """Show the version of medianav."""
    from medianav.__about__ import __version__

    with ConsoleManager() as console:
        console.print(f"medianav version: [bold]{__version__}[/bold]")


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
