"""Command-line interface for medianav.

This package provides the Typer app used by the ``medianav`` entry point.

- app: The Typer application object with the ls, scan, roots, fav and config
  commands.
- ConsoleManager: Yields a Rich console honouring ``--no-rich``.
"""

from medianav.cli.commands import app, main
from medianav.cli.console import ConsoleManager

__all__ = ["ConsoleManager", "app", "main"]
