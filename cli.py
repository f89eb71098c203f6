#!/usr/bin/env python3
"""
Notepad CLI.

Command-line client for the note store.
Built with Typer for type-safe commands and Rich for formatted output.

Usage:
    python cli.py --help                          # Show help

    # Notes
    python cli.py notes list                      # Show all notes
    python cli.py notes add NAME DESCRIPTION      # Create a note
    python cli.py notes delete ID                 # Delete a note
    python cli.py notes list --backend remote     # Use the remote backend

    # Terminal UI
    python cli.py tui

Options:
    --verbose, -v     Enable verbose output
    --debug           Enable debug mode (detailed logging)
    --help            Show help message
"""

import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

# Add project root to path for absolute imports
project_root = Path(__file__).resolve().parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from notepad.cli.commands import notes_app
from notepad.core.config import find_project_root
from notepad.core.logging import setup_logging
from notepad.repositories.factory import StorageBackend

app = typer.Typer(
    name="cli",
    help="Notepad CLI - Create, list and delete notes.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()

app.add_typer(notes_app, name="notes")


def _validate_project_root() -> None:
    """Validate that we're running inside the project."""
    try:
        find_project_root()
    except RuntimeError:
        console.print("[red]Error: .project_root not found. Run from project root.[/red]")
        raise typer.Exit(1)


@app.command()
def tui(
    backend: Optional[StorageBackend] = typer.Option(
        None,
        "--backend",
        "-b",
        help="Storage backend (local or remote). Defaults to storage.yaml.",
    ),
) -> None:
    """
    Start the interactive terminal UI.
    """
    from tui import NotesTUI

    NotesTUI(backend=backend).run()


@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output (INFO level logging)",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Enable debug mode (DEBUG level logging)",
    ),
) -> None:
    """
    Notepad CLI.

    Create, list and delete notes in the configured note store.
    """
    _validate_project_root()

    if debug:
        setup_logging(level="DEBUG", format_type="console")
        console.print("[dim]Debug mode enabled[/dim]")
    elif verbose:
        setup_logging(level="INFO", format_type="console")
    else:
        setup_logging()


if __name__ == "__main__":
    app()
