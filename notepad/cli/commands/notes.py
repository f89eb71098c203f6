"""
Note Commands.

List, create and delete notes from the command line. Each command loads
the shell, performs one action and prints the resulting list.
"""

import asyncio
from collections.abc import Coroutine
from typing import Any, Optional

import typer
from rich.console import Console
from rich.table import Table

from notepad.core.exceptions import ApplicationError
from notepad.core.logging import get_logger, log_with_source
from notepad.repositories.base import NoteRepository
from notepad.repositories.factory import StorageBackend, open_repository
from notepad.schemas.note import Note
from notepad.state.shell import NotesShell, ShellStatus

app = typer.Typer(help="Note commands")
console = Console()
logger = get_logger(__name__)

BackendOption = typer.Option(
    None,
    "--backend",
    "-b",
    help="Storage backend (local or remote). Defaults to storage.yaml.",
)


def _run(coro: Coroutine[Any, Any, None]) -> None:
    """Run a command coroutine, turning storage errors into exit code 1."""
    try:
        asyncio.run(coro)
    except ApplicationError as e:
        log_with_source(logger, "cli", "error", "Command failed", code=e.code, error=e.message)
        console.print(f"[red]Error: {e.message}[/red]")
        raise typer.Exit(1)


async def _load_shell(repository: NoteRepository) -> NotesShell:
    shell = NotesShell(repository)
    await shell.load()
    if shell.status is ShellStatus.LOAD_FAILED:
        console.print(f"[red]Error: could not load notes: {shell.last_error.message}[/red]")
        raise typer.Exit(1)
    return shell


def _display_notes(notes: tuple[Note, ...]) -> None:
    if not notes:
        console.print("[dim]No notes yet.[/dim]")
        return

    table = Table(title="Notes")
    table.add_column("#", justify="right", style="dim")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="bold")
    table.add_column("Description")

    for index, note in enumerate(notes):
        table.add_row(str(index), str(note.id), note.name, note.description)

    console.print(table)


@app.command("list")
def list_notes(
    backend: Optional[StorageBackend] = BackendOption,
) -> None:
    """
    Show all notes.

    Examples:
        cli.py notes list
        cli.py notes list --backend remote
    """
    _run(_list(backend))


async def _list(backend: StorageBackend | None) -> None:
    async with open_repository(backend) as repository:
        shell = await _load_shell(repository)
        _display_notes(shell.notes)


@app.command()
def add(
    name: str = typer.Argument(..., help="Note name"),
    description: str = typer.Argument(..., help="Note description"),
    backend: Optional[StorageBackend] = BackendOption,
) -> None:
    """
    Create a note from a name and a description.

    Examples:
        cli.py notes add "groceries" "eggs, milk"
    """
    _run(_add(name, description, backend))


async def _add(name: str, description: str, backend: StorageBackend | None) -> None:
    async with open_repository(backend) as repository:
        shell = await _load_shell(repository)
        shell.on_field_change("name", name)
        shell.on_field_change("description", description)

        note = await shell.on_submit()
        if note is None:
            if shell.last_error is not None:
                console.print(f"[red]Error: {shell.last_error.message}[/red]")
            else:
                console.print("[yellow]Name and description are required.[/yellow]")
            raise typer.Exit(1)

        console.print(f"[green]Created note {note.id}[/green]")
        _display_notes(shell.notes)


@app.command()
def delete(
    note_id: str = typer.Argument(..., help="ID of the note to delete"),
    backend: Optional[StorageBackend] = BackendOption,
) -> None:
    """
    Delete a note by its ID.

    Examples:
        cli.py notes delete 3
    """
    _run(_delete(note_id, backend))


async def _delete(note_id: str, backend: StorageBackend | None) -> None:
    async with open_repository(backend) as repository:
        shell = await _load_shell(repository)

        # ids arrive as text; match against the listed ids of either type
        target = next((note for note in shell.notes if str(note.id) == note_id), None)
        if target is None:
            console.print(f"[red]Error: note {note_id} not found[/red]")
            raise typer.Exit(1)

        if not await shell.on_delete(target.id):
            console.print(f"[red]Error: {shell.last_error.message}[/red]")
            raise typer.Exit(1)

        console.print(f"[green]Deleted note {note_id}[/green]")
        _display_notes(shell.notes)
