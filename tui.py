"""
Notepad TUI.

Terminal front end for the note shell: a form to compose a note and the
list of stored notes, each with a delete button. All state lives in
NotesShell; this module only renders it and forwards user events.

Usage:
    python tui.py
    python tui.py --backend remote
"""

from __future__ import annotations

import sys

from textual import on, work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical, VerticalScroll
from textual.widgets import Button, Footer, Header, Input, Static

from notepad.core.config import get_app_config
from notepad.core.exceptions import ApplicationError
from notepad.core.logging import get_logger, log_with_source
from notepad.repositories.base import NoteRepository
from notepad.repositories.factory import build_repository
from notepad.schemas.note import Note
from notepad.state.shell import NotesShell, ShellStatus

logger = get_logger(__name__)

FIELD_INPUTS = {
    "name": "#note-name",
    "description": "#note-description",
}


class NoteItem(Vertical):
    """One listed note with its delete button."""

    def __init__(self, note: Note) -> None:
        super().__init__(classes="note-item")
        self.note = note

    def compose(self) -> ComposeResult:
        yield Static(self.note.name, classes="note-name")
        yield Static(self.note.description, classes="note-description")
        yield Button("Delete note", classes="delete-note", variant="error")


class NotesTUI(App):
    """Note-taking terminal client."""

    TITLE = "My Notes App"

    CSS = """
    #note-form {
        height: auto;
        padding: 0 1;
    }

    #status-line {
        height: 1;
        padding: 0 1;
    }

    #note-list {
        height: 1fr;
        padding: 0 1;
    }

    .note-item {
        height: auto;
        margin: 0 0 1 0;
        padding: 0 1;
        border: solid $primary;
    }

    .note-name {
        text-style: bold;
    }
    """

    BINDINGS = [
        Binding("ctrl+s", "submit", "Create Note"),
        Binding("ctrl+r", "retry_load", "Retry"),
        Binding("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        repository: NoteRepository | None = None,
        backend: str | None = None,
    ) -> None:
        super().__init__()
        self._repository = repository
        self._owns_repository = repository is None
        self._backend = backend
        self._rendered_notes: tuple[Note, ...] | None = None
        self.shell: NotesShell | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="note-form"):
            yield Input(placeholder="Note Name", id="note-name")
            yield Input(placeholder="Note Description", id="note-description")
            yield Button("Create Note", id="note-form-submit", variant="primary")
        yield Static("", id="status-line")
        yield VerticalScroll(id="note-list")
        yield Footer()

    async def on_mount(self) -> None:
        self.title = get_app_config().application.title

        if self._repository is None:
            try:
                self._repository = build_repository(self._backend, frontend_id="tui")
            except ValueError as e:
                log_with_source(logger, "tui", "error", "Invalid storage backend", error=str(e))
                self.query_one("#status-line", Static).update(f"[red]{e}[/]")
                return

        try:
            await self._repository.initialize()
        except ApplicationError as e:
            log_with_source(logger, "tui", "error", "Storage unavailable", error=e.message)
            self.query_one("#status-line", Static).update(f"[red]{e.message}[/]")
            return

        self.shell = NotesShell(self._repository)
        self.shell.subscribe(self._on_shell_change)
        self._load()

    async def on_unmount(self) -> None:
        if self._owns_repository and self._repository is not None:
            await self._repository.close()

    # -------------------------------------------------------------------------
    # Shell -> view
    # -------------------------------------------------------------------------

    def _on_shell_change(self, shell: NotesShell) -> None:
        self.call_later(self._render_shell)

    async def _render_shell(self) -> None:
        shell = self.shell
        if shell is None:
            return

        self.query_one("#status-line", Static).update(self._status_text(shell))

        if shell.notes != self._rendered_notes:
            self._rendered_notes = shell.notes
            note_list = self.query_one("#note-list", VerticalScroll)
            await note_list.remove_children()
            if shell.notes:
                await note_list.mount_all([NoteItem(note) for note in shell.notes])

        draft = shell.draft
        for field, selector in FIELD_INPUTS.items():
            field_input = self.query_one(selector, Input)
            value = getattr(draft, field)
            if field_input.value != value:
                field_input.value = value

    @staticmethod
    def _status_text(shell: NotesShell) -> str:
        if shell.status is ShellStatus.LOADING:
            return "[dim]Loading notes...[/]"
        if shell.status is ShellStatus.LOAD_FAILED:
            return f"[red]Could not load notes: {shell.last_error.message}[/] (ctrl+r to retry)"
        if shell.last_error is not None:
            return f"[red]Could not {shell.last_error.action} note: {shell.last_error.message}[/]"
        return ""

    # -------------------------------------------------------------------------
    # View -> shell
    # -------------------------------------------------------------------------

    @on(Input.Changed, "#note-name")
    def _name_changed(self, event: Input.Changed) -> None:
        self._field_changed("name", event.value)

    @on(Input.Changed, "#note-description")
    def _description_changed(self, event: Input.Changed) -> None:
        self._field_changed("description", event.value)

    def _field_changed(self, field: str, value: str) -> None:
        if self.shell is None or getattr(self.shell.draft, field) == value:
            return
        self.shell.on_field_change(field, value)

    @on(Button.Pressed, "#note-form-submit")
    def _submit_pressed(self) -> None:
        self.action_submit()

    @on(Button.Pressed, ".delete-note")
    def _delete_pressed(self, event: Button.Pressed) -> None:
        item = event.button.parent
        if isinstance(item, NoteItem):
            self._delete(item.note)

    def action_submit(self) -> None:
        if self.shell is not None:
            self._submit()

    def action_retry_load(self) -> None:
        if self.shell is not None and self.shell.status is ShellStatus.LOAD_FAILED:
            self._load()

    @work
    async def _load(self) -> None:
        await self.shell.load()

    @work
    async def _submit(self) -> None:
        note = await self.shell.on_submit()
        if note is not None:
            log_with_source(logger, "tui", "info", "Note created", note_id=note.id)

    @work
    async def _delete(self, note: Note) -> None:
        await self.shell.on_delete(note.id)


def main() -> None:
    backend = None
    if "--backend" in sys.argv:
        index = sys.argv.index("--backend")
        if index + 1 < len(sys.argv):
            backend = sys.argv[index + 1]
    NotesTUI(backend=backend).run()


if __name__ == "__main__":
    main()
