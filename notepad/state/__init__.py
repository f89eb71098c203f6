# Client-side state package
from notepad.state.form import FormController
from notepad.state.notes import NoteListController
from notepad.state.shell import ActionFailure, NotesShell, ShellStatus

__all__ = [
    "ActionFailure",
    "FormController",
    "NoteListController",
    "NotesShell",
    "ShellStatus",
]
