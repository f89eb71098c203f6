# Note repositories package
from notepad.repositories.base import NoteRepository
from notepad.repositories.factory import build_repository, open_repository
from notepad.repositories.local import LocalNoteRepository
from notepad.repositories.remote import RemoteNoteRepository

__all__ = [
    "LocalNoteRepository",
    "NoteRepository",
    "RemoteNoteRepository",
    "build_repository",
    "open_repository",
]
