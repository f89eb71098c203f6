"""
Note List State Controller.

Owns the ordered in-memory collection of notes being displayed.
Insertion order is display order; notes are identified by id only.
"""

from collections.abc import Iterable, Iterator

from notepad.core.exceptions import ConflictError, ValidationError
from notepad.schemas.note import Note, NoteId


class NoteListController:
    """Authoritative in-memory note collection."""

    def __init__(self, notes: Iterable[Note] | None = None) -> None:
        self._notes: list[Note] = []
        if notes is not None:
            self.replace_all(notes)

    @property
    def notes(self) -> tuple[Note, ...]:
        return tuple(self._notes)

    def __len__(self) -> int:
        return len(self._notes)

    def __iter__(self) -> Iterator[Note]:
        return iter(tuple(self._notes))

    def index_of(self, note_id: NoteId) -> int | None:
        for index, note in enumerate(self._notes):
            if note.id == note_id:
                return index
        return None

    def replace_all(self, notes: Iterable[Note] | None) -> None:
        """Overwrite the collection. None means no data: the list becomes empty."""
        self._notes = list(notes) if notes is not None else []

    def append(self, note: Note) -> None:
        """
        Add a persisted note at the end.

        Raises:
            ValidationError: If the note has no id
            ConflictError: If a note with the same id is already listed
        """
        self._check_insertable(note)
        self._notes.append(note)

    def insert(self, index: int, note: Note) -> int:
        """
        Put a note back at index, clamped to the current length.

        Returns:
            The index the note was inserted at
        """
        self._check_insertable(note)
        position = max(0, min(index, len(self._notes)))
        self._notes.insert(position, note)
        return position

    def remove_by_id(self, note_id: NoteId) -> tuple[int, Note] | None:
        """
        Drop the note with this id, keeping the others in order.

        Returns:
            (index, note) of the removed entry, or None if it was not listed
        """
        index = self.index_of(note_id)
        if index is None:
            return None
        return index, self._notes.pop(index)

    def _check_insertable(self, note: Note) -> None:
        if note.id is None:
            raise ValidationError(
                "Only persisted notes can be listed",
                details={"name": note.name},
            )
        if self.index_of(note.id) is not None:
            raise ConflictError(f"Note {note.id!r} is already listed")
