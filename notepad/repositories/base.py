"""
Base Repository.

The abstraction boundary over note storage. Callers see the same three
operations whether notes live in a local SQLite file or behind a remote
HTTP backend. Implementations hold connection handles only, never notes.
"""

from abc import ABC, abstractmethod

from notepad.schemas.note import Note, NoteDraft, NoteId


class NoteRepository(ABC):
    """
    Contract for note storage.

    Subclasses translate their driver errors into the application
    exception hierarchy:

        find_all      -> StorageUnavailableError
        save          -> PersistenceError
        delete_by_id  -> NotFoundError, PersistenceError
    """

    async def initialize(self) -> None:
        """Prepare the underlying store. Default: nothing to do."""

    async def close(self) -> None:
        """Release the underlying store. Default: nothing to do."""

    @abstractmethod
    async def find_all(self) -> list[Note]:
        """
        Return every persisted note in insertion order.

        Returns an empty list when the store holds no notes.

        Raises:
            StorageUnavailableError: If the store cannot be read
        """

    @abstractmethod
    async def save(self, draft: NoteDraft) -> Note:
        """
        Persist a draft.

        Returns:
            The stored note with its id populated

        Raises:
            PersistenceError: If the write did not complete
        """

    @abstractmethod
    async def delete_by_id(self, note_id: NoteId) -> None:
        """
        Remove a note.

        Raises:
            NotFoundError: If no note has this id
            PersistenceError: If the delete did not complete
        """
