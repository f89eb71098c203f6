"""
Root Pytest Fixtures.

Shared fixtures available to all test types.

Local Store:
    Tests use an in-memory SQLite database (aiosqlite + StaticPool) so the
    local repository can be exercised without touching the configured
    data/notes.db file. Each test gets a fresh database.
"""

from collections.abc import AsyncGenerator

import pytest

from notepad.core.exceptions import ApplicationError, NotFoundError
from notepad.repositories.base import NoteRepository
from notepad.repositories.local import LocalNoteRepository
from notepad.schemas.note import Note, NoteDraft, NoteId

IN_MEMORY_URL = "sqlite+aiosqlite:///:memory:"


# =============================================================================
# In-Memory Repository
# =============================================================================


class InMemoryNoteRepository(NoteRepository):
    """
    Repository double that keeps notes in a list and records every call.

    Set fail_find_all / fail_save / fail_delete to an ApplicationError to
    make the corresponding operation raise it.
    """

    def __init__(self, notes: list[Note] | None = None) -> None:
        self.notes: list[Note] = list(notes or [])
        self._next_id = max(
            (note.id for note in self.notes if isinstance(note.id, int)),
            default=0,
        ) + 1
        self.find_all_calls = 0
        self.saved: list[NoteDraft] = []
        self.deleted: list[NoteId] = []
        self.fail_find_all: ApplicationError | None = None
        self.fail_save: ApplicationError | None = None
        self.fail_delete: ApplicationError | None = None
        self.initialized = False
        self.closed = False

    async def initialize(self) -> None:
        self.initialized = True

    async def close(self) -> None:
        self.closed = True

    async def find_all(self) -> list[Note]:
        self.find_all_calls += 1
        if self.fail_find_all is not None:
            raise self.fail_find_all
        return list(self.notes)

    async def save(self, draft: NoteDraft) -> Note:
        self.saved.append(draft)
        if self.fail_save is not None:
            raise self.fail_save
        note = Note(id=self._next_id, name=draft.name, description=draft.description)
        self._next_id += 1
        self.notes.append(note)
        return note

    async def delete_by_id(self, note_id: NoteId) -> None:
        self.deleted.append(note_id)
        if self.fail_delete is not None:
            raise self.fail_delete
        for index, note in enumerate(self.notes):
            if note.id == note_id:
                del self.notes[index]
                return
        raise NotFoundError(f"Note {note_id!r} not found")


@pytest.fixture
def two_notes() -> list[Note]:
    return [
        Note(id=1, name="first note", description="first description"),
        Note(id=2, name="second note", description="second description"),
    ]


@pytest.fixture
def memory_repository() -> InMemoryNoteRepository:
    """Empty in-memory repository."""
    return InMemoryNoteRepository()


@pytest.fixture
def seeded_repository(two_notes: list[Note]) -> InMemoryNoteRepository:
    """In-memory repository holding two notes."""
    return InMemoryNoteRepository(two_notes)


# =============================================================================
# Local Store Fixtures
# =============================================================================


@pytest.fixture
async def local_repository() -> AsyncGenerator[LocalNoteRepository, None]:
    """
    Provide an initialized LocalNoteRepository on a fresh in-memory database.

    Usage:
        async def test_save(local_repository: LocalNoteRepository):
            note = await local_repository.save(NoteDraft(name="n", description="d"))
            assert note.id is not None
    """
    repository = LocalNoteRepository.from_url(IN_MEMORY_URL)
    await repository.initialize()
    yield repository
    await repository.close()


@pytest.fixture
def repository_factory() -> type[InMemoryNoteRepository]:
    """Provide the InMemoryNoteRepository class for tests that seed their own notes."""
    return InMemoryNoteRepository
