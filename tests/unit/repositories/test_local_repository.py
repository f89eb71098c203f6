"""
Unit Tests for the Local Note Repository.

Runs against an in-memory SQLite database (see root conftest).
"""

from unittest.mock import patch

import pytest
from sqlalchemy.exc import OperationalError, SQLAlchemyError

from notepad.core.exceptions import (
    NotFoundError,
    PersistenceError,
    StorageUnavailableError,
)
from notepad.repositories.local import LocalNoteRepository, _coerce_id
from notepad.schemas.note import Note, NoteDraft


def _draft(name: str, description: str) -> NoteDraft:
    return NoteDraft(name=name, description=description)


class TestFindAll:
    """Tests for listing notes."""

    async def test_empty_store_returns_empty_list(self, local_repository):
        notes = await local_repository.find_all()
        assert notes == []

    async def test_returns_notes_in_insertion_order(self, local_repository):
        await local_repository.save(_draft("a", "first"))
        await local_repository.save(_draft("b", "second"))
        await local_repository.save(_draft("c", "third"))

        notes = await local_repository.find_all()

        assert [note.name for note in notes] == ["a", "b", "c"]
        assert all(isinstance(note, Note) for note in notes)

    async def test_storage_error_raises_storage_unavailable(self, local_repository):
        with patch.object(
            local_repository, "_session_factory", side_effect=SQLAlchemyError("locked")
        ):
            with pytest.raises(StorageUnavailableError):
                await local_repository.find_all()


class TestSave:
    """Tests for creating notes."""

    async def test_assigns_id(self, local_repository):
        note = await local_repository.save(_draft("test note", "test note description"))

        assert note.id is not None
        assert note.name == "test note"
        assert note.description == "test note description"

    async def test_ids_are_unique(self, local_repository):
        first = await local_repository.save(_draft("same", "same"))
        second = await local_repository.save(_draft("same", "same"))

        assert first.id != second.id

    async def test_saved_note_is_durable(self, local_repository):
        saved = await local_repository.save(_draft("kept", "across reads"))

        notes = await local_repository.find_all()

        assert notes == [saved]

    async def test_storage_error_raises_persistence_error(self, local_repository):
        with patch.object(
            local_repository, "_session_factory", side_effect=SQLAlchemyError("disk full")
        ):
            with pytest.raises(PersistenceError):
                await local_repository.save(_draft("n", "d"))


class TestDeleteById:
    """Tests for deleting notes."""

    async def test_removes_only_matching_note(self, local_repository):
        first = await local_repository.save(_draft("first", "1"))
        second = await local_repository.save(_draft("second", "2"))
        third = await local_repository.save(_draft("third", "3"))

        await local_repository.delete_by_id(second.id)

        assert await local_repository.find_all() == [first, third]

    async def test_accepts_numeric_string_id(self, local_repository):
        note = await local_repository.save(_draft("n", "d"))

        await local_repository.delete_by_id(str(note.id))

        assert await local_repository.find_all() == []

    async def test_missing_id_raises_not_found(self, local_repository):
        with pytest.raises(NotFoundError):
            await local_repository.delete_by_id(999)

    async def test_second_delete_raises_not_found_without_damage(self, local_repository):
        kept = await local_repository.save(_draft("kept", "k"))
        gone = await local_repository.save(_draft("gone", "g"))
        await local_repository.delete_by_id(gone.id)

        with pytest.raises(NotFoundError):
            await local_repository.delete_by_id(gone.id)

        assert await local_repository.find_all() == [kept]

    async def test_non_numeric_id_raises_not_found(self, local_repository):
        with pytest.raises(NotFoundError):
            await local_repository.delete_by_id("not-a-number")

    async def test_storage_error_raises_persistence_error(self, local_repository):
        with patch.object(
            local_repository, "_session_factory", side_effect=SQLAlchemyError("locked")
        ):
            with pytest.raises(PersistenceError):
                await local_repository.delete_by_id(1)


class TestLifecycle:
    """Tests for initialize/close."""

    async def test_initialize_is_idempotent(self, local_repository):
        await local_repository.save(_draft("n", "d"))

        await local_repository.initialize()

        assert len(await local_repository.find_all()) == 1

    async def test_unopenable_database_raises_storage_unavailable(self, tmp_path):
        missing_dir = tmp_path / "does" / "not" / "exist"
        repository = LocalNoteRepository.from_url(
            f"sqlite+aiosqlite:///{missing_dir / 'notes.db'}"
        )

        with pytest.raises(StorageUnavailableError) as exc_info:
            await repository.initialize()

        assert isinstance(exc_info.value.__cause__, OperationalError)
        await repository.close()

    async def test_file_database_survives_reopen(self, tmp_path):
        url = f"sqlite+aiosqlite:///{tmp_path / 'notes.db'}"

        first = LocalNoteRepository.from_url(url)
        await first.initialize()
        saved = await first.save(_draft("persisted", "on disk"))
        await first.close()

        second = LocalNoteRepository.from_url(url)
        await second.initialize()
        notes = await second.find_all()
        await second.close()

        assert notes == [saved]


class TestCoerceId:
    @pytest.mark.parametrize(
        "value, expected",
        [(3, 3), ("3", 3), ("abc", None), (True, None), (None, None)],
    )
    def test_coerce(self, value, expected):
        assert _coerce_id(value) == expected
