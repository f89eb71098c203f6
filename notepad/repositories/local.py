"""
Local Note Repository.

Stores notes on the device in a SQLite file through SQLAlchemy's async
engine (aiosqlite driver). Each operation runs in its own short-lived
session.
"""

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from notepad.core.exceptions import (
    NotFoundError,
    PersistenceError,
    StorageUnavailableError,
)
from notepad.core.logging import get_logger
from notepad.models.base import Base
from notepad.models.note import NoteRecord
from notepad.repositories.base import NoteRepository
from notepad.schemas.note import Note, NoteDraft, NoteId

logger = get_logger(__name__)


def create_local_engine(url: str, echo: bool = False) -> AsyncEngine:
    """
    Create an async engine for a SQLite URL.

    In-memory databases get a StaticPool so every session sees the same
    connection (and therefore the same tables).
    """
    if ":memory:" in url:
        return create_async_engine(
            url,
            echo=echo,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    return create_async_engine(url, echo=echo)


def _coerce_id(note_id: NoteId) -> int | None:
    """Local ids are integers; anything else cannot match a stored note."""
    if isinstance(note_id, bool):
        return None
    if isinstance(note_id, int):
        return note_id
    try:
        return int(note_id)
    except (TypeError, ValueError):
        return None


class LocalNoteRepository(NoteRepository):
    """
    Repository backed by a local SQLite database.

    Usage:
        repo = LocalNoteRepository.from_url("sqlite+aiosqlite:///data/notes.db")
        await repo.initialize()
        notes = await repo.find_all()
        await repo.close()
    """

    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine
        self._session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    @classmethod
    def from_url(cls, url: str, echo: bool = False) -> "LocalNoteRepository":
        return cls(create_local_engine(url, echo=echo))

    async def initialize(self) -> None:
        """
        Create the notes table if it does not exist.

        Raises:
            StorageUnavailableError: If the database cannot be opened
        """
        try:
            async with self._engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except SQLAlchemyError as e:
            logger.error(
                "Local note store initialization failed",
                extra={"url": str(self._engine.url), "error": str(e)},
            )
            raise StorageUnavailableError("Local note store could not be opened") from e

    async def close(self) -> None:
        await self._engine.dispose()

    async def find_all(self) -> list[Note]:
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    select(NoteRecord).order_by(NoteRecord.id)
                )
                records = list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Failed to read notes", extra={"error": str(e)})
            raise StorageUnavailableError("Local note store unavailable") from e

        return [Note.model_validate(record) for record in records]

    async def save(self, draft: NoteDraft) -> Note:
        try:
            async with self._session_factory() as session:
                record = NoteRecord(name=draft.name, description=draft.description)
                session.add(record)
                await session.flush()
                note = Note.model_validate(record)
                await session.commit()
        except SQLAlchemyError as e:
            logger.error("Failed to save note", extra={"error": str(e)})
            raise PersistenceError("Note could not be saved") from e

        logger.debug("Note saved", extra={"note_id": note.id})
        return note

    async def delete_by_id(self, note_id: NoteId) -> None:
        key = _coerce_id(note_id)
        if key is None:
            raise NotFoundError(f"Note {note_id!r} not found")

        try:
            async with self._session_factory() as session:
                record = await session.get(NoteRecord, key)
                if record is None:
                    raise NotFoundError(f"Note {note_id!r} not found")
                await session.delete(record)
                await session.commit()
        except SQLAlchemyError as e:
            logger.error(
                "Failed to delete note",
                extra={"note_id": note_id, "error": str(e)},
            )
            raise PersistenceError("Note could not be deleted") from e

        logger.debug("Note deleted", extra={"note_id": note_id})
