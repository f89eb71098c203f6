"""
Repository Factory.

Builds the note repository selected in config/settings/storage.yaml.

Usage:
    from notepad.repositories.factory import open_repository

    async with open_repository() as repo:
        notes = await repo.find_all()
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from enum import Enum

from notepad.core.client import APIClient
from notepad.core.config import get_app_config, get_local_database_url
from notepad.core.logging import get_logger
from notepad.repositories.base import NoteRepository
from notepad.repositories.local import LocalNoteRepository
from notepad.repositories.remote import RemoteNoteRepository

logger = get_logger(__name__)


class StorageBackend(str, Enum):
    LOCAL = "local"
    REMOTE = "remote"


BACKENDS = tuple(backend.value for backend in StorageBackend)


def build_repository(
    backend: str | None = None,
    frontend_id: str = "cli",
) -> NoteRepository:
    """
    Create an uninitialized repository.

    Args:
        backend: "local" or "remote". If None, reads storage.yaml.
        frontend_id: Sent as X-Frontend-ID by the remote repository.

    Raises:
        ValueError: If the backend name is unknown
    """
    storage = get_app_config().storage
    backend = backend or storage.backend

    if backend == "local":
        return LocalNoteRepository.from_url(
            get_local_database_url(),
            echo=storage.local.echo,
        )
    if backend == "remote":
        remote = storage.remote
        return RemoteNoteRepository(
            APIClient(frontend_id=frontend_id),
            notes_path=remote.notes_path,
            max_attempts=remote.retry.max_attempts,
            backoff_multiplier=remote.retry.backoff_multiplier,
            backoff_max=remote.retry.backoff_max,
        )
    raise ValueError(f"Unknown storage backend: {backend!r} (expected one of {BACKENDS})")


@asynccontextmanager
async def open_repository(
    backend: str | None = None,
    frontend_id: str = "cli",
) -> AsyncIterator[NoteRepository]:
    """Build, initialize and finally close a repository."""
    repository = build_repository(backend, frontend_id=frontend_id)
    logger.debug(
        "Opening note repository",
        extra={"repository": type(repository).__name__},
    )
    try:
        await repository.initialize()
        yield repository
    finally:
        await repository.close()
