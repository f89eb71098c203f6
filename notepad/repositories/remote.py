"""
Remote Note Repository.

Stores notes on an authenticated HTTP backend. Requests go through
APIClient; responses use the standard envelope (see schemas/base.py).

    GET    {notes_path}          -> data: [note, ...]
    POST   {notes_path}          -> data: note
    DELETE {notes_path}/{id}     -> 2xx, 404 when the note is missing
"""

from typing import Any
from urllib.parse import quote

import httpx
from pydantic import ValidationError as PydanticValidationError

from notepad.core.client import APIClient
from notepad.core.exceptions import (
    AuthenticationError,
    NotFoundError,
    PersistenceError,
    StorageUnavailableError,
)
from notepad.core.logging import get_logger
from notepad.core.resilience import build_retrying
from notepad.repositories.base import NoteRepository
from notepad.schemas.base import ApiResponse
from notepad.schemas.note import Note, NoteDraft, NoteId

logger = get_logger(__name__)

_AUTH_FAILURE_CODES = frozenset({401, 403})


class RemoteNoteRepository(NoteRepository):
    """
    Repository backed by the remote notes API.

    Reads and deletes are retried on transport errors; creates are sent
    once.
    """

    def __init__(
        self,
        client: APIClient,
        notes_path: str = "/api/v1/notes",
        max_attempts: int = 3,
        backoff_multiplier: float = 1,
        backoff_max: float = 10,
    ) -> None:
        self._client = client
        self._notes_path = "/" + notes_path.strip("/")
        self._max_attempts = max_attempts
        self._backoff_multiplier = backoff_multiplier
        self._backoff_max = backoff_max

    async def close(self) -> None:
        await self._client.close()

    async def _send_with_retry(
        self,
        method: str,
        path: str,
        **kwargs: Any,
    ) -> httpx.Response:
        retrying = build_retrying(
            max_attempts=self._max_attempts,
            backoff_multiplier=self._backoff_multiplier,
            backoff_max=self._backoff_max,
        )
        async for attempt in retrying:
            with attempt:
                return await self._client.request(method, path, **kwargs)
        raise AssertionError("unreachable")  # pragma: no cover

    @staticmethod
    def _parse(response: httpx.Response, data_type: Any) -> Any:
        envelope = ApiResponse[data_type].model_validate(response.json())
        return envelope.data

    async def find_all(self) -> list[Note]:
        try:
            response = await self._send_with_retry("GET", self._notes_path)
        except httpx.HTTPError as e:
            raise StorageUnavailableError("Notes backend unreachable") from e

        if response.status_code in _AUTH_FAILURE_CODES:
            raise AuthenticationError("Notes backend rejected credentials")
        if response.status_code >= 400:
            logger.error(
                "Failed to list notes",
                extra={"status_code": response.status_code},
            )
            raise StorageUnavailableError(
                f"Notes backend returned {response.status_code}"
            )

        try:
            notes = self._parse(response, list[Note])
        except (ValueError, PydanticValidationError) as e:
            raise StorageUnavailableError("Malformed notes response") from e

        return list(notes or [])

    async def save(self, draft: NoteDraft) -> Note:
        try:
            response = await self._client.post(
                self._notes_path,
                json=draft.model_dump(include={"name", "description"}),
            )
        except httpx.HTTPError as e:
            raise PersistenceError("Notes backend unreachable") from e

        if response.status_code in _AUTH_FAILURE_CODES:
            raise AuthenticationError("Notes backend rejected credentials")
        if response.status_code >= 400:
            logger.error(
                "Failed to save note",
                extra={"status_code": response.status_code},
            )
            raise PersistenceError(f"Notes backend returned {response.status_code}")

        try:
            note = self._parse(response, Note)
        except (ValueError, PydanticValidationError) as e:
            raise PersistenceError("Malformed note response") from e

        if note is None or note.id is None:
            raise PersistenceError("Notes backend did not assign an id")

        logger.debug("Note saved", extra={"note_id": note.id})
        return note

    async def delete_by_id(self, note_id: NoteId) -> None:
        path = f"{self._notes_path}/{quote(str(note_id), safe='')}"
        try:
            response = await self._send_with_retry("DELETE", path)
        except httpx.HTTPError as e:
            raise PersistenceError("Notes backend unreachable") from e

        if response.status_code == 404:
            raise NotFoundError(f"Note {note_id!r} not found")
        if response.status_code in _AUTH_FAILURE_CODES:
            raise AuthenticationError("Notes backend rejected credentials")
        if response.status_code >= 400:
            logger.error(
                "Failed to delete note",
                extra={"note_id": note_id, "status_code": response.status_code},
            )
            raise PersistenceError(f"Notes backend returned {response.status_code}")

        logger.debug("Note deleted", extra={"note_id": note_id})
