"""
Application Shell.

Wires the form and note list controllers to a repository and dispatches
user actions through them. Views read state from the shell and call its
on_* callbacks; they never touch the controllers or the repository.

Ordering contract:
    create  - persist first, then append (nothing is listed before save returns)
    delete  - remove first, then persist; reinsert at the original
              position if the repository fails

Repository failures never escape an action. They are recorded as
last_error and listeners are notified.
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from notepad.core.exceptions import ApplicationError, NotFoundError, ValidationError
from notepad.core.logging import get_logger, log_with_source
from notepad.repositories.base import NoteRepository
from notepad.schemas.note import Note, NoteDraft, NoteId
from notepad.state.form import FormController
from notepad.state.notes import NoteListController

logger = get_logger(__name__)

Listener = Callable[["NotesShell"], None]


class ShellStatus(str, Enum):
    LOADING = "loading"
    READY = "ready"
    LOAD_FAILED = "load_failed"


@dataclass(frozen=True)
class ActionFailure:
    """Observable record of the last failed user action."""

    action: str
    code: str
    message: str
    note_id: NoteId | None = None

    @classmethod
    def from_error(
        cls,
        action: str,
        error: ApplicationError,
        note_id: NoteId | None = None,
    ) -> "ActionFailure":
        return cls(action=action, code=error.code, message=error.message, note_id=note_id)


class NotesShell:
    """
    Owns the note collection and the draft for one session.

    Usage:
        shell = NotesShell(repository)
        await shell.load()
        shell.on_field_change("name", "groceries")
        shell.on_field_change("description", "eggs, milk")
        await shell.on_submit()
        await shell.on_delete(shell.notes[0].id)
    """

    def __init__(
        self,
        repository: NoteRepository,
        form: FormController | None = None,
        note_list: NoteListController | None = None,
    ) -> None:
        if not isinstance(repository, NoteRepository):
            raise TypeError(
                f"repository must be a NoteRepository, got {type(repository).__name__}"
            )
        self._repository = repository
        self._form = form if form is not None else FormController()
        self._list = note_list if note_list is not None else NoteListController()
        self._status = ShellStatus.LOADING
        self._last_error: ActionFailure | None = None
        self._pending_deletes: set[NoteId] = set()
        self._listeners: list[Listener] = []

    # -------------------------------------------------------------------------
    # Rendering boundary
    # -------------------------------------------------------------------------

    @property
    def notes(self) -> tuple[Note, ...]:
        return self._list.notes

    @property
    def draft(self) -> NoteDraft:
        return self._form.draft

    @property
    def status(self) -> ShellStatus:
        return self._status

    @property
    def last_error(self) -> ActionFailure | None:
        return self._last_error

    @property
    def pending_deletes(self) -> frozenset[NoteId]:
        """Ids removed from the list whose repository delete has not settled."""
        return frozenset(self._pending_deletes)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Call listener(shell) after every state change.

        Returns:
            A callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # -------------------------------------------------------------------------
    # Load
    # -------------------------------------------------------------------------

    async def load(self) -> None:
        """Fetch all notes. Ends in READY, or LOAD_FAILED with last_error set."""
        self._status = ShellStatus.LOADING
        self._notify()

        try:
            notes = await self._repository.find_all()
        except ApplicationError as e:
            log_with_source(
                logger, "state", "error", "Loading notes failed",
                code=e.code, error=e.message,
            )
            self._status = ShellStatus.LOAD_FAILED
            self._last_error = ActionFailure.from_error("load", e)
            self._notify()
            return

        self._list.replace_all(notes or [])
        self._status = ShellStatus.READY
        self._last_error = None
        log_with_source(logger, "state", "debug", "Notes loaded", count=len(self._list))
        self._notify()

    async def retry_load(self) -> None:
        """Reload after a failed load. No-op in any other status."""
        if self._status is not ShellStatus.LOAD_FAILED:
            return
        await self.load()

    # -------------------------------------------------------------------------
    # User actions
    # -------------------------------------------------------------------------

    def on_field_change(self, field: str, value: str) -> None:
        self._form.set_field(field, value)
        self._notify()

    async def on_submit(self) -> Note | None:
        """
        Create a note from the current draft.

        Returns:
            The persisted note, or None if nothing was created
        """
        if self._status is not ShellStatus.READY:
            log_with_source(
                logger, "state", "debug", "Submit ignored", status=self._status.value,
            )
            return None

        try:
            draft = self._form.finalize()
        except ValidationError as e:
            log_with_source(
                logger, "state", "debug", "Incomplete draft rejected",
                missing_fields=e.details.get("missing_fields"),
            )
            return None

        try:
            note = await self._repository.save(draft)
        except ApplicationError as e:
            log_with_source(
                logger, "state", "error", "Creating note failed",
                code=e.code, error=e.message,
            )
            self._last_error = ActionFailure.from_error("create", e)
            self._notify()
            return None

        # a reload while the save was in flight may already list it
        if self._list.index_of(note.id) is None:
            self._list.append(note)
        self._form.reset()
        self._last_error = None
        log_with_source(logger, "state", "info", "Note created", note_id=note.id)
        self._notify()
        return note

    async def on_delete(self, note_id: NoteId) -> bool:
        """
        Delete a note: remove it from the list now, then from storage.

        Returns:
            True if the note is gone, False if it was not listed or the
            repository failed (in which case it is back in the list)
        """
        removed = self._list.remove_by_id(note_id)
        if removed is None:
            log_with_source(logger, "state", "debug", "Delete of unlisted note ignored", note_id=note_id)
            return False

        index, note = removed
        self._pending_deletes.add(note_id)
        self._notify()

        try:
            await self._repository.delete_by_id(note_id)
        except NotFoundError:
            log_with_source(
                logger, "state", "warning", "Note already absent from storage",
                note_id=note_id,
            )
        except ApplicationError as e:
            self._pending_deletes.discard(note_id)
            # a reload while the delete was in flight may have listed it again
            if self._list.index_of(note_id) is None:
                self._list.insert(index, note)
            log_with_source(
                logger, "state", "error", "Deleting note failed, restored",
                note_id=note_id, index=index, code=e.code, error=e.message,
            )
            self._last_error = ActionFailure.from_error("delete", e, note_id=note_id)
            self._notify()
            return False

        self._pending_deletes.discard(note_id)
        log_with_source(logger, "state", "info", "Note deleted", note_id=note_id)
        self._notify()
        return True

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)
