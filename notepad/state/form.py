"""
Form State Controller.

Owns the draft note being typed. Fields are updated without validation so
partial input is allowed; completeness is only checked on submission.
"""

from notepad.core.exceptions import ValidationError
from notepad.core.logging import get_logger
from notepad.schemas.note import NoteDraft

logger = get_logger(__name__)

DRAFT_FIELDS = ("name", "description")


class FormController:
    """Holds one NoteDraft for the lifetime of the session."""

    def __init__(self, draft: NoteDraft | None = None) -> None:
        self._draft = draft if draft is not None else NoteDraft()

    @property
    def draft(self) -> NoteDraft:
        """A copy of the current draft; mutate through set_field()."""
        return self._draft.model_copy()

    def set_field(self, field: str, value: str) -> None:
        """
        Update one draft field in place.

        Raises:
            ValidationError: If field is not a draft field
        """
        if field not in DRAFT_FIELDS:
            raise ValidationError(
                f"Unknown draft field: {field}",
                details={"field": field, "allowed": list(DRAFT_FIELDS)},
            )
        setattr(self._draft, field, value)

    def reset(self) -> None:
        self._draft = NoteDraft()

    def is_complete(self) -> bool:
        return self._draft.is_complete()

    def finalize(self) -> NoteDraft:
        """
        Return the draft to submit.

        Raises:
            ValidationError: If name or description is empty
        """
        if not self._draft.is_complete():
            raise ValidationError(
                "Required fields missing",
                details={"missing_fields": self._draft.missing_fields()},
            )
        return self._draft.model_copy()
