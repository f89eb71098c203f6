"""
Note Schemas.

Pydantic models for notes and the in-progress form draft.
"""

from pydantic import BaseModel, ConfigDict, Field

NoteId = int | str
"""Identifier assigned by the persistence layer (int locally, opaque remotely)."""


class NoteDraft(BaseModel):
    """Unpersisted note being composed in the form."""

    name: str = ""
    description: str = ""

    model_config = ConfigDict(validate_assignment=True)

    def is_complete(self) -> bool:
        """Both fields present. No trimming: whitespace counts as content."""
        return bool(self.name) and bool(self.description)

    def missing_fields(self) -> list[str]:
        return [
            field
            for field in ("name", "description")
            if not getattr(self, field)
        ]


class Note(BaseModel):
    """A note as returned by a repository."""

    id: NoteId | None = Field(default=None, description="Storage-assigned identifier")
    name: str = Field(description="Note name")
    description: str = Field(description="Note body")

    model_config = ConfigDict(from_attributes=True, frozen=True, extra="ignore")
