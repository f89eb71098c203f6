# Pydantic schemas package
from notepad.schemas.base import ApiResponse, ErrorDetail
from notepad.schemas.note import Note, NoteDraft, NoteId

__all__ = [
    "ApiResponse",
    "ErrorDetail",
    "Note",
    "NoteDraft",
    "NoteId",
]
