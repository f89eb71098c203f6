# SQLAlchemy models package
from notepad.models.base import Base
from notepad.models.note import NoteRecord

__all__ = ["Base", "NoteRecord"]
