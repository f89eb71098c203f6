"""
Note Model.

Database model for notes held in the local on-device store.
"""

from sqlalchemy import Text
from sqlalchemy.orm import Mapped, mapped_column

from notepad.models.base import Base, TimestampMixin


class NoteRecord(TimestampMixin, Base):
    """
    Note database model.

    The autoincrement primary key doubles as insertion order, which is
    the order notes are listed in.
    """

    __tablename__ = "notes"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )
    description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<NoteRecord(id={self.id}, name={self.name!r})>"
