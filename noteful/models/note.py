"""
Noteful API - Note SQLAlchemy Model
===================================

What:  ORM model representing the `notes` table.
How:   Inherits from the shared DeclarativeBase; `init_models()` creates it.
Who:   Used by NoteService for CRUD and by FolderService for folder contents.

Table Design:
    - Integer primary key assigned by the database, so listing by id
      reproduces insertion order
    - folder: required reference to folders.id, ON DELETE CASCADE
    - modified: UTC with timezone, set when the note is created
"""

from datetime import datetime, timezone
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from noteful.database import Base

if TYPE_CHECKING:
    from noteful.models.folder import Folder


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Note(Base):
    """
    A note stored inside a folder.

    Lifecycle:
        1. Created with a folder reference; `modified` stamped with now (UTC)
        2. Partially updated: only supplied name/content/folder change
        3. Deleted directly, or with its folder through the cascade

    Query Patterns:
        - List all notes: SELECT ... ORDER BY id
        - Notes of one folder: SELECT ... WHERE folder = :id ORDER BY id
          → Uses idx_notes_folder
    """

    __tablename__ = "notes"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    note_name: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
    )

    folder: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("folders.id", ondelete="CASCADE"),
        nullable=False,
    )

    modified: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )

    parent_folder: Mapped["Folder"] = relationship(back_populates="notes")

    __table_args__ = (
        Index("idx_notes_folder", "folder"),
    )

    def __repr__(self) -> str:
        return (
            f"<Note(id={self.id}, note_name='{self.note_name}', "
            f"folder={self.folder})>"
        )
