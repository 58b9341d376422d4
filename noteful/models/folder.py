"""
Noteful API - Folder SQLAlchemy Model
=====================================

What:  ORM model for the `folders` table.
Who:   Used by FolderService for CRUD and by NoteService for membership queries.
"""

from typing import List, TYPE_CHECKING

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from noteful.database import Base

if TYPE_CHECKING:
    from noteful.models.note import Note


class Folder(Base):
    """
    A named container for notes.

    Deleting a folder removes its notes through the `ON DELETE CASCADE`
    foreign key on `notes.folder`; `passive_deletes` leaves that to the
    database instead of loading the children first.
    """

    __tablename__ = "folders"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    folder_name: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    notes: Mapped[List["Note"]] = relationship(
        back_populates="parent_folder",
        passive_deletes=True,
        order_by="Note.id",
    )

    def __repr__(self) -> str:
        return f"<Folder(id={self.id}, folder_name='{self.folder_name}')>"
