"""
Noteful API - Note Schemas
==========================

What:  Request and response models for /api/notes.
How:   Request fields are all optional; `noteful.validators` decides which
       must be present for create vs. patch. Extra fields in a body are
       dropped by Pydantic and never reach the store.
       `NoteResponse` escapes `note_name` and `content` on construction.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from noteful.sanitizer import sanitize_text

# Fields a client may set on a note, in merge order
NOTE_WRITABLE_FIELDS = ("note_name", "content", "folder")


class NoteCreate(BaseModel):
    """Body of POST /api/notes."""
    note_name: Optional[str] = Field(default=None, description="Note title")
    content: Optional[str] = Field(default=None, description="Note body text")
    folder: Optional[int] = Field(default=None, description="Id of the owning folder")


class NoteUpdate(BaseModel):
    """
    Body of PATCH /api/notes/{id}.

    Every field is optional; a field left as None is not touched by the
    merge in NoteService.
    """
    note_name: Optional[str] = None
    content: Optional[str] = None
    folder: Optional[int] = None

    def supplied_fields(self) -> dict:
        """Writable fields that carry a value in this patch."""
        supplied = {}
        for field in NOTE_WRITABLE_FIELDS:
            value = getattr(self, field)
            if value is not None:
                supplied[field] = value
        return supplied


class NoteResponse(BaseModel):
    """
    What:  Full representation of a note.
    Who:   GET /api, GET /api/notes/{id}, GET /api/folders/{id} items,
           and the body of POST /api/notes.
    """
    id: int = Field(description="Store-generated note identifier")
    note_name: str = Field(description="Note title, HTML-escaped")
    content: str = Field(description="Note body, HTML-escaped")
    folder: int = Field(description="Id of the owning folder")
    modified: datetime = Field(description="When the note was created (UTC ISO 8601)")

    model_config = {"from_attributes": True}

    @field_validator("note_name", "content")
    @classmethod
    def escape_text(cls, v: str) -> str:
        return sanitize_text(v)
