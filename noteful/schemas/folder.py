"""
Noteful API - Folder Schemas
============================

What:  Request and response models for /api/folders.
How:   Request fields are optional so that presence checks happen in
       `noteful.validators` and produce the API's own 400 messages instead of
       FastAPI's generic 422. Unknown body fields are ignored.
       Response models sanitize free text on construction, so every path that
       returns a folder escapes it the same way.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from noteful.sanitizer import sanitize_text


class FolderWrite(BaseModel):
    """Body of POST /api/folders and PATCH /api/folders/{id}."""
    folder_name: Optional[str] = Field(default=None, description="Display name of the folder")


class FolderResponse(BaseModel):
    """
    What:  A folder as returned to clients.
    Who:   GET /api/folders items and the body of POST /api/folders.
    """
    id: int = Field(description="Store-generated folder identifier")
    folder_name: str = Field(description="Folder name, HTML-escaped")

    model_config = {"from_attributes": True}

    @field_validator("folder_name")
    @classmethod
    def escape_folder_name(cls, v: str) -> str:
        return sanitize_text(v)
