"""
Noteful API - Request Body Validators
=====================================

What:  Field-presence checks that gate writes before they reach the store.
How:   Pure functions over the parsed request models; each raises
       ValidationError (→ 400) with the message clients see verbatim.
Who:   Called by FolderService and NoteService.
"""

from typing import Optional

from noteful.exceptions import ValidationError
from noteful.schemas.folder import FolderWrite
from noteful.schemas.note import NOTE_WRITABLE_FIELDS, NoteCreate, NoteUpdate

FOLDER_NAME_REQUIRED = "Request body must contain 'folder name'"
NOTE_FIELD_REQUIRED = "Request body must contain either 'name', 'content', or 'folder'"


def validate_folder_write(body: Optional[FolderWrite]) -> str:
    """
    Require a non-blank `folder_name` on folder create and update.

    Returns:
        The folder name to store.

    Raises:
        ValidationError: body missing, or folder_name missing or blank.
    """
    if body is None or body.folder_name is None or not body.folder_name.strip():
        raise ValidationError(message=FOLDER_NAME_REQUIRED, field="folder_name")
    return body.folder_name


def validate_note_patch(body: Optional[NoteUpdate]) -> dict:
    """
    Require at least one of note_name, content, folder on a note update.

    Returns:
        The supplied subset of writable fields.
    """
    supplied = body.supplied_fields() if body is not None else {}
    if not supplied:
        raise ValidationError(message=NOTE_FIELD_REQUIRED)
    return supplied


def validate_note_create(body: Optional[NoteCreate]) -> None:
    """Require every writable field on note creation; reports the first one missing."""
    for field in NOTE_WRITABLE_FIELDS:
        if body is None or getattr(body, field) is None:
            raise ValidationError(
                message=f"Missing '{field}' in request body",
                field=field,
            )
