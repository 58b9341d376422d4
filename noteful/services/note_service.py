"""
Noteful API - Note Service
==========================

What:  CRUD operations for notes against the relational store.
How:   Each method receives the request's AsyncSession. Reads return
       NoteResponse models, which escape note_name and content.
Who:   Called by the /api notes route handlers.

Update semantics:
    PATCH merges only the supplied subset of note_name / content / folder
    onto the stored row. Fields left out of the body, `modified` included,
    keep their stored values.

Error Handling Strategy:
    Missing rows → NotFoundError("Note doesn't exist").
    IntegrityError (a folder id with no folder row) → ConstraintError (400).
    Any other SQLAlchemyError → DatabaseError (500, details logged only).
"""

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.exceptions import ConstraintError, DatabaseError, NotFoundError
from noteful.models import Note, is_storable_id
from noteful.models.note import utc_now
from noteful.schemas.note import NoteCreate, NoteResponse, NoteUpdate
from noteful.validators import validate_note_create, validate_note_patch

logger = logging.getLogger(__name__)

FOLDER_REFERENCE_INVALID = "Note must belong to an existing folder"


def _require_storable_folder(folder_id: int, context: dict) -> None:
    if not is_storable_id(folder_id):
        raise ConstraintError(message=FOLDER_REFERENCE_INVALID, context=context)


def merge_note_update(note: Note, supplied: dict) -> Note:
    """Copy each supplied writable field onto `note`; everything else is kept."""
    if "note_name" in supplied:
        note.note_name = supplied["note_name"]
    if "content" in supplied:
        note.content = supplied["content"]
    if "folder" in supplied:
        note.folder = supplied["folder"]
    return note


class NoteService:
    """
    Business logic layer for note operations.

    Responsibilities:
        - list_notes(): every note in insertion order
        - get_note(): single note with not-found handling
        - create_note(): validated insert, stamped with `modified`
        - update_note(): partial merge of supplied fields
        - delete_note()
    """

    async def list_notes(self, db: AsyncSession) -> List[NoteResponse]:
        try:
            result = await db.execute(select(Note).order_by(Note.id))
            notes = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing notes: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve notes. Please try again.",
                context={"error_type": type(e).__name__},
            )
        return [NoteResponse.model_validate(note) for note in notes]

    async def _fetch(self, db: AsyncSession, note_id: int) -> Note:
        if not is_storable_id(note_id):
            raise NotFoundError(resource="Note", resource_id=note_id)

        try:
            result = await db.execute(select(Note).where(Note.id == note_id))
            note = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching note %s: %s", note_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the note. Please try again.",
                context={"note_id": note_id},
            )

        if note is None:
            raise NotFoundError(resource="Note", resource_id=note_id)
        return note

    async def get_note(self, db: AsyncSession, note_id: int) -> NoteResponse:
        """
        Retrieve a single note by id.

        Raises:
            NotFoundError: Note with given id does not exist (→ 404)
            DatabaseError: Query execution failed (→ 500)
        """
        note = await self._fetch(db, note_id)
        return NoteResponse.model_validate(note)

    async def create_note(self, db: AsyncSession, body: Optional[NoteCreate]) -> NoteResponse:
        """
        Validate and insert a new note.

        Workflow:
            1. Require note_name, content and folder
            2. Insert with modified = now (UTC)
            3. Flush so the store assigns the id and checks the folder key
            4. Refresh so the response carries the values as stored

        Raises:
            ValidationError: A required field is missing (→ 400)
            ConstraintError: `folder` does not reference an existing folder (→ 400)
        """
        validate_note_create(body)
        _require_storable_folder(body.folder, {"folder": body.folder})

        note = Note(
            note_name=body.note_name,
            content=body.content,
            folder=body.folder,
            modified=utc_now(),
        )
        try:
            db.add(note)
            await db.flush()
            await db.refresh(note)
        except IntegrityError as e:
            logger.warning("Rejected note for folder %s: %s", body.folder, str(e.orig))
            raise ConstraintError(
                message=FOLDER_REFERENCE_INVALID,
                context={"folder": body.folder},
            )
        except SQLAlchemyError as e:
            logger.error("Database error creating note: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the note. Please try again.",
                context={"error_type": type(e).__name__},
            )

        logger.info("Note created: %s in folder %s", note.id, note.folder)
        return NoteResponse.model_validate(note)

    async def update_note(
        self,
        db: AsyncSession,
        note_id: int,
        body: Optional[NoteUpdate],
    ) -> None:
        """
        Merge the supplied fields of `body` onto an existing note.

        Raises:
            NotFoundError: Checked first, before the body is looked at (→ 404)
            ValidationError: None of note_name, content, folder supplied (→ 400)
            ConstraintError: New folder id does not exist (→ 400)
        """
        note = await self._fetch(db, note_id)
        supplied = validate_note_patch(body)
        if "folder" in supplied:
            _require_storable_folder(
                supplied["folder"], {"note_id": note_id, "folder": supplied["folder"]}
            )
        merge_note_update(note, supplied)

        try:
            await db.flush()
        except IntegrityError as e:
            logger.warning("Rejected folder change for note %s: %s", note_id, str(e.orig))
            raise ConstraintError(
                message=FOLDER_REFERENCE_INVALID,
                context={"note_id": note_id, "folder": supplied.get("folder")},
            )
        except SQLAlchemyError as e:
            logger.error("Database error updating note %s: %s", note_id, str(e))
            raise DatabaseError(
                message="Could not update the note. Please try again.",
                context={"note_id": note_id},
            )
        logger.info("Note updated: %s (%s)", note_id, ", ".join(sorted(supplied)))

    async def delete_note(self, db: AsyncSession, note_id: int) -> None:
        note = await self._fetch(db, note_id)

        try:
            await db.delete(note)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error deleting note %s: %s", note_id, str(e))
            raise DatabaseError(
                message="Could not delete the note. Please try again.",
                context={"note_id": note_id},
            )
        logger.info("Note deleted: %s", note_id)


# ── Singleton Instance ────────────────────────────────────────────────────
note_service = NoteService()
