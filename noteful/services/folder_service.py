"""
Noteful API - Folder Service
============================

What:  CRUD operations for folders against the relational store.
How:   Each method receives the request's AsyncSession, runs SQLAlchemy
       statements, and returns response models (already sanitized).
Who:   Called by the /api/folders route handlers.

Error Handling Strategy:
    Missing rows become NotFoundError("Folder doesn't exist"). Driver and
    SQL failures are wrapped in DatabaseError so no store detail reaches the
    client; application exceptions propagate unchanged.
"""

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.exceptions import DatabaseError, NotFoundError
from noteful.models import Folder, Note, is_storable_id
from noteful.schemas.folder import FolderResponse, FolderWrite
from noteful.schemas.note import NoteResponse
from noteful.validators import validate_folder_write

logger = logging.getLogger(__name__)


class FolderService:
    """
    Business logic layer for folder operations.

    Responsibilities:
        - list_folders(): every folder in insertion order
        - get_folder(): single folder lookup with not-found handling
        - get_folder_notes(): notes filed under a folder
        - create_folder() / update_folder() / delete_folder()
    """

    async def list_folders(self, db: AsyncSession) -> List[FolderResponse]:
        try:
            result = await db.execute(select(Folder).order_by(Folder.id))
            folders = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing folders: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve folders. Please try again.",
                context={"error_type": type(e).__name__},
            )
        return [FolderResponse.model_validate(folder) for folder in folders]

    async def get_folder(self, db: AsyncSession, folder_id: int) -> Folder:
        """
        Fetch one folder row.

        Raises:
            NotFoundError: No folder with that id (→ 404 "Folder doesn't exist")
            DatabaseError: Query execution failed (→ 500)
        """
        if not is_storable_id(folder_id):
            raise NotFoundError(resource="Folder", resource_id=folder_id)

        try:
            result = await db.execute(select(Folder).where(Folder.id == folder_id))
            folder = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching folder %s: %s", folder_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the folder. Please try again.",
                context={"folder_id": folder_id},
            )

        if folder is None:
            raise NotFoundError(resource="Folder", resource_id=folder_id)
        return folder

    async def get_folder_notes(self, db: AsyncSession, folder_id: int) -> List[NoteResponse]:
        """
        Notes stored in a folder, in insertion order.

        GET /api/folders/{id} answers with the folder's contents rather than
        the folder row itself; an unknown id is still a 404.
        """
        await self.get_folder(db, folder_id)

        try:
            result = await db.execute(
                select(Note).where(Note.folder == folder_id).order_by(Note.id)
            )
            notes = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing notes of folder %s: %s", folder_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the folder's notes. Please try again.",
                context={"folder_id": folder_id},
            )
        return [NoteResponse.model_validate(note) for note in notes]

    async def create_folder(self, db: AsyncSession, body: Optional[FolderWrite]) -> FolderResponse:
        """
        Validate and insert a new folder.

        Returns:
            FolderResponse including the generated id.

        Raises:
            ValidationError: folder_name missing or blank (→ 400)
        """
        folder_name = validate_folder_write(body)

        folder = Folder(folder_name=folder_name)
        try:
            db.add(folder)
            await db.flush()  # Assigns the id without committing
        except SQLAlchemyError as e:
            logger.error("Database error creating folder: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the folder. Please try again.",
                context={"error_type": type(e).__name__},
            )

        logger.info("Folder created: %s", folder.id)
        return FolderResponse.model_validate(folder)

    async def update_folder(
        self,
        db: AsyncSession,
        folder_id: int,
        body: Optional[FolderWrite],
    ) -> None:
        """
        Rename a folder.

        Existence is checked before the body, so PATCH on an unknown id is a
        404 even when the body is empty.
        """
        folder = await self.get_folder(db, folder_id)
        folder.folder_name = validate_folder_write(body)

        try:
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error updating folder %s: %s", folder_id, str(e))
            raise DatabaseError(
                message="Could not update the folder. Please try again.",
                context={"folder_id": folder_id},
            )
        logger.info("Folder updated: %s", folder_id)

    async def delete_folder(self, db: AsyncSession, folder_id: int) -> None:
        """Delete a folder; its notes go with it through the ON DELETE CASCADE key."""
        folder = await self.get_folder(db, folder_id)

        try:
            await db.delete(folder)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error deleting folder %s: %s", folder_id, str(e))
            raise DatabaseError(
                message="Could not delete the folder. Please try again.",
                context={"folder_id": folder_id},
            )
        logger.info("Folder deleted: %s", folder_id)


# ── Singleton Instance ────────────────────────────────────────────────────
folder_service = FolderService()
