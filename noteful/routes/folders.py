"""
Noteful API - Folder Route Handlers
===================================

What:  /api/folders collection and item endpoints.
How:   Extracts path params and body, delegates to FolderService, sets the
       response status. Errors are raised by the service and rendered by the
       global handlers in main.py.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.database import get_db_session
from noteful.schemas.common import ErrorResponse
from noteful.schemas.folder import FolderResponse, FolderWrite
from noteful.schemas.note import NoteResponse
from noteful.services.folder_service import folder_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/folders", tags=["Folders"])


@router.get(
    "",
    response_model=List[FolderResponse],
    summary="List all folders",
)
async def list_folders(
    db: AsyncSession = Depends(get_db_session),
) -> List[FolderResponse]:
    return await folder_service.list_folders(db)


@router.post(
    "",
    response_model=FolderResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "folder_name missing", "model": ErrorResponse}},
    summary="Create a folder",
)
async def create_folder(
    body: Optional[FolderWrite] = Body(default=None),
    db: AsyncSession = Depends(get_db_session),
) -> FolderResponse:
    return await folder_service.create_folder(db, body)


@router.get(
    "/{folder_id}",
    response_model=List[NoteResponse],
    responses={404: {"description": "Folder not found", "model": ErrorResponse}},
    summary="List the notes stored in a folder",
)
async def get_folder(
    folder_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> List[NoteResponse]:
    """
    Returns the notes filed under the folder, not the folder row.

    Args:
        folder_id: Integer path parameter. Unknown ids return 404.
    """
    return await folder_service.get_folder_notes(db, folder_id)


@router.patch(
    "/{folder_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={
        400: {"description": "folder_name missing", "model": ErrorResponse},
        404: {"description": "Folder not found", "model": ErrorResponse},
    },
    summary="Rename a folder",
)
async def update_folder(
    folder_id: int,
    body: Optional[FolderWrite] = Body(default=None),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await folder_service.update_folder(db, folder_id, body)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{folder_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={404: {"description": "Folder not found", "model": ErrorResponse}},
    summary="Delete a folder and its notes",
)
async def delete_folder(
    folder_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await folder_service.delete_folder(db, folder_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
