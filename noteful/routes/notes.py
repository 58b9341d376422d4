"""
Noteful API - Note Route Handlers
=================================

What:  Note collection and item endpoints.
How:   Delegates to NoteService; sets 201 + Location on create and 204 on
       update/delete.

The note collection answers at the API root (GET /api) as well as at
GET /api/notes.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.database import get_db_session
from noteful.schemas.common import ErrorResponse
from noteful.schemas.note import NoteCreate, NoteResponse, NoteUpdate
from noteful.services.note_service import note_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Notes"])


def note_location(note_id: int) -> str:
    return f"{router.prefix}/notes/{note_id}"


@router.get(
    "",
    response_model=List[NoteResponse],
    summary="List all notes",
)
@router.get(
    "/notes",
    response_model=List[NoteResponse],
    include_in_schema=False,
)
async def list_notes(
    db: AsyncSession = Depends(get_db_session),
) -> List[NoteResponse]:
    return await note_service.list_notes(db)


@router.post(
    "/notes",
    response_model=NoteResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Missing field or unknown folder", "model": ErrorResponse}},
    summary="Create a note",
)
async def create_note(
    response: Response,
    body: Optional[NoteCreate] = Body(default=None),
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    """
    Create a note and point the Location header at it.

    Example:
        POST /api/notes {"note_name": "n", "content": "c", "folder": 2}
        → 201, Location: /api/notes/7
    """
    note = await note_service.create_note(db, body)
    response.headers["Location"] = note_location(note.id)
    return note


@router.get(
    "/notes/{note_id}",
    response_model=NoteResponse,
    responses={404: {"description": "Note not found", "model": ErrorResponse}},
    summary="Get a single note by id",
)
async def get_note(
    note_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    return await note_service.get_note(db, note_id)


@router.patch(
    "/notes/{note_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={
        400: {"description": "No updatable field supplied", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
    },
    summary="Update some fields of a note",
)
async def update_note(
    note_id: int,
    body: Optional[NoteUpdate] = Body(default=None),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await note_service.update_note(db, note_id, body)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/notes/{note_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={404: {"description": "Note not found", "model": ErrorResponse}},
    summary="Delete a note",
)
async def delete_note(
    note_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await note_service.delete_note(db, note_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
