"""
NoteBox - Notes Route Handlers
===============================

What:  REST surface over the notes store.
Who:   Called by the client controller (GET /notes on load) and by any other
       HTTP consumer.

The list endpoint answers with `{ "notes": [...] }` so the client can read
the collection from a single key, and exposes the match count in
X-Total-Count.
"""

import logging

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from notebox.database import get_db_session
from notebox.schemas.note import (
    ErrorResponse,
    NoteInput,
    NoteListResponse,
    NoteRecord,
    SortOrder,
)
from notebox.services.note_service import note_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Notes"])

_store_errors = {
    500: {"description": "Server error", "model": ErrorResponse},
    503: {"description": "Database not connected", "model": ErrorResponse},
}


@router.get(
    "/notes",
    response_model=NoteListResponse,
    responses=_store_errors,
    summary="List notes",
    description=(
        "Returns every note whose title or body contains `q` (case-insensitive), "
        "ordered newest first, oldest first, or alphabetically by title."
    ),
)
async def list_notes(
    response: Response,
    q: str | None = Query(default=None, description="Case-insensitive search term"),
    sort: SortOrder = Query(default=SortOrder.NEWEST, description="Result ordering"),
    db: AsyncSession = Depends(get_db_session),
) -> NoteListResponse:
    notes = await note_service.list_notes(db=db, search=q, sort=sort)
    response.headers["X-Total-Count"] = str(len(notes))
    return NoteListResponse(notes=notes)


@router.get(
    "/notes/{note_id}",
    response_model=NoteRecord,
    responses={404: {"description": "Note not found", "model": ErrorResponse}, **_store_errors},
    summary="Get a single note by ID",
)
async def get_note(
    note_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> NoteRecord:
    return await note_service.get_note(db=db, note_id=note_id)


@router.post(
    "/notes",
    response_model=NoteRecord,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Empty title or body", "model": ErrorResponse}, **_store_errors},
    summary="Create a note",
)
async def create_note(
    payload: NoteInput,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> NoteRecord:
    note = await note_service.create_note(db=db, title=payload.title, body=payload.body)
    response.headers["Location"] = f"/notes/{note.id}"
    return note


@router.put(
    "/notes/{note_id}",
    response_model=NoteRecord,
    responses={
        400: {"description": "Empty title or body", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
        **_store_errors,
    },
    summary="Replace a note's title and body",
)
async def update_note(
    note_id: str,
    payload: NoteInput,
    db: AsyncSession = Depends(get_db_session),
) -> NoteRecord:
    """
    Replace title and body; `updatedAt` is stamped, `id` and `createdAt` keep
    their original values.
    """
    return await note_service.update_note(
        db=db, note_id=note_id, title=payload.title, body=payload.body
    )


@router.delete(
    "/notes/{note_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"description": "Note not found", "model": ErrorResponse}, **_store_errors},
    summary="Delete a note",
)
async def delete_note(
    note_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    # Confirmation is a client concern; the API deletes immediately
    await note_service.delete_note(db=db, note_id=note_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
