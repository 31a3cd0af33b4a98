"""
LexiNote Backend — Notes Route Handlers
=========================================

What:  Note CRUD plus the hard-word replacement history.
How:   Extracts path parameters and bodies, delegates to NoteService, returns JSON.
Who:   The note list, the editor, and the word-replacement sheet.

Caching:
    Notes are editable, so responses are sent with Cache-Control: no-store.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from lexinote.database import get_db_session
from lexinote.schemas.note import (
    ErrorResponse,
    HardWordReplacementCreate,
    HardWordReplacementResponse,
    NoteCreate,
    NoteListResponse,
    NoteResponse,
)
from lexinote.services.note_service import note_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Notes"])


@router.get(
    "/notes",
    response_model=NoteListResponse,
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List notes, most recently updated first",
)
async def list_notes(
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> NoteListResponse:
    """
    X-Total-Count mirrors `total_count` for clients that only read headers.
    """
    result = await note_service.list_notes(db)
    response.headers["X-Total-Count"] = str(result.total_count)
    response.headers["Cache-Control"] = "no-store"
    return result


@router.post(
    "/notes",
    status_code=201,
    response_model=NoteResponse,
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="Create a note (or replace one with the same id)",
)
async def create_note(
    body: NoteCreate,
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    return await note_service.save_note(db, body)


@router.get(
    "/notes/{note_id}",
    response_model=NoteResponse,
    responses={404: {"description": "Note not found", "model": ErrorResponse}},
    summary="Get a single note by id",
)
async def get_note(
    note_id: str,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    result = await note_service.get_note(db, note_id)
    response.headers["Cache-Control"] = "no-store"
    return result


@router.put(
    "/notes/{note_id}",
    response_model=NoteResponse,
    summary="Insert or replace the note with this id",
)
async def put_note(
    note_id: str,
    body: NoteCreate,
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    """The path id wins over any `id` in the body."""
    return await note_service.save_note(db, body, note_id=note_id)


@router.delete(
    "/notes/{note_id}",
    status_code=204,
    responses={404: {"description": "Note not found", "model": ErrorResponse}},
    summary="Delete a note",
)
async def delete_note(
    note_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await note_service.delete_note(db, note_id)
    return Response(status_code=204)


# ── Hard-word replacement history ─────────────────────────────────────────


@router.get(
    "/hard-words/history",
    response_model=List[HardWordReplacementResponse],
    summary="Words the user has replaced, newest first",
)
async def list_hard_word_history(
    db: AsyncSession = Depends(get_db_session),
) -> List[HardWordReplacementResponse]:
    return await note_service.list_hard_word_history(db)


@router.post(
    "/hard-words/history",
    status_code=201,
    response_model=HardWordReplacementResponse,
    summary="Record a word replacement",
)
async def add_hard_word_replacement(
    body: HardWordReplacementCreate,
    db: AsyncSession = Depends(get_db_session),
) -> HardWordReplacementResponse:
    return await note_service.save_hard_word_replacement(
        db, word=body.word, replacement=body.replacement, context=body.context
    )
