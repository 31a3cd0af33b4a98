"""
LexiNote Backend — Note Service
=================================

What:  Business logic for notes and the hard-word replacement history.
How:   Parameterized SQLAlchemy statements against the async session passed
       in by the route (session-per-request, commit handled by get_db_session).
Who:   Called by the notes routes.

NoteService is stateless: every method receives the session it works on.
Database failures are logged and re-raised as DatabaseError so no SQL
details reach the client.
"""

import logging
import uuid
from typing import List, Optional

from sqlalchemy import delete, desc, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from lexinote.exceptions import DatabaseError, NotFoundError
from lexinote.models.note import HardWordReplacement, Note, utcnow
from lexinote.schemas.note import (
    HardWordReplacementResponse,
    NoteCreate,
    NoteListResponse,
    NoteResponse,
)

logger = logging.getLogger(__name__)


class NoteService:
    """
    Responsibilities:
        - save_note(): insert or replace a note by id
        - list_notes(): all notes, most recently updated first
        - get_note() / delete_note(): single-note access with not-found handling
        - save_hard_word_replacement() / list_hard_word_history()
    """

    async def save_note(
        self,
        db: AsyncSession,
        payload: NoteCreate,
        note_id: Optional[str] = None,
    ) -> NoteResponse:
        """
        Insert or replace a note.

        The id comes from `note_id` (PUT path), then `payload.id`, and is
        generated when both are absent. An existing row keeps its created_at;
        updated_at is always stamped now.
        """
        target_id = note_id or payload.id or str(uuid.uuid4())

        try:
            note = await db.get(Note, target_id)
            now = utcnow()

            if note is None:
                note = Note(id=target_id, created_at=now)
                db.add(note)
                action = "created"
            else:
                action = "updated"

            note.title = payload.title
            note.content = payload.content
            note.hard_words = list(payload.hard_words)
            note.tags = list(payload.tags)
            note.updated_at = now

            await db.flush()
            logger.info("Note %s %s (%d hard words)", target_id, action, len(note.hard_words))
            return NoteResponse.model_validate(note)

        except SQLAlchemyError as e:
            logger.error("Database error saving note %s: %s", target_id, str(e))
            raise DatabaseError(
                message="Could not save the note. Please try again.",
                context={"note_id": target_id},
            )

    async def list_notes(self, db: AsyncSession) -> NoteListResponse:
        try:
            result = await db.execute(select(Note).order_by(desc(Note.updated_at)))
            notes = [NoteResponse.model_validate(note) for note in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error("Database error listing notes: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve notes. Please try again.",
                context={"error_type": type(e).__name__},
            )
        return NoteListResponse(notes=notes, total_count=len(notes))

    async def get_note(self, db: AsyncSession, note_id: str) -> NoteResponse:
        """
        Raises:
            NotFoundError: no note with this id (→ 404)
            DatabaseError: query execution failed (→ 500)
        """
        try:
            note = await db.get(Note, note_id)
        except SQLAlchemyError as e:
            logger.error("Database error fetching note %s: %s", note_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the note. Please try again.",
                context={"note_id": note_id},
            )

        if note is None:
            raise NotFoundError(resource="note", resource_id=note_id)
        return NoteResponse.model_validate(note)

    async def delete_note(self, db: AsyncSession, note_id: str) -> None:
        try:
            result = await db.execute(delete(Note).where(Note.id == note_id))
        except SQLAlchemyError as e:
            logger.error("Database error deleting note %s: %s", note_id, str(e))
            raise DatabaseError(
                message="Could not delete the note. Please try again.",
                context={"note_id": note_id},
            )

        if result.rowcount == 0:
            raise NotFoundError(resource="note", resource_id=note_id)
        logger.info("Note %s deleted", note_id)

    # ── Hard-word replacement history ─────────────────────────────────────

    async def save_hard_word_replacement(
        self,
        db: AsyncSession,
        word: str,
        replacement: str,
        context: str = "",
    ) -> HardWordReplacementResponse:
        """Record that the user replaced `word` with `replacement`."""
        try:
            entry = HardWordReplacement(
                word=word,
                replacement=replacement,
                context=context,
                created_at=utcnow(),
            )
            db.add(entry)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error saving replacement for '%s': %s", word, str(e))
            raise DatabaseError(message="Failed to save word replacement")

        return HardWordReplacementResponse.model_validate(entry)

    async def list_hard_word_history(self, db: AsyncSession) -> List[HardWordReplacementResponse]:
        """Replacement history, newest first."""
        try:
            result = await db.execute(
                select(HardWordReplacement).order_by(
                    desc(HardWordReplacement.created_at),
                    desc(HardWordReplacement.id),
                )
            )
            entries = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing replacement history: %s", str(e))
            raise DatabaseError(message="Could not retrieve replacement history.")

        return [HardWordReplacementResponse.model_validate(entry) for entry in entries]


# ── Singleton Instance ────────────────────────────────────────────────────
# NoteService is stateless; one instance serves every request
note_service = NoteService()
