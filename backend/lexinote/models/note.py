"""
LexiNote Backend — Note SQLAlchemy Models
===========================================

What:  ORM models for the `notes` and `hard_words_history` tables.
How:   Inherit from the shared DeclarativeBase; the schema itself lives in
       backend/alembic/versions/.
Who:   Used by NoteService for all note and replacement-history operations.

Table Design:
    notes
        - id: client-visible string UUID (the client may supply its own)
        - hard_words / tags: JSON arrays of strings
        - created_at / updated_at: UTC timestamps; listing sorts on updated_at
    hard_words_history
        - one row each time the user accepts a simpler alternative
"""

import uuid
from datetime import datetime, timezone
from typing import List

from sqlalchemy import JSON, DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from lexinote.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Note(Base):
    """
    A user note.

    Lifecycle:
        1. Created by POST /api/notes (or PUT with a new id)
        2. Replaced wholesale on every save (title, content, hard_words, tags)
        3. Deleted by DELETE /api/notes/{id}
    """

    __tablename__ = "notes"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    title: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    # Words the analyzer flagged for this note, e.g. ["ubiquitous", "ephemeral"]
    hard_words: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    tags: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)

    __table_args__ = (
        Index("idx_notes_updated_at", updated_at.desc()),
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title='{self.title}', updated_at='{self.updated_at}')>"


class HardWordReplacement(Base):
    """One accepted replacement of a hard word by a simpler alternative."""

    __tablename__ = "hard_words_history"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    word: Mapped[str] = mapped_column(Text, nullable=False)
    replacement: Mapped[str] = mapped_column(Text, nullable=False)
    context: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    def __repr__(self) -> str:
        return f"<HardWordReplacement(word='{self.word}', replacement='{self.replacement}')>"
