"""
NoteBox - Note SQLAlchemy Model
================================

What:  ORM model representing the `notes` collection in the store.
How:   Inherits from the shared DeclarativeBase; the table is created by
       Database.connect() when it does not exist yet.

Table Design:
    - id: String UUID generated in Python, so every backend dialect
      (PostgreSQL, SQLite) produces identical identifiers
    - title / body: user content, stored exactly as submitted
    - created_at: set once at insert, never modified
    - updated_at: NULL until the first edit
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from notebox.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Note(Base):
    """
    A single title/body note.

    Query Patterns:
        - List notes newest first: ORDER BY created_at DESC
          → idx_notes_created_at
        - Get single note: WHERE id = :id → primary key
        - Search: LOWER(title) / LOWER(body) LIKE '%term%' (full scan; the
          collection is a personal one)
    """

    __tablename__ = "notes"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)

    body: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )

    # NULL means the note was never edited
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
    )

    __table_args__ = (
        Index("idx_notes_created_at", created_at.desc()),
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title='{self.title}', created_at='{self.created_at}')>"
