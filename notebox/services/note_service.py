"""
NoteBox - Note Service (Business Logic)
========================================

What:  CRUD operations on notes for the REST handlers.
Why:   Keeps business rules (non-empty input, not-found handling, timestamp
       stamping) out of the HTTP layer.
How:   Each method receives the request's AsyncSession, works through the
       SQLAlchemy ORM and returns NoteRecord schemas.
Who:   Called by notebox.routes.notes.

Error Handling Strategy:
    ValidationError and NotFoundError propagate unchanged. Any other failure
    from the store is logged and wrapped in DatabaseError so the client only
    ever sees a generic message.

NoteService is stateless; a module-level instance is shared by all requests.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import ColumnElement, asc, desc, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from notebox.exceptions import DatabaseError, NotFoundError, ValidationError
from notebox.models.note import Note
from notebox.schemas.note import NoteRecord, SortOrder

logger = logging.getLogger(__name__)

# Collations that compare titles by code point, like Python's str ordering
_CODE_POINT_COLLATIONS = {"postgresql": "C", "sqlite": "binary"}


def title_ordering(dialect_name: str) -> ColumnElement:
    """Note.title with the dialect's code-point collation, when one is known."""
    collation = _CODE_POINT_COLLATIONS.get(dialect_name)
    if collation is None:
        return Note.title
    return Note.title.collate(collation)


def validate_note_input(title: str, body: str) -> None:
    """Raise ValidationError unless both fields contain non-whitespace text."""
    if not title.strip():
        raise ValidationError(message="Title must not be empty", field="title")
    if not body.strip():
        raise ValidationError(message="Body must not be empty", field="body")


class NoteService:
    """
    Business logic layer for note operations.

    Responsibilities:
        - list_notes(): filtered, ordered listing
        - get_note(): single note retrieval with not-found handling
        - create_note() / update_note() / delete_note(): mutations
    """

    async def list_notes(
        self,
        db: AsyncSession,
        search: Optional[str] = None,
        sort: SortOrder = SortOrder.NEWEST,
    ) -> List[NoteRecord]:
        """
        List notes matching `search`, ordered by `sort`.

        The search is a case-insensitive substring match over title and body.
        LIKE wildcards in the term are escaped, so "100%" matches literally.
        Alphabetical order compares titles by code point ("Banana" before
        "apple"), whatever the database's default collation is. Notes with
        equal titles are listed newest first.
        """
        try:
            query = select(Note)

            term = (search or "").lower()
            if term:
                query = query.where(
                    or_(
                        func.lower(Note.title).contains(term, autoescape=True),
                        func.lower(Note.body).contains(term, autoescape=True),
                    )
                )

            if sort == SortOrder.OLDEST:
                query = query.order_by(asc(Note.created_at))
            elif sort == SortOrder.ALPHABETICAL:
                title = title_ordering(db.bind.dialect.name)
                query = query.order_by(asc(title), desc(Note.created_at))
            else:
                query = query.order_by(desc(Note.created_at))

            result = await db.execute(query)
            return [NoteRecord.model_validate(note) for note in result.scalars().all()]

        except Exception as e:
            logger.error("Database error listing notes: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve notes. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def get_note(self, db: AsyncSession, note_id: str) -> NoteRecord:
        """
        Retrieve a single note by ID.

        Raises:
            NotFoundError: no note with this ID (→ 404)
            DatabaseError: query execution failed (→ 500)
        """
        note = await self._load(db, note_id)
        return NoteRecord.model_validate(note)

    async def create_note(self, db: AsyncSession, title: str, body: str) -> NoteRecord:
        """Insert a new note with a fresh UUID and creation timestamp."""
        validate_note_input(title, body)
        try:
            note = Note(title=title, body=body, created_at=datetime.now(timezone.utc))
            db.add(note)
            await db.flush()
            logger.info("Note created: %s", note.id)
            return NoteRecord.model_validate(note)
        except Exception as e:
            logger.error("Database error creating note: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the note. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def update_note(
        self, db: AsyncSession, note_id: str, title: str, body: str
    ) -> NoteRecord:
        """
        Replace title and body of an existing note and stamp updated_at.

        id and created_at are never touched. Last write wins: there is no
        version check against concurrent edits.
        """
        validate_note_input(title, body)
        note = await self._load(db, note_id)
        try:
            note.title = title
            note.body = body
            note.updated_at = datetime.now(timezone.utc)
            await db.flush()
            logger.info("Note updated: %s", note_id)
            return NoteRecord.model_validate(note)
        except Exception as e:
            logger.error("Database error updating note %s: %s", note_id, str(e))
            raise DatabaseError(
                message="Could not update the note. Please try again.",
                context={"note_id": note_id},
            )

    async def delete_note(self, db: AsyncSession, note_id: str) -> None:
        note = await self._load(db, note_id)
        try:
            await db.delete(note)
            await db.flush()
            logger.info("Note deleted: %s", note_id)
        except Exception as e:
            logger.error("Database error deleting note %s: %s", note_id, str(e))
            raise DatabaseError(
                message="Could not delete the note. Please try again.",
                context={"note_id": note_id},
            )

    async def _load(self, db: AsyncSession, note_id: str) -> Note:
        try:
            result = await db.execute(select(Note).where(Note.id == note_id))
            note = result.scalar_one_or_none()
        except Exception as e:
            logger.error("Database error fetching note %s: %s", note_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the note. Please try again.",
                context={"note_id": note_id},
            )

        if note is None:
            raise NotFoundError(resource="note", resource_id=note_id)
        return note


note_service = NoteService()
