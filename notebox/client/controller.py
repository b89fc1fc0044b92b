"""
NoteBox - Client State Controller
==================================

What:  Mediates create / update / delete intents against an in-memory note
       collection and derives the filtered, sorted view shown to the user.
How:   Every mutation is applied locally and immediately (optimistic). The
       backend is only consulted once, by load(), to obtain the initial
       collection; nothing is written back.

Failure model:
    There is one failure channel: `state.error`, a human-readable message
    shown as a dismissible banner. It is replaced by the next failure and
    cleared by the next successful operation or by dismiss_error(). No
    failure stops the controller from accepting further intents.
"""

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Callable, Iterable, List, Optional

from notebox.client.api import ApiClientError, NotesApiClient
from notebox.client.state import NotesState
from notebox.schemas.note import NoteRecord, SortOrder

logger = logging.getLogger(__name__)

FETCH_FAILED = "Failed to fetch notes. Please try again later."
UPDATE_FAILED = "Failed to update note. Please try again."


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def placeholder_notes(now: datetime) -> List[NoteRecord]:
    """Shown when the initial fetch fails, so the screen is never empty."""
    return [
        NoteRecord(
            id="1",
            title="Welcome",
            body="Welcome to your notes app!",
            created_at=now,
        ),
        NoteRecord(
            id="2",
            title="Getting Started",
            body="Create your first note by filling out the form below.",
            created_at=now - timedelta(days=1),
        ),
    ]


def filter_notes(notes: Iterable[NoteRecord], term: str) -> List[NoteRecord]:
    """Case-insensitive substring match over title and body. "" matches all."""
    needle = term.lower()
    return [
        note
        for note in notes
        if needle in note.title.lower() or needle in note.body.lower()
    ]


def sort_notes(notes: Iterable[NoteRecord], order: SortOrder) -> List[NoteRecord]:
    """Stable sort; alphabetical compares titles as plain strings."""
    if order == SortOrder.OLDEST:
        return sorted(notes, key=lambda note: note.created_at)
    if order == SortOrder.ALPHABETICAL:
        return sorted(notes, key=lambda note: note.title)
    return sorted(notes, key=lambda note: note.created_at, reverse=True)


def _is_blank(value: str) -> bool:
    return not value.strip()


class NotesController:
    """
    Owns one NotesState and every transition on it.

    Args:
        api:    Source for load(); defaults to a client built from settings
        notes:  Initial collection (tests, or a caller that already has data)
        clock:  Returns "now" as an aware datetime
    """

    def __init__(
        self,
        api: Optional[NotesApiClient] = None,
        notes: Optional[Iterable[NoteRecord]] = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._api = api or NotesApiClient.from_settings()
        self._clock = clock
        self.state = NotesState(notes=list(notes or []))

    # ── Read side ─────────────────────────────────────────────────────────

    @property
    def notes(self) -> List[NoteRecord]:
        return list(self.state.notes)

    @property
    def error(self) -> Optional[str]:
        return self.state.error

    @property
    def pending_delete_id(self) -> Optional[str]:
        return self.state.delete.pending_id

    @property
    def editing_id(self) -> Optional[str]:
        return self.state.editing_id

    def get(self, note_id: str) -> Optional[NoteRecord]:
        index = self.state.index_of(note_id)
        return None if index is None else self.state.notes[index]

    def list_notes(
        self,
        search: str = "",
        sort: SortOrder = SortOrder.NEWEST,
    ) -> List[NoteRecord]:
        """Filter by `search`, then order by `sort`. The collection is untouched."""
        return sort_notes(filter_notes(self.state.notes, search), SortOrder(sort))

    @property
    def visible_notes(self) -> List[NoteRecord]:
        return self.list_notes(self.state.search_term, self.state.sort_order)

    def set_search(self, term: str) -> None:
        self.state.search_term = term

    def set_sort(self, order: SortOrder) -> None:
        self.state.sort_order = SortOrder(order)

    # ── Initial load ──────────────────────────────────────────────────────

    async def load(self) -> None:
        """
        Replace the collection with the backend's copy.

        On failure the error banner is set and the placeholder notes are
        shown instead; the exception is not propagated.
        """
        self.state.loading = True
        try:
            self.state.notes = await self._api.fetch_notes()
            self.state.error = None
        except ApiClientError as exc:
            logger.warning("Initial note fetch failed, using placeholder notes: %s", exc)
            self.state.error = FETCH_FAILED
            self.state.notes = placeholder_notes(self._clock())
        finally:
            self.state.loading = False

    # ── Mutations ─────────────────────────────────────────────────────────

    def create(self, title: str, body: str) -> Optional[NoteRecord]:
        """
        Add a note at the front of the collection.

        Returns the new note, or None (and changes nothing) when title or
        body is blank.
        """
        if _is_blank(title) or _is_blank(body):
            return None

        note = NoteRecord(
            id=self._new_id(),
            title=title,
            body=body,
            created_at=self._clock(),
        )
        self.state.notes.insert(0, note)
        self.state.error = None
        return note

    def begin_edit(self, note_id: str) -> Optional[NoteRecord]:
        """Load a note into the edit form; returns it for pre-filling fields."""
        note = self.get(note_id)
        if note is not None:
            self.state.editing_id = note_id
        return note

    def cancel_edit(self) -> None:
        self.state.editing_id = None

    def update(self, note_id: str, title: str, body: str) -> Optional[NoteRecord]:
        """
        Replace title and body of `note_id` and stamp updated_at.

        Blank input is ignored (None, edit form kept). An unknown id sets the
        error banner and returns None.
        """
        if _is_blank(title) or _is_blank(body):
            return None

        index = self.state.index_of(note_id)
        if index is None:
            logger.warning("Update requested for unknown note %s", note_id)
            self.state.error = UPDATE_FAILED
            return None

        updated = self.state.notes[index].model_copy(
            update={"title": title, "body": body, "updated_at": self._clock()}
        )
        self.state.notes[index] = updated
        self.state.editing_id = None
        self.state.error = None
        return updated

    def delete(self, note_id: str) -> bool:
        """
        Two-phase delete. The first call arms confirmation for `note_id`;
        a second consecutive call on the same id removes the note.

        Returns True only when a note was actually removed.
        """
        if not self.state.delete.request(note_id):
            return False

        before = len(self.state.notes)
        self.state.notes = [note for note in self.state.notes if note.id != note_id]
        if self.state.editing_id == note_id:
            self.state.editing_id = None
        self.state.error = None
        return len(self.state.notes) < before

    def cancel_delete(self) -> None:
        self.state.delete.cancel()

    def dismiss_error(self) -> None:
        self.state.error = None

    def _new_id(self) -> str:
        while True:
            candidate = uuid.uuid4().hex
            if self.state.index_of(candidate) is None:
                return candidate
