"""
NoteBox - Client State
=======================

What:  The explicit state object owned by one NotesController.

Delete confirmation is a two-state machine:

    idle ──request(X)──▶ pending(X) ──request(X)──▶ idle   (X removed)
                            │  ▲
                 request(Y) │  │ (re-armed for Y, X forgotten)
                            ▼  │
                         pending(Y)

    pending(·) ──cancel──▶ idle
"""

from dataclasses import dataclass, field
from typing import List, Optional

from notebox.schemas.note import NoteRecord, SortOrder


class DeleteConfirmation:
    """Tracks which note, if any, is waiting for its second delete request."""

    def __init__(self) -> None:
        self.pending_id: Optional[str] = None

    @property
    def is_pending(self) -> bool:
        return self.pending_id is not None

    def request(self, note_id: str) -> bool:
        """
        Register a delete request for `note_id`.

        Returns True when this request confirms an already armed delete of
        the same note (the machine goes back to idle), False when it only
        arms the confirmation.
        """
        if self.pending_id == note_id:
            self.pending_id = None
            return True
        self.pending_id = note_id
        return False

    def cancel(self) -> None:
        self.pending_id = None


@dataclass
class NotesState:
    """
    Everything the client knows. No field is shared with another controller.

    Attributes:
        notes:       The collection, most recently created first
        search_term: Current filter for visible_notes
        sort_order:  Current ordering for visible_notes
        loading:     True while the initial fetch is in flight
        error:       Banner message, or None
        editing_id:  Note loaded into the edit form, or None
        delete:      Pending delete confirmation
    """

    notes: List[NoteRecord] = field(default_factory=list)
    search_term: str = ""
    sort_order: SortOrder = SortOrder.NEWEST
    loading: bool = False
    error: Optional[str] = None
    editing_id: Optional[str] = None
    delete: DeleteConfirmation = field(default_factory=DeleteConfirmation)

    def index_of(self, note_id: str) -> Optional[int]:
        for index, note in enumerate(self.notes):
            if note.id == note_id:
                return index
        return None
