"""
NoteBox - Client Package
=========================

What:  Client-side state management for a list of notes.

    - NotesController: owns the in-memory collection; create / edit /
      two-phase delete / search / sort, all applied optimistically
    - NotesApiClient:  fetches the initial collection over HTTP
"""

from notebox.client.api import ApiClientError, NotesApiClient
from notebox.client.controller import NotesController
from notebox.client.state import DeleteConfirmation, NotesState

__all__ = [
    "ApiClientError",
    "DeleteConfirmation",
    "NotesApiClient",
    "NotesController",
    "NotesState",
]
