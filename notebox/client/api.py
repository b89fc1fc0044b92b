"""
NoteBox - Client HTTP Adapter
==============================

What:  Reads the note collection from the backend (GET /notes).
How:   One short-lived httpx.AsyncClient per call. Every way the call can go
       wrong (connection refused, timeout, non-2xx status, body that is not
       `{ "notes": [...] }`) surfaces as a single ApiClientError, because the
       controller reacts to all of them the same way.
"""

import logging
from typing import List, Optional

import httpx

from notebox.config import settings
from notebox.schemas.note import NoteRecord

logger = logging.getLogger(__name__)


class ApiClientError(Exception):
    """The backend could not be reached or answered with something unusable."""


class NotesApiClient:
    """
    Thin async client for the notes REST API.

    Args:
        base_url:  Backend root, e.g. http://localhost:3001
        timeout:   Seconds before a request is abandoned
        transport: Optional httpx transport (ASGITransport or MockTransport
                   in tests)
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls) -> "NotesApiClient":
        return cls(base_url=settings.api_base_url, timeout=settings.api_timeout)

    async def fetch_notes(self) -> List[NoteRecord]:
        """
        GET /notes and return the records in server order.

        A body without a "notes" key (or with null) is an empty collection.
        An unparsable base URL is reported like an unreachable backend.

        Raises:
            ApiClientError: transport failure, HTTP error status, or a
                malformed payload
        """
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                response = await client.get("/notes")
                response.raise_for_status()
                payload = response.json()
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning("Fetching notes from %s failed: %s", self.base_url, exc)
            raise ApiClientError(f"Could not fetch notes: {exc}") from exc
        except ValueError as exc:
            raise ApiClientError("Notes response is not valid JSON") from exc

        if not isinstance(payload, dict):
            raise ApiClientError("Notes response must be a JSON object")

        notes = payload.get("notes")
        if notes is None:
            return []
        if not isinstance(notes, list):
            raise ApiClientError("Notes response field \"notes\" must be a list")

        try:
            return [NoteRecord.model_validate(item) for item in notes]
        except ValueError as exc:
            raise ApiClientError(f"Notes response contains an invalid note: {exc}") from exc
