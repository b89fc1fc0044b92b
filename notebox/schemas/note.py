"""
NoteBox - Pydantic Request/Response Schemas
============================================

What:  Pydantic models defining the API contract between client and backend.
Why:   Input validation, serialization and OpenAPI generation in one place.
Who:   Used by route handlers, by NoteService, and by the client controller,
       which keeps its in-memory collection as a list of NoteRecord.

Wire format:
    JSON keys are camelCase (`createdAt`, `updatedAt`) while Python code uses
    snake_case attributes. Both spellings are accepted on input.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel


class SortOrder(str, Enum):
    """Orderings offered by both the client list view and GET /notes."""

    NEWEST = "newest"
    OLDEST = "oldest"
    ALPHABETICAL = "alphabetical"


_camel_config = {
    "alias_generator": to_camel,
    "populate_by_name": True,
    "from_attributes": True,
}


# ══════════════════════════════════════════════════════════════════════════
# Records
# ══════════════════════════════════════════════════════════════════════════


class NoteRecord(BaseModel):
    """
    What:  Full representation of a note.
    Who:   Returned by every /notes endpoint; held in the client's state.

    Timestamps are normalized to timezone-aware UTC. SQLite hands back naive
    datetimes, and mixing naive with aware values would break sorting.
    """
    # "_id" is what document stores call the key
    id: str = Field(
        validation_alias=AliasChoices("id", "_id"),
        description="Unique, immutable note identifier",
    )
    title: str = Field(description="Note title")
    body: str = Field(description="Note content")
    created_at: datetime = Field(description="When the note was created (UTC ISO 8601)")
    updated_at: Optional[datetime] = Field(
        default=None,
        description="When the note was last edited (null if never edited)",
    )

    model_config = _camel_config

    @field_validator("created_at", "updated_at")
    @classmethod
    def ensure_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


class NoteListResponse(BaseModel):
    """Body of GET /notes: `{ "notes": Note[] }`."""
    notes: List[NoteRecord] = Field(description="Notes matching the query, in order")


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class NoteInput(BaseModel):
    """
    Body of POST /notes and PUT /notes/{id}.

    Emptiness after trimming is checked by NoteService (→ 400), not here
    (→ 422).
    """
    title: str = Field(max_length=255, description="Note title")
    body: str = Field(description="Note content")


# ══════════════════════════════════════════════════════════════════════════
# Error & Health
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Standardized error body for all API errors.

    Example:
        {
            "error": "validation_error",
            "message": "Title must not be empty",
            "details": {"field": "title"},
            "request_id": "1a2b3c4d"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
