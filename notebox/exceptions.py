"""
NoteBox - Custom Exception Hierarchy
=====================================

What:  Application-specific exceptions for the backend.
Why:   Global handlers (registered in main.py) map each type to an HTTP status
       and a structured JSON body, so services never deal with HTTP details.
How:   Each exception carries a user-facing message and an optional context
       dict. Context is logged server-side and only returned where it is safe.

Exception Hierarchy:
    NoteBoxError (base)
    ├── ValidationError           → 400 Bad Request (client can fix)
    ├── NotFoundError             → 404 Not Found
    ├── DatabaseError             → 500 Internal Server Error
    └── DatabaseUnavailableError  → 503 Service Unavailable (bootstrap failed)

The client controller does not use this hierarchy: client-side failures are a
single human-readable banner message (see notebox.client.controller).
"""

from typing import Any, Dict, Optional


class NoteBoxError(Exception):
    """
    Base exception for all NoteBox application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, returned only by 4xx handlers)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(NoteBoxError):
    """
    Raised when client input fails a business rule.

    When:    Title or body is empty after trimming whitespace.
    HTTP:    400 Bad Request

    Schema-level problems (missing fields, wrong types) are still reported by
    FastAPI as 422; this exception covers rules Pydantic cannot express.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(NoteBoxError):
    """Raised when a requested note does not exist. HTTP 404."""

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(NoteBoxError):
    """
    Raised when a store operation fails unexpectedly.

    The message returned to the client is always generic; the original
    exception type is kept in context for the server log.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseUnavailableError(NoteBoxError):
    """
    Raised when a handler needs the store but the startup connection failed.

    HTTP:    503 Service Unavailable

    The bootstrap never retries, so this state lasts until the process is
    restarted with a working connection string.
    """

    def __init__(
        self,
        message: str = "The notes database is not connected.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
