"""
NoteBox - Access Log Middleware
================================

What:  One access-log line per /notes request.
How:   Times the downstream handler, then describes the outcome in NoteBox
       terms: how many notes a listing returned (X-Total-Count) or which
       note a single-note call touched (path or Location header).

Note titles and bodies never reach the log; only ids and counts do.
"""

import logging
import re
import time
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from notebox.middleware.request_id import request_id_var

logger = logging.getLogger("notebox.access")

_NOTE_PATH = re.compile(r"^/notes/(?P<note_id>[^/]+)$")

# Paths polled by orchestrators
_QUIET_PATHS = frozenset({"/health"})


def note_id_for(path: str, response: Response) -> Optional[str]:
    """Id of the note a request addressed, or that a POST just created."""
    match = _NOTE_PATH.match(path) or _NOTE_PATH.match(response.headers.get("Location", ""))
    return match.group("note_id") if match else None


def describe(request: Request, response: Response) -> str:
    if request.method == "GET" and request.url.path == "/notes":
        return f"notes={response.headers.get('X-Total-Count', '?')}"
    note_id = note_id_for(request.url.path, response)
    return f"note={note_id}" if note_id else ""


def level_for(status: int) -> int:
    # Stale note ids (404) are logged at INFO
    if status >= 500:
        return logging.ERROR
    if status >= 400 and status != 404:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs method, path, status, timing and the notes involved."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in _QUIET_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        detail = describe(request, response)
        logger.log(
            level_for(response.status_code),
            "[%s] %s %s -> %d in %.1fms %s",
            request_id_var.get(""),
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            detail,
        )
        return response
