"""
NoteBox - Health Check Route
=============================

What:  Reports whether the process can reach its notes store.
Why:   A failed startup connection leaves the server running but unable to
       serve notes; this endpoint is where that state becomes visible.

Status levels:
    - healthy:   store connected and answering SELECT 1
    - unhealthy: connect() failed at startup, or the store stopped answering
"""

import logging
import time

from fastapi import APIRouter
from sqlalchemy import text

from notebox import __version__
from notebox.database import database
from notebox.schemas.note import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check() -> HealthResponse:
    db_status = "disconnected"

    if database.is_connected:
        try:
            async with database.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            db_status = "connected"
        except Exception as e:
            logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status="healthy" if db_status == "connected" else "unhealthy",
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
