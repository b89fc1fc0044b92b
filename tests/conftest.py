"""
NoteBox - Test Configuration (conftest.py)
===========================================

What:  Shared pytest fixtures for the entire test suite.
How:   The environment is pointed at a throwaway SQLite file BEFORE any
       notebox module is imported, because notebox.config reads it at import.

Fixtures:
    ├── connected_database: the app's Database, connected; emptied afterwards
    ├── db_session: a session on that database (committed at teardown)
    ├── mock_db_session: AsyncMock standing in for AsyncSession
    ├── test_client: HTTPX AsyncClient wired to the FastAPI app
    ├── clock: deterministic, strictly increasing clock for the controller
    └── sample_notes: two NoteRecords ("Welcome", "Getting Started")
"""

import os
import tempfile
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

_test_dir = tempfile.mkdtemp(prefix="notebox_test_")
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_test_dir}/test.db"
os.environ["API_BASE_URL"] = "http://test"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import delete  # noqa: E402

from notebox.database import database  # noqa: E402
from notebox.models.note import Note  # noqa: E402
from notebox.schemas.note import NoteRecord  # noqa: E402


class TickingClock:
    """Returns `start`, then `start + step`, then `start + 2*step`, ..."""

    def __init__(
        self,
        start: datetime = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc),
        step: timedelta = timedelta(minutes=1),
    ):
        self.current = start
        self.step = step

    def __call__(self) -> datetime:
        value = self.current
        self.current += self.step
        return value


@pytest_asyncio.fixture
async def connected_database():
    """
    The application's Database instance, connected for this test only.

    Rows are deleted and the engine disposed afterwards, so every test starts
    from an empty collection on its own event loop.
    """
    assert await database.connect()
    yield database
    async with database.session() as session:
        await session.execute(delete(Note))
        await session.commit()
    await database.dispose()


@pytest_asyncio.fixture
async def db_session(connected_database):
    async with connected_database.session() as session:
        yield session
        await session.commit()


@pytest.fixture
def mock_db_session():
    """A MagicMock that simulates AsyncSession behavior."""
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.delete = AsyncMock()
    session.add = MagicMock()
    return session


@pytest_asyncio.fixture
async def test_client(connected_database):
    """HTTPX AsyncClient routed straight into the app (lifespan not run)."""
    from notebox.main import app
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def clock():
    return TickingClock()


@pytest.fixture
def sample_notes():
    now = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)
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
