"""
NoteBox - Database Bootstrap Tests
===================================

What:  Tests for Database.connect() success and failure semantics.

What we test:
    ✅ Successful connect logs "Connected to database" and opens sessions
    ✅ Unreachable store, bad URL and unknown driver are logged, not raised
    ✅ A failed connect leaves the instance unusable (DatabaseUnavailableError)
    ✅ dispose() is safe whether or not connect() ever succeeded
"""

import logging

import pytest
from sqlalchemy import text

from notebox.database import Database
from notebox.exceptions import DatabaseUnavailableError


class TestConnectSuccess:

    @pytest.mark.asyncio
    async def test_connect_logs_and_publishes_sessions(self, tmp_path, caplog):
        caplog.set_level(logging.INFO, logger="notebox.database")
        db = Database(f"sqlite+aiosqlite:///{tmp_path}/notes.db")

        assert await db.connect() is True
        assert db.is_connected
        assert "Connected to database" in caplog.text

        async with db.session() as session:
            result = await session.execute(text("SELECT COUNT(*) FROM notes"))
            assert result.scalar() == 0

        await db.dispose()
        assert not db.is_connected


class TestConnectFailure:

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "url",
        [
            "sqlite+aiosqlite:////nonexistent-notebox-dir/deeper/notes.db",
            "this is not a database url",
            "postgresql+nosuchdriver://user:pw@localhost/notes",
        ],
    )
    async def test_failure_is_logged_not_raised(self, url, caplog):
        caplog.set_level(logging.ERROR, logger="notebox.database")
        db = Database(url)

        assert await db.connect() is False

        assert not db.is_connected
        assert db.engine is None
        assert "Could not connect to database" in caplog.text

    @pytest.mark.asyncio
    async def test_session_after_failure_raises_unavailable(self):
        db = Database("this is not a database url")
        await db.connect()

        with pytest.raises(DatabaseUnavailableError):
            db.session()

    @pytest.mark.asyncio
    async def test_dispose_without_connect(self):
        db = Database("sqlite+aiosqlite:///:memory:")
        await db.dispose()
        assert not db.is_connected
