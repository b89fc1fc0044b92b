"""
NoteBox - Database Bootstrap & Session Management
==================================================

What:  Connects to the notes store at startup and hands out async sessions.
Why:   Centralizes all connection logic in one place.
How:   `Database.connect()` builds an async SQLAlchemy engine, ensures the
       `notes` table exists and publishes a session factory. Request handlers
       obtain sessions through the `get_db_session` FastAPI dependency.
When:  connect() runs once inside the application lifespan; sessions are
       created per request.

Failure semantics:
    A failed connect() is logged and swallowed. The process keeps running and
    keeps answering HTTP requests, but anything that needs the store raises
    DatabaseUnavailableError (HTTP 503). There is no retry loop; restarting
    the process with a working DATABASE_URL is the recovery path.

Connection Pooling:
    pool_size / max_overflow / pre_ping come from settings and are only
    passed for server databases. SQLite engines use SQLAlchemy's own pool
    selection, which rejects those arguments.

SQLite functions:
    Every SQLite connection gets a lower() backed by Python's str.lower, so
    case-insensitive search folds "É" the same way the client does.
"""

import logging
from typing import Any, AsyncGenerator, Dict, Optional

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from notebox.config import settings
from notebox.exceptions import DatabaseUnavailableError

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models (shares one metadata object)."""
    pass


def _engine_options(url: str) -> Dict[str, Any]:
    options: Dict[str, Any] = {"echo": settings.log_level == "DEBUG"}
    if make_url(url).get_backend_name() != "sqlite":
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return options


def _unicode_lower(value: Optional[str]) -> Optional[str]:
    return value.lower() if isinstance(value, str) else value


def _register_sqlite_functions(dbapi_connection: Any, connection_record: Any) -> None:
    # SQLite's built-in lower() only folds ASCII letters
    dbapi_connection.create_function("lower", 1, _unicode_lower)


class Database:
    """
    Owns the engine and session factory for one connection string.

    Attributes:
        url:         Connection string this instance connects to
        engine:      AsyncEngine, or None before connect() / after a failure
        is_connected: True once connect() has succeeded
    """

    def __init__(self, url: str):
        self.url = url
        self.engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def is_connected(self) -> bool:
        return self._session_factory is not None

    async def connect(self) -> bool:
        """
        Establish the connection to the configured store.

        Returns True on success. On failure the error is logged, the engine
        is discarded and False is returned; nothing is raised.
        """
        # Import here so the Note table is registered on Base.metadata
        from notebox.models.note import Note  # noqa: F401

        engine: Optional[AsyncEngine] = None
        try:
            engine = create_async_engine(self.url, **_engine_options(self.url))
            if engine.dialect.name == "sqlite":
                event.listen(engine.sync_engine, "connect", _register_sqlite_functions)
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except Exception as exc:
            logger.error(
                "Could not connect to database (%s): %s",
                type(exc).__name__,
                exc,
            )
            if engine is not None:
                await engine.dispose()
            self.engine = None
            self._session_factory = None
            return False

        self.engine = engine
        # expire_on_commit=False: attributes stay readable after commit
        self._session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        logger.info("Connected to database")
        return True

    def session(self) -> AsyncSession:
        """Open a new session; raises DatabaseUnavailableError if not connected."""
        if self._session_factory is None:
            raise DatabaseUnavailableError()
        return self._session_factory()

    async def dispose(self) -> None:
        """Close all pooled connections. Safe to call when never connected."""
        if self.engine is not None:
            await self.engine.dispose()
        self.engine = None
        self._session_factory = None


database = Database(settings.database_url)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    Commits when the handler returns normally, rolls back on any error and
    always closes the session.

    Raises:
        DatabaseUnavailableError: the startup connection never succeeded
    """
    async with database.session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
