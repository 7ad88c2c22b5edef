"""
Word REST API: Database Session Management
===========================================

What:  Async SQLAlchemy engine (connection pool), session factory, declarative
       Base, and the FastAPI dependency that hands a session to each request.
How:   DatabaseSessionManager is constructed once in the application lifespan,
       stored on `app.state.db`, and disposed on shutdown. Nothing here opens a
       connection at import time.
Who:   main.py (lifespan), routes (via get_db_session), schema.py, tests.

Connection Pooling Strategy (server databases):
    pool_size:      persistent connections (DB_POOL_SIZE)
    max_overflow:   temporary connections for bursts (DB_MAX_OVERFLOW)
    pool_timeout:   seconds to wait for a free connection (DB_POOL_TIMEOUT);
                    expiry raises sqlalchemy.exc.TimeoutError, which the
                    repositories translate into a 503
    pool_pre_ping:  validates connections before use
    pool_recycle:   recycles connections every hour

SQLite:
    The dialect chooses its own pool, so sizing arguments are not passed.
    Foreign keys are disabled by default in SQLite; every new DBAPI
    connection runs `PRAGMA foreign_keys=ON` so the posts → users foreign key
    and its ON DELETE CASCADE are enforced exactly as on PostgreSQL.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict

from fastapi import Request
from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from word_rest_api.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single MetaData object, which both the startup schema manager
    (schema.ensure_schema) and Alembic read.
    """
    pass


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class DatabaseSessionManager:
    """
    Owns the async engine and session factory for the lifetime of the app.

    Lifecycle:
        1. Constructed in the lifespan from Settings (no I/O yet)
        2. session() is used per request through get_db_session
        3. dispose() closes every pooled connection on shutdown
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        engine_kwargs: Dict[str, Any] = {
            "echo": settings.log_level == "DEBUG",
        }
        if not settings.is_sqlite:
            engine_kwargs.update(
                pool_size=settings.db_pool_size,
                max_overflow=settings.db_max_overflow,
                pool_timeout=settings.db_pool_timeout,
                pool_pre_ping=settings.db_pool_pre_ping,
                pool_recycle=3600,
            )

        self.engine: AsyncEngine = create_async_engine(settings.database_url, **engine_kwargs)

        if settings.is_sqlite:
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

        # expire_on_commit=False: entities stay readable after commit, so the
        # repositories can return them without another SELECT
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Provide a session that rolls back on any exception and always closes.

        Commits are issued by the repositories themselves, so a constraint
        violation is known (and translated) before the handler responds.
        """
        session = self._session_factory()
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """Runs SELECT 1; used by the readiness probe."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning("Database health check failed: %s", e)
            return False

    async def dispose(self) -> None:
        """Closes all connections in the pool. Called once on shutdown."""
        await self.engine.dispose()


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    The session manager is read from `request.app.state.db`, where the
    lifespan placed it; the session's connection returns to the pool when the
    request finishes, whether it succeeded or failed.

    Example usage in a route:
        @router.get("/users")
        async def list_users(db: AsyncSession = Depends(get_db_session)):
            return await user_repository.list(db)
    """
    manager: DatabaseSessionManager = request.app.state.db
    async with manager.session() as session:
        yield session
