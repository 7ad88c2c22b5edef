"""
Word REST API: Test Configuration (conftest.py)
================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Unit tests use a mocked AsyncSession; integration and endpoint tests
       run against a throwaway SQLite file per test (aiosqlite), which
       enforces the same unique / foreign key / cascade rules as PostgreSQL.

Fixture Hierarchy:
    Function-scoped:
    ├── mock_db_session: AsyncMock standing in for AsyncSession
    ├── db_settings:     Settings pointing at tmp_path/test.db
    ├── db_manager:      DatabaseSessionManager with the schema created
    ├── db_session:      one AsyncSession from db_manager
    ├── app:             create_app(db_settings)
    └── test_client:     HTTPX AsyncClient with the app lifespan running
"""

import os
import tempfile
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Set before any word_rest_api import so the module-level settings never
# point at a real PostgreSQL server
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(
    tempfile.mkdtemp(prefix="word_api_test_"), "default.db"
)
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["SEED_VOCABULARY"] = "false"

from word_rest_api.config import Settings  # noqa: E402
from word_rest_api.database import DatabaseSessionManager  # noqa: E402
from word_rest_api.schema import ensure_schema  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# Unit-test Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get_user(mock_db_session):
            mock_db_session.execute.return_value.scalar_one_or_none.return_value = None
            with pytest.raises(NotFoundError):
                await user_repository.get_by_id(mock_db_session, uuid4())
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.scalar = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sample_user_payload():
    return {"name": "John Doe", "email": "john@example.com"}


# ══════════════════════════════════════════════════════════════════════════
# Database Fixtures (real SQLite file per test)
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def db_settings(tmp_path):
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        log_level="WARNING",
        seed_vocabulary=False,
    )


@pytest_asyncio.fixture
async def db_manager(db_settings):
    manager = DatabaseSessionManager(db_settings)
    await ensure_schema(manager.engine)
    yield manager
    await manager.dispose()


@pytest_asyncio.fixture
async def db_session(db_manager):
    async with db_manager.session() as session:
        yield session


@pytest.fixture
def app(db_settings):
    from word_rest_api.main import create_app
    return create_app(db_settings)


@pytest_asyncio.fixture
async def test_client(app):
    """
    Provides an async HTTP client talking to the app in-process.

    ASGITransport does not send lifespan events, so the lifespan is entered
    here; it creates the schema on the temporary database.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    async with app.router.lifespan_context(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
