"""
Noteful API - Test Configuration (conftest.py)
==============================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: AsyncMock session for service unit tests
    ├── engine: in-memory SQLite engine with the schema created
    ├── seed: coroutine that inserts folders/notes through the engine
    └── test_client: HTTPX AsyncClient bound to an app built on `engine`

Data builders live in fixtures.py.
"""

import os

# Settings are read at import time; point them at SQLite before any
# noteful module is imported.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["CREATE_TABLES_ON_STARTUP"] = "false"

from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from noteful.config import Settings
from noteful.database import build_engine, create_session_factory, init_models
from noteful.main import create_app
from noteful.models import Folder, Note

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


# ══════════════════════════════════════════════════════════════════════════
# Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def test_settings():
    return Settings(
        database_url=TEST_DATABASE_URL,
        log_level="WARNING",
        create_tables_on_startup=False,
    )


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get_folder(mock_db_session):
            mock_db_session.execute.return_value.scalar_one_or_none.return_value = folder
            result = await folder_service.get_folder(mock_db_session, 1)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.refresh = AsyncMock()
    session.delete = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest_asyncio.fixture
async def engine(test_settings):
    """Fresh in-memory database per test, schema created, FK checks on."""
    db_engine = build_engine(test_settings)
    await init_models(db_engine)
    yield db_engine
    await db_engine.dispose()


@pytest_asyncio.fixture
async def seed(engine):
    """
    Returns a coroutine that inserts rows and commits.

    Usage:
        await seed(folders=make_folders_array(), notes=make_notes_array())
    """
    session_factory = create_session_factory(engine)

    async def _seed(folders=(), notes=()):
        async with session_factory() as session:
            session.add_all([Folder(**folder) for folder in folders])
            await session.flush()
            session.add_all([Note(**note) for note in notes])
            await session.commit()

    return _seed


@pytest_asyncio.fixture
async def test_client(engine, test_settings):
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    app = create_app(test_settings, engine=engine)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
