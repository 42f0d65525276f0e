"""
Notas Backend - Test Configuration (conftest.py)
=================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session: Mock database session (no real DB needed)
    ├── set_hour:        Pins the access policy clock to a given hour
    ├── open_hours:      Pins the clock inside the opening hours (17h)
    ├── db_session:      Real AsyncSession on an empty Notas table
    └── test_client:     HTTPX AsyncClient bound to the app, empty Notas table
"""

import os
import tempfile
from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

# Override settings for testing BEFORE any app imports
_test_dir = tempfile.mkdtemp(prefix="notas_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_test_dir}/test.sqlite"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from app.database import Base, async_session_factory, create_tables, engine  # noqa: E402
from app.services.access_policy import access_policy  # noqa: E402
from app.services.note_service import note_service  # noqa: E402


async def _reset_schema() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await create_tables()


async def count_notes() -> int:
    """Reads the current note count through a fresh session."""
    async with async_session_factory() as session:
        return await note_service.count(session)


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_count(mock_db_session):
            mock_db_session.execute.return_value.scalar.return_value = 3
            assert await note_service.count(mock_db_session) == 3
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def set_hour(monkeypatch):
    """Returns a function that freezes the policy clock at `hour`:30."""

    def _set(hour: int) -> None:
        monkeypatch.setattr(access_policy, "clock", lambda: datetime(2024, 1, 15, hour, 30))

    return _set


@pytest.fixture
def open_hours(set_hour):
    set_hour(17)


@pytest_asyncio.fixture
async def db_session():
    """Real session on a freshly created, empty Notas table."""
    await _reset_schema()
    async with async_session_factory() as session:
        yield session
    await engine.dispose()


@pytest_asyncio.fixture
async def test_client():
    """
    Provides an async HTTP test client for endpoint testing.

    Uses ASGITransport, which does not run the lifespan, so the schema is
    created here. Redirects are not followed.
    """
    from app.main import app

    await _reset_schema()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    await engine.dispose()
