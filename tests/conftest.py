"""Root test fixtures shared across all test types.

Store-backed tests run against an in-memory SQLite database (aiosqlite)
created from the model metadata, with foreign keys enforced so ON DELETE
CASCADE behaves as it does in PostgreSQL.
"""

import os

# Point settings at SQLite before any app imports
os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

# ruff: noqa: E402 - Imports must be after env var setup
from collections.abc import AsyncGenerator

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from src.rbac import models  # noqa: F401 - registers tables on the metadata
from src.rbac.core.config import get_settings
from src.rbac.core.db import build_engine, get_session
from tests.helpers import RecordingDispatcher

# Clear settings cache to ensure test environment variables are picked up
get_settings.cache_clear()


@pytest.fixture
def dispatcher() -> RecordingDispatcher:
    return RecordingDispatcher()


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine]:
    """Fresh in-memory database per test, schema created from the models."""
    test_engine = build_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield test_engine
    await test_engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Provide an async session for database operations.

    Services commit on their own; test setup that writes directly must
    call `await session.commit()` (or use the helpers, which flush).
    """
    async with get_session(engine) as session:
        yield session
