"""
Root Pytest Fixtures.

Shared fixtures available to all test types.

Test Database Configuration:
    SQL store tests use an in-memory SQLite database through aiosqlite.
    A StaticPool keeps the single connection alive so every session in
    a test sees the same tables.
"""

from collections.abc import AsyncGenerator

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from noteku.models.base import Base
from noteku.repositories.note import NoteRepository
from noteku.repositories.storage import MemoryKeyValueStore


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Fresh in-memory SQLite engine with the key-value table created."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def db_session_factory(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test engine."""
    return async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


# =============================================================================
# Storage Fixtures
# =============================================================================


@pytest.fixture
def memory_store() -> MemoryKeyValueStore:
    """Empty dict-backed key-value store."""
    return MemoryKeyValueStore()


@pytest.fixture
def repo(memory_store: MemoryKeyValueStore) -> NoteRepository:
    """NoteRepository over an empty memory store."""
    return NoteRepository(memory_store)
