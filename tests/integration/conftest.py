"""Fixtures for SQLite integration tests."""

import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool

from annos.infrastructure.persistence.database import create_session_factory
from annos.infrastructure.persistence.tables import metadata


@pytest_asyncio.fixture
async def engine():
    """Per-test in-memory database with all tables."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session(engine: AsyncEngine):
    factory = create_session_factory(engine)
    async with factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def session_factory(engine: AsyncEngine):
    return create_session_factory(engine)


