"""Fixtures for repository integration tests."""

import pytest

from storefront.infrastructure.persistence.sqlalchemy.models import Base


@pytest.fixture
async def db_session(async_engine, session_maker):
    """Session on a freshly created schema; rolled back after the test."""
    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with session_maker() as session:
        yield session
        await session.rollback()

    await async_engine.dispose()
