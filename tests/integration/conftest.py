"""Shared fixtures for integration tests.

Every test gets its own SQLite file under ``tmp_path``. ``NullPool`` hands
out a fresh aiosqlite connection per checkout, so the same engine can be
driven from the test loop and from TestClient's loop.
"""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool


@pytest.fixture
def database_url(tmp_path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'storefront-test.db'}"


@pytest.fixture
def async_engine(database_url):
    """Async engine on a per-test SQLite database (tables not yet created)."""
    return create_async_engine(database_url, poolclass=NullPool)


@pytest.fixture
def session_maker(async_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
