"""Shared fixtures for catalog API tests.

Every test gets its own SQLite database file with foreign keys enabled,
so the ON DELETE rules of the schema are exercised for real.
"""

import asyncio
import os
from collections.abc import AsyncGenerator, Generator
from pathlib import Path

# The application engine is never used by the tests, but it is created
# on import and must not point at PostgreSQL.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("LOG_JSON", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import NullPool

from catalog_api.infrastructure.database import (
    build_engine,
    build_session_factory,
    create_tables,
    get_session,
)
from catalog_api.main import app


@pytest.fixture
def test_engine(tmp_path: Path) -> AsyncEngine:
    """Create an engine on a fresh SQLite file."""
    return build_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}",
        poolclass=NullPool,
    )


@pytest.fixture
def session_factory(test_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create a session factory for the test database."""
    return build_session_factory(test_engine)


@pytest.fixture
def client(
    test_engine: AsyncEngine,
    session_factory: async_sessionmaker[AsyncSession],
) -> Generator[TestClient, None, None]:
    """Create test client backed by the test database."""
    asyncio.run(create_tables(test_engine))

    async def override_get_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = override_get_session
    yield TestClient(app)
    app.dependency_overrides.clear()
