"""Fixtures for catalog service and repository tests."""

from collections.abc import AsyncGenerator

import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from catalog_api.catalog.service import CatalogService
from catalog_api.infrastructure.database import create_tables


@pytest_asyncio.fixture
async def session(
    test_engine: AsyncEngine,
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Create a session on a freshly created schema."""
    await create_tables(test_engine)
    async with session_factory() as session:
        yield session
    await test_engine.dispose()


@pytest_asyncio.fixture
async def service(session: AsyncSession) -> CatalogService:
    """Create catalog service bound to the test session."""
    return CatalogService(session)
