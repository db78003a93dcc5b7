"""Shared fixtures: a fresh SQLite database per test."""

import os

# Set before the app is imported so the module-level engine never
# needs a PostgreSQL driver
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./storefront-test.db")
os.environ.setdefault("DEBUG", "false")

from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from storefront.infrastructure.database import Base
from storefront.infrastructure.file_storage import FileStorageClient

# Importing Store registers every table
from storefront.infrastructure.models import Store


@pytest.fixture
def session_factory(tmp_path) -> async_sessionmaker[AsyncSession]:
    """Create the schema in a temporary SQLite file and return a session factory."""
    path = tmp_path / "storefront.db"

    sync_engine = create_engine(f"sqlite:///{path}")
    Base.metadata.create_all(sync_engine)
    sync_engine.dispose()

    engine = create_async_engine(f"sqlite+aiosqlite:///{path}", poolclass=NullPool)
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Open a session on the test database."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def file_storage() -> MagicMock:
    """File storage client that records deletions."""
    storage = MagicMock(spec=FileStorageClient)
    storage.delete_files = AsyncMock(return_value=None)
    return storage


@pytest_asyncio.fixture
async def store(db_session) -> Store:
    """A store owned by user-1."""
    store = Store(name="Test Store", user_id="user-1")
    db_session.add(store)
    await db_session.flush()
    return store
