"""SQLite fixtures for persistence tests.

Every test gets its own database file. With ``NullPool`` each session
opens its own connection, so two sessions behave like two concurrent
requests.
"""

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from squareit.infrastructure.persistence.sqlalchemy.database import create_schema


def sqlite_url(tmp_path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'squareit-test.db'}"


def sqlite_engine(url: str):
    return create_async_engine(url, poolclass=NullPool)


@pytest_asyncio.fixture
async def async_engine(tmp_path):
    engine = sqlite_engine(sqlite_url(tmp_path))
    await create_schema(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(async_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(async_engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_maker):
    """Session for one test. Anything left uncommitted is rolled back."""
    async with session_maker() as session:
        yield session
        await session.rollback()
