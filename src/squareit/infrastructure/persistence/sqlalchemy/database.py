"""Engine construction and schema creation."""

import logging
from pathlib import Path

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from squareit.infrastructure.persistence.sqlalchemy.models import Base

logger = logging.getLogger(__name__)


def prepare_sqlite_path(url: str) -> None:
    """Create the parent directory of a file-backed sqlite database."""
    if not url.startswith("sqlite") or ":memory:" in url:
        return
    _, _, location = url.partition(":///")
    if location:
        Path(location).parent.mkdir(parents=True, exist_ok=True)


def build_engine(url: str) -> AsyncEngine:
    prepare_sqlite_path(url)
    return create_async_engine(url, echo=False, pool_pre_ping=True)


async def create_schema(engine: AsyncEngine) -> None:
    """Create missing tables. Existing tables and their rows are untouched."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Schema ready: %s", ", ".join(sorted(Base.metadata.tables)))
