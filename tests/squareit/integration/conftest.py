"""
Pytest configuration for squareit integration tests.

Integration tests run against a fresh SQLite database file per test.
"""

from tests.shared.fixtures.database import async_engine, db_session, session_maker

__all__ = [
    "async_engine",
    "db_session",
    "session_maker",
]
