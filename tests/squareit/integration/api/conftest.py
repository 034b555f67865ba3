"""Pytest fixtures for API integration tests.

The database is a SQLite file per test. Tables are created synchronously
in a fresh event loop, then FastAPI opens its own sessions inside the
TestClient's loop. The clock and the notification gateway are replaced
so tests can move time and read the mailed tokens.
"""

import asyncio

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import async_sessionmaker

from squareit.infrastructure.persistence.sqlalchemy.database import create_schema
from squareit.infrastructure.persistence.sqlalchemy.models import AccountModel
from squareit.presentation.api.app import API_V1_PREFIX, create_app
from squareit.presentation.api.config import get_api_settings
from squareit.presentation.api.dependencies import (
    get_clock,
    get_db_session,
    get_email_service,
    get_password_service,
)
from squareit_config.settings import Settings
from squareit_identity import PasswordHashingService
from tests.shared.fixtures.api import registration_payload
from tests.shared.fixtures.database import sqlite_engine, sqlite_url
from tests.shared.fixtures.factories import FakeClock, RecordingGateway


def _run(coro):
    """Run a coroutine in a fresh event loop to avoid conflicts."""
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


@pytest.fixture
def api_v1_prefix() -> str:
    return API_V1_PREFIX


@pytest.fixture
def api_settings(tmp_path) -> Settings:
    """Test API settings with debug enabled and SMTP off."""
    return Settings(
        database_url_override=sqlite_url(tmp_path),
        api_debug=True,
        api_cors_origins="http://localhost:3000",
        smtp_enabled=False,
        record_page_size=10,
    )


@pytest.fixture
def api_engine(api_settings):
    engine = sqlite_engine(api_settings.database_url)
    _run(create_schema(engine))
    yield engine
    _run(engine.dispose())


@pytest.fixture
def api_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def mailbox() -> RecordingGateway:
    return RecordingGateway()


@pytest.fixture
def test_client(api_settings, api_engine, api_clock, mailbox):
    """Create a test client with every outside dependency replaced."""
    app = create_app(settings=api_settings)

    test_session_maker = async_sessionmaker(api_engine, expire_on_commit=False)

    async def override_get_db_session():
        async with test_session_maker() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_get_db_session
    app.dependency_overrides[get_api_settings] = lambda: api_settings
    app.dependency_overrides[get_clock] = lambda: api_clock
    app.dependency_overrides[get_email_service] = lambda: mailbox
    app.dependency_overrides[get_password_service] = lambda: (
        PasswordHashingService(rounds=4)
    )

    return TestClient(app)


@pytest.fixture
def account_rows(api_engine):
    """Callable returning the number of stored account rows."""

    def _count() -> int:
        async def _query():
            async with api_engine.connect() as conn:
                result = await conn.execute(
                    select(func.count()).select_from(AccountModel),
                )
                return result.scalar_one()

        return _run(_query())

    return _count


@pytest.fixture
def register(test_client, api_v1_prefix):
    """Callable that registers an account and returns the response JSON."""

    def _register(**kwargs) -> dict:
        response = test_client.post(
            f"{api_v1_prefix}/users",
            json=registration_payload(**kwargs),
        )
        assert response.status_code == 201, (
            f"Registration failed: {response.status_code} - {response.text}"
        )
        return response.json()

    return _register


@pytest.fixture
def active_token(test_client, api_v1_prefix, register):
    """Callable that registers and confirms an account, returning its token."""

    def _active_token(**kwargs) -> str:
        created = register(**kwargs)
        response = test_client.get(
            f"{api_v1_prefix}/registration/confirm/{created['token']}",
        )
        assert response.status_code == 200, response.text
        assert response.json()["status"] == "confirmed"
        return response.json()["token"]

    return _active_token
