"""Root pytest configuration.

Layout::

    tests/
    ├── squareit/              # numeric records, HTTP API, request schemas
    ├── squareit_identity/     # accounts, session tokens, notifications
    └── shared/fixtures/       # factories, database and request helpers

Both packages split into ``unit/`` (no I/O) and ``integration/`` (SQLite).
Integration tests need no external service and run by default; pass
``--skip-integration`` or set ``SKIP_INTEGRATION=1`` to leave them out.
"""

import os
from pathlib import Path

import pytest
from dotenv import load_dotenv

from squareit_config import clear_settings_cache

CONFIG_DIR = Path(__file__).resolve().parents[1] / "config"

MARKERS = {
    "integration": "Tests that run against a SQLite database",
    "api": "Tests that drive the HTTP API through TestClient",
}

# Same precedence as the application: the local file wins over the Docker one
for env_name in (".env.dev", ".env"):
    if (CONFIG_DIR / env_name).exists():
        load_dotenv(CONFIG_DIR / env_name)
        break


def pytest_addoption(parser):
    parser.addoption(
        "--skip-integration",
        action="store_true",
        default=False,
        help="Skip tests marked with @pytest.mark.integration",
    )


def pytest_configure(config):
    for name, description in MARKERS.items():
        config.addinivalue_line("markers", f"{name}: {description}")


def _integration_disabled(config) -> bool:
    if config.getoption("--skip-integration"):
        return True
    return os.environ.get("SKIP_INTEGRATION", "").lower() in {"1", "true", "yes"}


def pytest_collection_modifyitems(config, items):
    if not _integration_disabled(config):
        return

    marker = pytest.mark.skip(reason="integration tests disabled")
    for item in items:
        if item.get_closest_marker("integration") is not None:
            item.add_marker(marker)


@pytest.fixture(scope="session", autouse=True)
def configure_app_settings():
    """Start and finish the run with freshly loaded settings."""
    clear_settings_cache()
    yield
    clear_settings_cache()
