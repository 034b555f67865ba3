"""SquareIt settings.

Values come from OS environment variables first, then from one .env file,
then from the defaults below. The .env file is the first existing one of:

- the path in ``SQUAREIT_ENV_FILE`` (relative paths start at the project root)
- ``config/.env.dev`` for local runs
- ``config/.env`` for container deployments
"""

from __future__ import annotations

import os
from datetime import timedelta
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import Field, SecretStr, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE_VARIABLE = "SQUAREIT_ENV_FILE"


def _project_root() -> Path:
    """Closest ancestor holding a ``config`` directory or a git checkout."""
    here = Path(__file__).resolve()
    for candidate in here.parents:
        if (candidate / "config").is_dir() or (candidate / ".git").exists():
            return candidate
    return here.parents[2]


def get_config_dir() -> Path:
    return _project_root() / "config"


def _env_file() -> Path | None:
    explicit = os.environ.get(ENV_FILE_VARIABLE)
    candidates: list[Path] = []
    if explicit:
        path = Path(explicit)
        candidates.append(path if path.is_absolute() else _project_root() / path)

    config_dir = get_config_dir()
    candidates += [config_dir / ".env.dev", config_dir / ".env"]

    return next((path for path in candidates if path.exists()), None)


class Settings(BaseSettings):
    """Runtime configuration of the API, the CLI and the mailer."""

    model_config = SettingsConfigDict(
        env_file=_env_file(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "SquareIt"
    debug: bool = False
    log_level: str = "INFO"

    # Storage. ``database_url_override`` wins over the Postgres fields,
    # e.g. sqlite+aiosqlite:///./data/squareit.db
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "postgres"
    postgres_db: str = "squareit"
    postgres_password: SecretStr | None = None
    database_url_override: str | None = None

    # HTTP server
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_debug: bool = False
    api_cors_origins: str = ""

    # Token windows in hours
    confirmation_window_hours: int = Field(default=24, ge=1)
    session_window_hours: int = Field(default=2, ge=1)

    record_page_size: int = Field(default=10, ge=1, le=500)

    # Outgoing mail
    smtp_enabled: bool = False
    smtp_host: str = ""
    smtp_port: int = 587
    smtp_user: str = ""
    smtp_password: SecretStr | None = None
    smtp_from_email: str = "no-reply@squareit.com"
    smtp_from_name: str = "SquareIt"
    smtp_use_tls: bool = True
    smtp_starttls: bool = True
    public_base_url: str = "http://localhost:8000"

    @field_validator("api_cors_origins", mode="before")
    @classmethod
    def _join_cors_origins(cls, value: Any) -> str:
        if not value:
            return ""
        if isinstance(value, (list, tuple)):
            return ",".join(value)
        return str(value)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def database_url(self) -> str:
        if self.database_url_override:
            return self.database_url_override

        secret = self.postgres_password
        password = secret.get_secret_value() if secret else ""
        credentials = f"{self.postgres_user}:{password}"
        location = f"{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        return f"postgresql+asyncpg://{credentials}@{location}"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def cors_origins(self) -> list[str]:
        origins = (part.strip() for part in self.api_cors_origins.split(","))
        return [origin for origin in origins if origin]

    @property
    def confirmation_window(self) -> timedelta:
        return timedelta(hours=self.confirmation_window_hours)

    @property
    def session_window(self) -> timedelta:
        return timedelta(hours=self.session_window_hours)


@lru_cache()
def get_settings() -> Settings:
    """Settings singleton; call ``clear_settings_cache`` to reload."""
    return Settings()


def clear_settings_cache() -> None:
    get_settings.cache_clear()
