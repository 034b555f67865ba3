"""Request-scoped wiring for the SquareIt API.

One request is one unit of work: every service below shares the request's
``AsyncSession``, and the route decides whether to commit it.
"""

import logging
from functools import lru_cache
from typing import Annotated, AsyncGenerator

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from squareit.application.services import NumberService
from squareit.domain.shared.time import Clock, utc_now
from squareit.infrastructure.persistence.sqlalchemy.database import (
    build_engine,
    create_schema,
)
from squareit.infrastructure.persistence.sqlalchemy.repositories import (
    NumberRepositorySQLAlchemy,
)
from squareit.presentation.api.config import get_api_settings
from squareit_config.settings import Settings, get_settings
from squareit_identity import (
    IdentityService,
    NotificationGateway,
    NotificationService,
    PasswordHashingService,
    SessionGuard,
    SessionPolicy,
)
from squareit_identity.infrastructure.email import EmailService
from squareit_identity.infrastructure.persistence.sqlalchemy import (
    AccountRepositorySQLAlchemy,
)

logger = logging.getLogger(__name__)

# auto_error=False: a missing header reaches the guard as a null token
security = HTTPBearer(auto_error=False)


# -----------------------------------------------------------------------------
# Engine and sessions
# -----------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_engine() -> AsyncEngine:
    """Process-wide engine for the configured database URL."""
    engine = build_engine(get_settings().database_url)
    logger.info("Database engine for %s", engine.url.render_as_string(hide_password=True))
    return engine


@lru_cache(maxsize=1)
def get_session_maker() -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(get_engine(), expire_on_commit=False)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield the request's session. Uncommitted work is rolled back on close."""
    async with get_session_maker()() as session:
        yield session


DBSession = Annotated[AsyncSession, Depends(get_db_session)]


async def create_tables() -> None:
    await create_schema(get_engine())


# -----------------------------------------------------------------------------
# Building Blocks
# -----------------------------------------------------------------------------


SettingsDep = Annotated[Settings, Depends(get_api_settings)]


def get_clock() -> Clock:
    """Time source for token windows. Overridden in tests to move time."""
    return utc_now


ClockDep = Annotated[Clock, Depends(get_clock)]


def get_session_policy(settings: SettingsDep) -> SessionPolicy:
    return SessionPolicy(
        confirmation_window=settings.confirmation_window,
        session_window=settings.session_window,
    )


PolicyDep = Annotated[SessionPolicy, Depends(get_session_policy)]


def get_password_service() -> PasswordHashingService:
    return PasswordHashingService()


def get_email_service(settings: SettingsDep) -> NotificationGateway:
    """Get the SMTP notification gateway."""
    return EmailService(settings)


def get_notification_service(
    gateway: NotificationGateway = Depends(get_email_service),
) -> NotificationService:
    return NotificationService(gateway)


NotificationServiceDep = Annotated[
    NotificationService,
    Depends(get_notification_service),
]


# -----------------------------------------------------------------------------
# Application Services
# -----------------------------------------------------------------------------


def get_session_guard(
    session: DBSession,
    notifications: NotificationServiceDep,
    policy: PolicyDep,
    clock: ClockDep,
) -> SessionGuard:
    """
    Get the session guard bound to the request's unit of work.

    FastAPI caches dependencies per request, so every service of one
    request shares this guard and its session.
    """
    return SessionGuard(
        account_repository=AccountRepositorySQLAlchemy(session),
        notification_service=notifications,
        policy=policy,
        clock=clock,
    )


Guard = Annotated[SessionGuard, Depends(get_session_guard)]


def get_identity_service(
    session: DBSession,
    notifications: NotificationServiceDep,
    policy: PolicyDep,
    clock: ClockDep,
    password_service: PasswordHashingService = Depends(get_password_service),
) -> IdentityService:
    return IdentityService(
        account_repository=AccountRepositorySQLAlchemy(session),
        password_service=password_service,
        notification_service=notifications,
        policy=policy,
        clock=clock,
    )


Identity = Annotated[IdentityService, Depends(get_identity_service)]


def get_number_service(
    session: DBSession,
    guard: Guard,
    settings: SettingsDep,
    clock: ClockDep,
) -> NumberService:
    return NumberService(
        session_guard=guard,
        number_repository=NumberRepositorySQLAlchemy(session),
        page_size=settings.record_page_size,
        clock=clock,
    )


Numbers = Annotated[NumberService, Depends(get_number_service)]


# -----------------------------------------------------------------------------
# Session Token
# -----------------------------------------------------------------------------


def get_bearer_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> str | None:
    """
    Extract the session token from the Authorization header.

    Returns None when the header is missing so the session guard reports
    it as an empty token instead of FastAPI answering 403.
    """
    if credentials is None:
        return None
    return credentials.credentials


BearerToken = Annotated[str | None, Depends(get_bearer_token)]
