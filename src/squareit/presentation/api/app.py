"""SquareIt HTTP application.

Routes live under ``/api/v1``; ``/health`` stays unversioned for probes.
There is no module-level app object, start the server through the factory::

    uvicorn squareit.presentation.api.app:create_app --factory
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from squareit.infrastructure.persistence.sqlalchemy.database import create_schema
from squareit.presentation.api.dependencies import get_engine
from squareit.presentation.api.exception_handlers import setup_exception_handlers
from squareit.presentation.api.routers import (
    numbers_router,
    registration_router,
    users_router,
)
from squareit.presentation.api.schemas import ErrorResponse, HealthResponse
from squareit_config.settings import Settings, get_settings

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"
API_V1_PREFIX = "/api/v1"

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
QUIET_LOGGERS = ("sqlalchemy.engine", "aiosqlite", "asyncpg")

OPENAPI_TAGS = [
    {
        "name": "Users",
        "description": """Account registration, profile and login.

**Session tokens:**
- Every account holds exactly one token at a time
- Send it as `Authorization: Bearer <token>`
- Each protected call answers with a new token; the old one stops working
- A token is only live for a sliding window after its last use
""",
    },
    {
        "name": "Registration",
        "description": """Email confirmation.

A confirmation link stays valid for the confirmation window. Following
a stale link sends a fresh one instead of confirming.
""",
    },
    {
        "name": "Numbers",
        "description": "Numeric records private to the calling account.",
    },
    {
        "name": "Health",
        "description": "Liveness probe.",
    },
]


def _configure_logging(settings: Settings) -> None:
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )
    for name in ("squareit", "squareit_identity"):
        logging.getLogger(name).setLevel(level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncGenerator[None, None]:
    """Create missing tables on startup, release connections on shutdown."""
    engine = get_engine()
    logger.info("SquareIt API %s starting", API_VERSION)
    try:
        await create_schema(engine)
    except ConnectionRefusedError:
        logger.critical("Database refused the connection, giving up")
        raise SystemExit(1) from None

    yield

    await engine.dispose()
    logger.info("SquareIt API stopped, connections released")


ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    code: {"model": ErrorResponse} for code in (400, 404, 406, 503)
}


def create_v1_router() -> APIRouter:
    router = APIRouter(responses=ERROR_RESPONSES)
    router.include_router(users_router, prefix="/users", tags=["Users"])
    router.include_router(
        registration_router,
        prefix="/registration",
        tags=["Registration"],
    )
    router.include_router(numbers_router, prefix="/numbers", tags=["Numbers"])
    return router


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application.

    Parameters
    ----------
    settings
        Settings to use instead of the cached environment settings.
        Tests pass their own.

    Returns
    -------
    The FastAPI application, routers and handlers installed.
    """
    settings = settings or get_settings()
    _configure_logging(settings)

    docs_enabled = settings.api_debug
    app = FastAPI(
        title=f"{settings.app_name} API",
        description=(
            "Accounts with **rotating session tokens** and private "
            "**numeric records**."
        ),
        version=API_VERSION,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    setup_exception_handlers(app)
    app.include_router(create_v1_router(), prefix=API_V1_PREFIX)

    @app.get("/health", tags=["Health"])
    async def health() -> HealthResponse:
        return HealthResponse(status="healthy", version=API_VERSION)

    return app
