"""Translation of raised errors into HTTP responses.

Every error that leaves a route is answered with the same body::

    {"detail": "<message, verbatim>", "code": "<ErrorCode value>"}

Request body validation keeps FastAPI's own 422 response.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from squareit.domain.shared.exceptions import (
    BusinessRuleViolation,
    ConflictError,
    DomainException,
    EntityNotFoundError,
    ErrorCode,
    InfrastructureError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_BAD_REQUEST_CODES = (
    ErrorCode.VALIDATION_ERROR,
    ErrorCode.TOKEN_NULL_OR_EMPTY,
    ErrorCode.TOKEN_LENGTH_MISMATCH,
    ErrorCode.TOKEN_MISMATCH,
    ErrorCode.WEAK_PASSWORD,
    ErrorCode.USER_NOT_FOUND,
    ErrorCode.USER_NOT_ACTIVATED,
    ErrorCode.USER_ALREADY_ACTIVATED,
    ErrorCode.EMAIL_ALREADY_EXISTS,
    ErrorCode.USER_ALREADY_EXISTS,
)

ERROR_CODE_TO_STATUS: dict[ErrorCode, int] = {
    **dict.fromkeys(_BAD_REQUEST_CODES, status.HTTP_400_BAD_REQUEST),
    ErrorCode.USER_DELETED: status.HTTP_404_NOT_FOUND,
    ErrorCode.NUMBER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.ENTITY_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    # stale session and wrong password
    ErrorCode.TOKEN_EXPIRED: status.HTTP_406_NOT_ACCEPTABLE,
    ErrorCode.PASSWORD_MISMATCH: status.HTTP_406_NOT_ACCEPTABLE,
    ErrorCode.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorCode.BUSINESS_RULE_VIOLATION: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorCode.INFRASTRUCTURE_ERROR: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorCode.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

# Used for codes missing from the table above, most specific first.
_STATUS_BY_BASE_CLASS: tuple[tuple[type[DomainException], int], ...] = (
    (EntityNotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (BusinessRuleViolation, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (InfrastructureError, status.HTTP_503_SERVICE_UNAVAILABLE),
)


def status_for(exc: DomainException) -> int:
    """HTTP status for a domain error, by code and then by class."""
    mapped = ERROR_CODE_TO_STATUS.get(exc.code)
    if mapped is not None:
        return mapped

    for base, status_code in _STATUS_BY_BASE_CLASS:
        if isinstance(exc, base):
            return status_code
    return status.HTTP_400_BAD_REQUEST


def _error(status_code: int, detail: str, code: ErrorCode) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"detail": detail, "code": code.value},
    )


async def _on_domain_error(request: Request, exc: DomainException) -> JSONResponse:
    status_code = status_for(exc)
    # details stay in the log, the client only gets the message
    logger.warning(
        "%s %s -> %d %s: %s %s",
        request.method,
        request.url.path,
        status_code,
        exc.code.value,
        exc.message,
        exc.details or "",
    )
    return _error(status_code, exc.message, exc.code)


async def _on_storage_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error(
        "%s %s -> storage failure: %s",
        request.method,
        request.url.path,
        exc,
    )
    return _error(
        status.HTTP_503_SERVICE_UNAVAILABLE,
        "A storage error occurred",
        ErrorCode.INFRASTRUCTURE_ERROR,
    )


async def _on_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "%s %s -> unhandled %s",
        request.method,
        request.url.path,
        type(exc).__name__,
    )
    return _error(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "An internal error occurred",
        ErrorCode.INTERNAL_ERROR,
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Install the domain, storage and fallback handlers on ``app``."""
    app.add_exception_handler(DomainException, _on_domain_error)
    app.add_exception_handler(SQLAlchemyError, _on_storage_error)
    app.add_exception_handler(Exception, _on_unexpected_error)
