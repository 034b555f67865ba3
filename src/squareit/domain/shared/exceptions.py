"""Error codes and the base exception hierarchy.

Each concrete error names its ``ErrorCode``; the HTTP layer maps codes to
statuses in one place. The code values are what API clients match on.
"""

from enum import Enum
from typing import Any, ClassVar


class ErrorCode(str, Enum):
    # request and token shape
    VALIDATION_ERROR = "VALIDATION_ERROR"
    TOKEN_NULL_OR_EMPTY = "TOKEN_NULL_OR_EMPTY"
    TOKEN_LENGTH_MISMATCH = "TOKEN_LENGTH_MISMATCH"
    WEAK_PASSWORD = "WEAK_PASSWORD"

    # account lifecycle
    USER_NOT_FOUND = "USER_NOT_FOUND"
    USER_DELETED = "USER_DELETED"
    USER_NOT_ACTIVATED = "USER_NOT_ACTIVATED"
    USER_ALREADY_ACTIVATED = "USER_ALREADY_ACTIVATED"
    EMAIL_ALREADY_EXISTS = "EMAIL_ALREADY_EXISTS"
    USER_ALREADY_EXISTS = "USER_ALREADY_EXISTS"

    # session
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    TOKEN_MISMATCH = "TOKEN_MISMATCH"
    PASSWORD_MISMATCH = "PASSWORD_MISMATCH"

    NUMBER_NOT_FOUND = "NUMBER_NOT_FOUND"

    ENTITY_NOT_FOUND = "ENTITY_NOT_FOUND"
    CONFLICT = "CONFLICT"
    BUSINESS_RULE_VIOLATION = "BUSINESS_RULE_VIOLATION"
    INFRASTRUCTURE_ERROR = "INFRASTRUCTURE_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class DomainException(Exception):  # NOQA: N818
    """Base of every error the service raises on purpose.

    Parameters
    ----------
    message
        Shown to API clients as is
    code
        Overrides the class's ``default_code``
    details
        Extra context for the logs, never sent to clients
    """

    default_code: ClassVar[ErrorCode] = ErrorCode.INTERNAL_ERROR

    def __init__(
        self,
        message: str,
        code: ErrorCode | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.details = details or {}

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        name = type(self).__name__
        return f"{name}({self.message!r}, code={self.code.value!r})"


class ValidationError(DomainException):
    """Input that is structurally unusable."""

    default_code = ErrorCode.VALIDATION_ERROR


class BusinessRuleViolation(DomainException):
    """A request the current state of an entity does not allow."""

    default_code = ErrorCode.BUSINESS_RULE_VIOLATION


class EntityNotFoundError(DomainException):
    default_code = ErrorCode.ENTITY_NOT_FOUND


class ConflictError(DomainException):
    default_code = ErrorCode.CONFLICT


class InfrastructureError(DomainException):
    """The store or another backing service failed."""

    default_code = ErrorCode.INFRASTRUCTURE_ERROR

    def __init__(
        self,
        message: str = "A storage error occurred",
        code: ErrorCode | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)
