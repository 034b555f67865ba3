"""Shared kernel: error codes, base exceptions and time helpers."""

from squareit.domain.shared.exceptions import (
    BusinessRuleViolation,
    ConflictError,
    DomainException,
    EntityNotFoundError,
    ErrorCode,
    InfrastructureError,
    ValidationError,
)
from squareit.domain.shared.time import ensure_tz_aware, utc_now

__all__ = [
    "BusinessRuleViolation",
    "ConflictError",
    "DomainException",
    "EntityNotFoundError",
    "ErrorCode",
    "InfrastructureError",
    "ValidationError",
    "ensure_tz_aware",
    "utc_now",
]
