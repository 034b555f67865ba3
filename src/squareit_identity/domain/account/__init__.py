"""Account domain: aggregate, session token and repository contract."""

from squareit_identity.domain.account.aggregates import Account
from squareit_identity.domain.account.exceptions import (
    AccountAlreadyActivatedError,
    AccountDeletedError,
    AccountExistsError,
    AccountNotActivatedError,
    AccountNotFoundError,
    EmailAlreadyExistsError,
    UsernameAlreadyExistsError,
)
from squareit_identity.domain.account.repositories import AccountRepository
from squareit_identity.domain.account.value_objects import (
    TOKEN_LENGTH,
    AccountRole,
    ConfirmationDeadline,
    RotationMode,
    SessionPolicy,
    SessionToken,
    SlidingAnchor,
    mask_token,
    validate_token_format,
)

__all__ = [
    "TOKEN_LENGTH",
    "Account",
    "AccountAlreadyActivatedError",
    "AccountDeletedError",
    "AccountExistsError",
    "AccountNotActivatedError",
    "AccountNotFoundError",
    "AccountRepository",
    "AccountRole",
    "ConfirmationDeadline",
    "EmailAlreadyExistsError",
    "RotationMode",
    "SessionPolicy",
    "SessionToken",
    "SlidingAnchor",
    "UsernameAlreadyExistsError",
    "mask_token",
    "validate_token_format",
]
