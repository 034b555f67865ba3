"""Value objects for the account domain."""

from squareit_identity.domain.account.value_objects.account_role import AccountRole
from squareit_identity.domain.account.value_objects.session_policy import (
    SessionPolicy,
)
from squareit_identity.domain.account.value_objects.session_token import (
    TOKEN_LENGTH,
    ConfirmationDeadline,
    RotationMode,
    SessionToken,
    SlidingAnchor,
    generate_token_value,
    mask_token,
    validate_token_format,
)

__all__ = [
    "TOKEN_LENGTH",
    "AccountRole",
    "ConfirmationDeadline",
    "RotationMode",
    "SessionPolicy",
    "SessionToken",
    "SlidingAnchor",
    "generate_token_value",
    "mask_token",
    "validate_token_format",
]
