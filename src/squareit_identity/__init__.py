"""SquareIt Identity - accounts, session tokens and email confirmation.

This package owns everything about who a caller is:
- Account lifecycle (create, confirm, update, delete)
- The rotating session token and its two clocks
- Login and password hashing
- Confirmation notifications

The core squareit package (numeric records, HTTP API) only consumes
the SessionGuard to resolve and rotate tokens.
"""

from squareit_identity.application.ports import NotificationGateway, NotificationKind
from squareit_identity.application.services import (
    IdentityService,
    NotificationService,
    SessionGuard,
)
from squareit_identity.domain.account import (
    TOKEN_LENGTH,
    Account,
    AccountAlreadyActivatedError,
    AccountDeletedError,
    AccountExistsError,
    AccountNotActivatedError,
    AccountNotFoundError,
    AccountRepository,
    AccountRole,
    EmailAlreadyExistsError,
    RotationMode,
    SessionPolicy,
    SessionToken,
    UsernameAlreadyExistsError,
)
from squareit_identity.exceptions import (
    AuthError,
    CredentialMismatchError,
    SessionExpiredError,
    TokenMalformedError,
    TokenMismatchError,
    WeakPasswordError,
)
from squareit_identity.schemas import (
    AccountProfile,
    ConfirmationResult,
    ConfirmationStatus,
    LoginResult,
)
from squareit_identity.services import PasswordHashingService

__all__ = [
    # Domain - Account
    "TOKEN_LENGTH",
    "Account",
    "AccountAlreadyActivatedError",
    "AccountDeletedError",
    "AccountExistsError",
    "AccountNotActivatedError",
    "AccountNotFoundError",
    "AccountRepository",
    "AccountRole",
    "EmailAlreadyExistsError",
    "RotationMode",
    "SessionPolicy",
    "SessionToken",
    "UsernameAlreadyExistsError",
    # Exceptions
    "AuthError",
    "CredentialMismatchError",
    "SessionExpiredError",
    "TokenMalformedError",
    "TokenMismatchError",
    "WeakPasswordError",
    # Application
    "IdentityService",
    "NotificationGateway",
    "NotificationKind",
    "NotificationService",
    "SessionGuard",
    # Schemas
    "AccountProfile",
    "ConfirmationResult",
    "ConfirmationStatus",
    "LoginResult",
    # Services
    "PasswordHashingService",
]
