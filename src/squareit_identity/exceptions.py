"""Identity and session exceptions.

These exceptions are raised by the squareit_identity package while a
presented token or password is being checked. Each carries a stable
ErrorCode so the API layer can map it without knowing the concrete type.
"""

from datetime import datetime

from squareit.domain.shared.exceptions import DomainException, ErrorCode


class AuthError(DomainException):
    """Base exception for all authentication errors."""

    def __init__(
        self,
        message: str = "Authentication error",
        code: ErrorCode = ErrorCode.BUSINESS_RULE_VIOLATION,
    ):
        super().__init__(message, code)


class TokenMalformedError(AuthError):
    """Raised when a presented token is null, empty or of the wrong length."""

    def __init__(
        self,
        message: str = "Token is null or empty",
        code: ErrorCode = ErrorCode.TOKEN_NULL_OR_EMPTY,
    ):
        super().__init__(message, code)


class SessionExpiredError(AuthError):
    """Raised when the sliding session window has elapsed."""

    def __init__(self, email: str, expired_at: datetime):
        self.email = email
        self.expired_at = expired_at
        super().__init__(
            f"Session for user with email: {email} expired at: "
            f"{expired_at.isoformat()}. User must login again",
            ErrorCode.TOKEN_EXPIRED,
        )


class TokenMismatchError(AuthError):
    """Raised when the presented token is not the account's current token."""

    def __init__(self, email: str):
        self.email = email
        super().__init__(
            f"Token does not match the current token of user with email: {email}",
            ErrorCode.TOKEN_MISMATCH,
        )


class CredentialMismatchError(AuthError):
    """Raised when the password does not match during login."""

    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(
            f"Password mismatch for user: {identifier}",
            ErrorCode.PASSWORD_MISMATCH,
        )


class WeakPasswordError(AuthError):
    """Raised when a password doesn't meet strength requirements."""

    def __init__(self, message: str = "Password does not meet requirements"):
        super().__init__(message, ErrorCode.WEAK_PASSWORD)
