"""Account domain exceptions.

Raised when an account cannot be found, is in the wrong lifecycle state
for an operation, or would collide with an existing account.
"""

from squareit.domain.shared.exceptions import (
    BusinessRuleViolation,
    ConflictError,
    EntityNotFoundError,
    ErrorCode,
)


class AccountNotFoundError(EntityNotFoundError):
    """No account matches the given lookup key."""

    def __init__(self, field: str, value: str) -> None:
        self.field = field
        self.value = value
        super().__init__(
            f"User not found with {field}: {value}",
            ErrorCode.USER_NOT_FOUND,
            {"field": field},
        )


class AccountDeletedError(BusinessRuleViolation):
    """Account is soft-deleted; no further transition is allowed."""

    def __init__(self, field: str, value: str) -> None:
        self.field = field
        self.value = value
        super().__init__(
            "User has been deleted so nothing can be performed on the object, "
            f"with {field}: {value}",
            ErrorCode.USER_DELETED,
            {"field": field},
        )


class AccountNotActivatedError(BusinessRuleViolation):
    """Account exists but has not confirmed its email yet."""

    def __init__(self, field: str, value: str) -> None:
        self.field = field
        self.value = value
        super().__init__(
            f"User not activated with {field}: {value}",
            ErrorCode.USER_NOT_ACTIVATED,
            {"field": field},
        )


class AccountAlreadyActivatedError(BusinessRuleViolation):
    """Account has already confirmed its email."""

    def __init__(self, field: str, value: str) -> None:
        self.field = field
        self.value = value
        super().__init__(
            f"User already activated with {field}: {value}",
            ErrorCode.USER_ALREADY_ACTIVATED,
            {"field": field},
        )


class AccountExistsError(ConflictError):
    """Email or username is already taken by another account."""

    def __init__(self, field: str, value: str, code: ErrorCode) -> None:
        self.field = field
        self.value = value
        super().__init__(
            f"User with {field} already exists: {value}",
            code,
            {"field": field},
        )


class EmailAlreadyExistsError(AccountExistsError):
    def __init__(self, email: str) -> None:
        super().__init__("email", email, ErrorCode.EMAIL_ALREADY_EXISTS)


class UsernameAlreadyExistsError(AccountExistsError):
    def __init__(self, username: str) -> None:
        super().__init__("username", username, ErrorCode.USER_ALREADY_EXISTS)
