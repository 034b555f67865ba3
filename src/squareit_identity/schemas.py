"""Data carriers passed between the identity services and their callers."""

from dataclasses import dataclass
from enum import Enum

from squareit_identity.domain.account import Account, AccountRole


@dataclass(frozen=True)
class AccountProfile:
    """Caller-supplied account fields for create and update.

    ``password`` is plaintext. On update a ``None`` field keeps the stored
    value; on create it falls back to the empty name, the ``USER`` role or
    a missing password.
    """

    username: str
    email: str
    first_name: str | None = ""
    last_name: str | None = ""
    password: str | None = None
    role: AccountRole | None = AccountRole.USER


class ConfirmationStatus(str, Enum):
    CONFIRMED = "confirmed"
    PENDING = "pending"


@dataclass(frozen=True)
class ConfirmationResult:
    status: ConfirmationStatus
    token: str
    message: str

    @property
    def confirmed(self) -> bool:
        return self.status is ConfirmationStatus.CONFIRMED


@dataclass(frozen=True)
class LoginResult:
    account: Account
    token: str
    rotated: bool
