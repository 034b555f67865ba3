"""Account aggregate: identity, lifecycle flags and the session token."""

from datetime import datetime
from typing import Union
from uuid import UUID, uuid4

from squareit.domain.shared.time import utc_now
from squareit_identity.domain.account.exceptions import AccountDeletedError
from squareit_identity.domain.account.value_objects import (
    AccountRole,
    RotationMode,
    SessionPolicy,
    SessionToken,
)


class Account:
    """
    Account aggregate root.

    Lifecycle: unconfirmed (enabled=False) -> active (enabled=True) ->
    deleted. Deleted is terminal; every mutator refuses to run on it.

    ``version`` is the stored row version this instance was loaded at, 0 for
    an account that was never saved. The repository refuses to save over a
    newer version.
    """

    def __init__(  # noqa: PLR0913
        self,
        username: str,
        email: str,
        password_hash: str,
        session_token: SessionToken,
        first_name: str = "",
        last_name: str = "",
        role: Union[str, AccountRole] = AccountRole.USER,
        enabled: bool = False,
        deleted: bool = False,
        id: UUID | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
        version: int = 0,
    ):
        self._id = id or uuid4()
        self._username = username
        self._email = email
        self._password_hash = password_hash
        self._session_token = session_token
        self._first_name = first_name
        self._last_name = last_name
        self._role = role if isinstance(role, AccountRole) else AccountRole(role)
        self._enabled = enabled
        self._deleted = deleted
        self._created_at = created_at or utc_now()
        self._updated_at = updated_at or self._created_at
        self.version = version

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def username(self) -> str:
        return self._username

    @property
    def email(self) -> str:
        return self._email

    @property
    def password_hash(self) -> str:
        return self._password_hash

    @property
    def first_name(self) -> str:
        return self._first_name

    @property
    def last_name(self) -> str:
        return self._last_name

    @property
    def role(self) -> AccountRole:
        return self._role

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def deleted(self) -> bool:
        return self._deleted

    @property
    def is_active(self) -> bool:
        return self._enabled and not self._deleted

    @property
    def session_token(self) -> SessionToken:
        return self._session_token

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    def update_profile(  # noqa: PLR0913
        self,
        *,
        username: str,
        email: str,
        first_name: str,
        last_name: str,
        role: AccountRole,
        now: datetime,
        password_hash: str | None = None,
    ) -> None:
        self._ensure_not_deleted()
        self._username = username
        self._email = email
        self._first_name = first_name
        self._last_name = last_name
        self._role = role
        if password_hash is not None:
            self._password_hash = password_hash
        self._updated_at = now

    def activate(self, now: datetime) -> None:
        self._ensure_not_deleted()
        self._enabled = True
        self._updated_at = now

    def mark_deleted(self, now: datetime) -> None:
        self._ensure_not_deleted()
        self._deleted = True
        self._updated_at = now

    def rotate_token(
        self,
        mode: RotationMode,
        now: datetime,
        policy: SessionPolicy,
    ) -> SessionToken:
        """Replace the session token and return the new one."""
        self._ensure_not_deleted()
        self._session_token = self._session_token.rotate(mode, now, policy)
        return self._session_token

    def _ensure_not_deleted(self) -> None:
        if self._deleted:
            raise AccountDeletedError("email", self._email)

    @classmethod
    def create(  # noqa: PLR0913
        cls,
        username: str,
        email: str,
        password_hash: str,
        now: datetime,
        policy: SessionPolicy,
        first_name: str = "",
        last_name: str = "",
        role: AccountRole = AccountRole.USER,
    ) -> "Account":
        return cls(
            username=username,
            email=email,
            password_hash=password_hash,
            session_token=SessionToken.issue(now, policy),
            first_name=first_name,
            last_name=last_name,
            role=role,
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def reconstitute(  # noqa: PLR0913
        cls,
        id: UUID,
        username: str,
        email: str,
        password_hash: str,
        session_token: SessionToken,
        first_name: str,
        last_name: str,
        role: Union[str, AccountRole],
        enabled: bool,
        deleted: bool,
        created_at: datetime,
        updated_at: datetime,
        version: int = 0,
    ) -> "Account":
        return cls(
            id=id,
            username=username,
            email=email,
            password_hash=password_hash,
            session_token=session_token,
            first_name=first_name,
            last_name=last_name,
            role=role,
            enabled=enabled,
            deleted=deleted,
            created_at=created_at,
            updated_at=updated_at,
            version=version,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Account):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return (
            f"Account(id={self._id}, username={self._username}, "
            f"email={self._email}, enabled={self._enabled}, deleted={self._deleted})"
        )
