"""Session token value objects.

A session token is the single bearer credential of an account. It carries
two independent clocks:

- ``ConfirmationDeadline``: fixed window from the last (re)issue, only
  consulted while the account is unconfirmed.
- ``SlidingAnchor``: moved forward on every rotation, decides whether the
  token is still live.

Tokens are immutable; rotation returns a new instance with a fresh value.
"""

import secrets
from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from enum import Enum
from uuid import uuid4

from squareit.domain.shared.exceptions import ErrorCode
from squareit_identity.domain.account.value_objects.session_policy import (
    SessionPolicy,
)
from squareit_identity.exceptions import TokenMalformedError

TOKEN_LENGTH = 36
NULL_TOKEN_LITERAL = "null"


def generate_token_value() -> str:
    """Return a new random token value in UUID text form."""
    return str(uuid4())


def mask_token(value: str | None) -> str:
    """Shorten a token value for log lines and error messages."""
    if not value:
        return str(value)
    return f"{value[:8]}..."


def validate_token_format(value: str | None) -> str:
    """Check that a presented token is structurally usable.

    Parameters
    ----------
    value
        The raw token as presented by the caller

    Returns
    -------
    The unchanged token value

    Raises
    ------
    TokenMalformedError
        If the token is missing, empty, the literal ``"null"``, or not
        exactly ``TOKEN_LENGTH`` characters long
    """
    if value is None or value == "" or value == NULL_TOKEN_LITERAL:
        raise TokenMalformedError(f"Token is null or empty with token: {value}")
    if len(value) != TOKEN_LENGTH:
        raise TokenMalformedError(
            f"Token must be {TOKEN_LENGTH} characters with token: {mask_token(value)}",
            ErrorCode.TOKEN_LENGTH_MISMATCH,
        )
    return value


class RotationMode(str, Enum):
    """How a token is rotated after a call."""

    EXTEND = "extend"
    REISSUE = "reissue"


@dataclass(frozen=True)
class ConfirmationDeadline:
    expires_at: datetime

    @classmethod
    def starting_at(
        cls,
        issued_at: datetime,
        window: timedelta,
    ) -> "ConfirmationDeadline":
        return cls(expires_at=issued_at + window)

    def has_passed(self, now: datetime) -> bool:
        return now > self.expires_at


@dataclass(frozen=True)
class SlidingAnchor:
    anchored_at: datetime

    def expires_at(self, window: timedelta) -> datetime:
        return self.anchored_at + window

    def is_live(self, now: datetime, window: timedelta) -> bool:
        return now <= self.expires_at(window)


@dataclass(frozen=True)
class SessionToken:
    """Current bearer value of an account together with its two clocks."""

    value: str
    confirmation_deadline: ConfirmationDeadline
    sliding_anchor: SlidingAnchor

    @classmethod
    def issue(cls, now: datetime, policy: SessionPolicy) -> "SessionToken":
        return cls(
            value=generate_token_value(),
            confirmation_deadline=ConfirmationDeadline.starting_at(
                now,
                policy.confirmation_window,
            ),
            sliding_anchor=SlidingAnchor(now),
        )

    def extend(self, now: datetime) -> "SessionToken":
        """New value and sliding anchor; the confirmation deadline is kept."""
        return replace(
            self,
            value=generate_token_value(),
            sliding_anchor=SlidingAnchor(now),
        )

    def reissue(self, now: datetime, policy: SessionPolicy) -> "SessionToken":
        """New value with both clocks restarted."""
        return self.issue(now, policy)

    def rotate(
        self,
        mode: RotationMode,
        now: datetime,
        policy: SessionPolicy,
    ) -> "SessionToken":
        if mode is RotationMode.REISSUE:
            return self.reissue(now, policy)
        return self.extend(now)

    def is_live(self, now: datetime, policy: SessionPolicy) -> bool:
        return self.sliding_anchor.is_live(now, policy.session_window)

    def session_expires_at(self, policy: SessionPolicy) -> datetime:
        return self.sliding_anchor.expires_at(policy.session_window)

    def confirmation_expired(self, now: datetime) -> bool:
        return self.confirmation_deadline.has_passed(now)

    def matches(self, presented: str | None) -> bool:
        if presented is None:
            return False
        return secrets.compare_digest(self.value.encode(), presented.encode())

    def __repr__(self) -> str:
        return (
            f"SessionToken(value={mask_token(self.value)}, "
            f"confirmation_deadline={self.confirmation_deadline.expires_at}, "
            f"sliding_anchor={self.sliding_anchor.anchored_at})"
        )
