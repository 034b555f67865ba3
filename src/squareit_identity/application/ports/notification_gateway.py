"""Outbound notification port."""

from abc import ABC, abstractmethod
from enum import Enum

from squareit_identity.domain.account import Account


class NotificationKind(str, Enum):
    NEW_ACCOUNT = "new_account"
    RESEND_NEW_ACCOUNT = "resend_new_account"
    ACCOUNT_CONFIRMED = "account_confirmed"


class NotificationGateway(ABC):
    """Delivers account notifications, typically by email.

    Implementations read the token to embed from
    ``account.session_token`` at call time.
    """

    @abstractmethod
    def notify(self, account: Account, kind: NotificationKind) -> None:
        """Send one notification of the given kind to the account."""
