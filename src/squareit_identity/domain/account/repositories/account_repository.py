"""Account repository interface."""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from squareit_identity.domain.account.aggregates.account import Account


class AccountRepository(ABC):
    """Repository interface for Account aggregates.

    Lookups return deleted accounts as well; callers decide how to treat
    the tombstone. Uniqueness of email, username and token value must be
    enforced by the store itself.
    """

    @abstractmethod
    async def find_by_id(self, account_id: UUID) -> Optional[Account]:
        """Find an account by its ID."""

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[Account]:
        """Find an account by exact email."""

    @abstractmethod
    async def find_by_username(self, username: str) -> Optional[Account]:
        """Find an account by exact username."""

    @abstractmethod
    async def find_by_token_value(self, token_value: str) -> Optional[Account]:
        """Find the account whose current session token has this value."""

    @abstractmethod
    async def exists_by_email(self, email: str) -> bool:
        """Check if any account, deleted or not, uses this email."""

    @abstractmethod
    async def exists_by_username(self, username: str) -> bool:
        """Check if any account, deleted or not, uses this username."""

    @abstractmethod
    async def save(self, account: Account) -> None:
        """Insert or update an account."""

    @abstractmethod
    async def count_active(self) -> int:
        """Count enabled, non-deleted accounts."""
