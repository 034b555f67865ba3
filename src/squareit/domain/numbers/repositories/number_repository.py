"""Number record repository interface."""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from squareit.domain.numbers.aggregates.number_record import NumberRecord


class NumberRepository(ABC):
    """Repository interface for NumberRecord aggregates.

    All read methods are scoped to one owning account and skip
    soft-deleted records.
    """

    @abstractmethod
    async def add(self, record: NumberRecord) -> NumberRecord:
        """Insert a new record and return it with its assigned id."""

    @abstractmethod
    async def save(self, record: NumberRecord) -> None:
        """Update an existing record."""

    @abstractmethod
    async def find_for_account(
        self,
        account_id: UUID,
        number_id: int,
    ) -> Optional[NumberRecord]:
        """Find a live record of the account by id."""

    @abstractmethod
    async def count_for_account(self, account_id: UUID) -> int:
        """Count live records of the account."""

    @abstractmethod
    async def list_for_account(
        self,
        account_id: UUID,
        offset: int,
        limit: int,
    ) -> list[NumberRecord]:
        """List live records of the account ordered by id ascending."""
