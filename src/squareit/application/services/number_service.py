"""Numeric record operations behind the session guard.

Each operation resolves the presented token (activation required), does
its work scoped to the resolved account and then extends the token.
The new token value is returned next to the result.
"""

import logging

from squareit.domain.numbers import NumberNotFoundError, NumberRecord, NumberRepository
from squareit.domain.shared.exceptions import ValidationError
from squareit.domain.shared.time import Clock, utc_now
from squareit_identity import Account, SessionGuard

logger = logging.getLogger(__name__)


class NumberService:
    """Service for an account's private numeric records."""

    def __init__(
        self,
        session_guard: SessionGuard,
        number_repository: NumberRepository,
        page_size: int = 10,
        clock: Clock = utc_now,
    ):
        self._guard = session_guard
        self._number_repo = number_repository
        self._page_size = page_size
        self._clock = clock

    async def save_number(
        self,
        token: str | None,
        value: int,
    ) -> tuple[NumberRecord, str]:
        account = await self._guard.resolve(token)

        record = await self._number_repo.add(
            NumberRecord.create(account.id, value, self._clock()),
        )
        logger.info("Stored number %s for account %s", record.id, account.id)

        return record, await self._guard.rotate(account)

    async def get_number(
        self,
        token: str | None,
        number_id: int,
    ) -> tuple[NumberRecord, str]:
        account = await self._guard.resolve(token)
        record = await self._get_owned(account, number_id)
        return record, await self._guard.rotate(account)

    async def delete_number(
        self,
        token: str | None,
        number_id: int,
    ) -> tuple[NumberRecord, str]:
        """Soft-delete one record; it disappears from every later read."""
        account = await self._guard.resolve(token)
        record = await self._get_owned(account, number_id)

        record.mark_deleted(self._clock())
        await self._number_repo.save(record)
        logger.info("Deleted number %s of account %s", number_id, account.id)

        return record, await self._guard.rotate(account)

    async def count_numbers(self, token: str | None) -> tuple[int, str]:
        account = await self._guard.resolve(token)
        count = await self._number_repo.count_for_account(account.id)
        return count, await self._guard.rotate(account)

    async def list_numbers(
        self,
        token: str | None,
        page: int = 0,
    ) -> tuple[list[NumberRecord], str]:
        """Return one zero-based page of live records, oldest first."""
        if page < 0:
            msg = f"Page must not be negative, got: {page}"
            raise ValidationError(msg)

        account = await self._guard.resolve(token)
        records = await self._number_repo.list_for_account(
            account.id,
            offset=page * self._page_size,
            limit=self._page_size,
        )
        return records, await self._guard.rotate(account)

    async def _get_owned(self, account: Account, number_id: int) -> NumberRecord:
        record = await self._number_repo.find_for_account(account.id, number_id)
        if record is None:
            raise NumberNotFoundError(number_id)
        return record
