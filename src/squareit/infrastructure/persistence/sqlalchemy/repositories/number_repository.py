"""SQLAlchemy implementation of NumberRepository."""

import logging
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from squareit.domain.numbers import NumberNotFoundError, NumberRecord, NumberRepository
from squareit.domain.shared.time import ensure_tz_aware
from squareit.infrastructure.persistence.sqlalchemy.models import NumberModel

logger = logging.getLogger(__name__)


class NumberRepositorySQLAlchemy(NumberRepository):
    """SQLAlchemy implementation of the NumberRepository interface."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(self, record: NumberRecord) -> NumberRecord:
        model = NumberModel(
            account_id=record.account_id,
            value=record.value,
            deleted=record.deleted,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )
        self._session.add(model)
        await self._session.flush()
        logger.debug("Inserted number %s for account %s", model.id, record.account_id)
        return self._map_to_domain(model)

    async def save(self, record: NumberRecord) -> None:
        if record.id is None:
            msg = "Cannot update a number record that was never stored"
            raise ValueError(msg)

        model = await self._session.get(NumberModel, record.id)
        if model is None:
            raise NumberNotFoundError(record.id)

        model.value = record.value
        model.deleted = record.deleted
        model.updated_at = record.updated_at
        await self._session.flush()

    async def find_for_account(
        self,
        account_id: UUID,
        number_id: int,
    ) -> NumberRecord | None:
        stmt = select(NumberModel).where(
            NumberModel.id == number_id,
            NumberModel.account_id == account_id,
            NumberModel.deleted.is_(False),
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            return None
        return self._map_to_domain(model)

    async def count_for_account(self, account_id: UUID) -> int:
        stmt = (
            select(func.count())
            .select_from(NumberModel)
            .where(
                NumberModel.account_id == account_id,
                NumberModel.deleted.is_(False),
            )
        )
        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def list_for_account(
        self,
        account_id: UUID,
        offset: int,
        limit: int,
    ) -> list[NumberRecord]:
        stmt = (
            select(NumberModel)
            .where(
                NumberModel.account_id == account_id,
                NumberModel.deleted.is_(False),
            )
            .order_by(NumberModel.id.asc())
            .offset(offset)
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [self._map_to_domain(model) for model in result.scalars().all()]

    def _map_to_domain(self, model: NumberModel) -> NumberRecord:
        return NumberRecord.reconstitute(
            id=model.id,
            account_id=model.account_id,
            value=model.value,
            deleted=model.deleted,
            created_at=ensure_tz_aware(model.created_at),
            updated_at=ensure_tz_aware(model.updated_at),
        )
