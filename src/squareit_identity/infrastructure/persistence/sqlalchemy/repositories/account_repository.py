"""SQLAlchemy implementation of AccountRepository."""

import logging
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from squareit.domain.shared.exceptions import InfrastructureError
from squareit.domain.shared.time import ensure_tz_aware
from squareit_identity.domain.account import (
    Account,
    AccountNotFoundError,
    AccountRepository,
    ConfirmationDeadline,
    EmailAlreadyExistsError,
    SessionToken,
    SlidingAnchor,
    UsernameAlreadyExistsError,
)
from squareit_identity.infrastructure.persistence.sqlalchemy.models import (
    AccountModel,
)

logger = logging.getLogger(__name__)


def _collided_field(error: IntegrityError) -> str | None:
    """Name the unique column an IntegrityError refers to, if any.

    Matches both the sqlite ("accounts.email") and the postgres
    ("ix_accounts_email") wording.
    """
    text = str(error.orig) if error.orig is not None else str(error)
    for field in ("email", "username", "token_value"):
        if f"accounts.{field}" in text or f"ix_accounts_{field}" in text:
            return field
    return None


class AccountRepositorySQLAlchemy(AccountRepository):
    """SQLAlchemy implementation of the AccountRepository interface."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_id(self, account_id: UUID) -> Account | None:
        model = await self._find_model_by_id(account_id)
        if model is None:
            return None
        return self._map_to_domain(model)

    async def find_by_email(self, email: str) -> Account | None:
        stmt = select(AccountModel).where(AccountModel.email == email)
        return await self._find_one(stmt)

    async def find_by_username(self, username: str) -> Account | None:
        stmt = select(AccountModel).where(AccountModel.username == username)
        return await self._find_one(stmt)

    async def find_by_token_value(self, token_value: str) -> Account | None:
        stmt = select(AccountModel).where(AccountModel.token_value == token_value)
        return await self._find_one(stmt)

    async def exists_by_email(self, email: str) -> bool:
        stmt = select(func.count()).select_from(AccountModel).where(
            AccountModel.email == email,
        )
        result = await self._session.execute(stmt)
        return result.scalar_one() > 0

    async def exists_by_username(self, username: str) -> bool:
        stmt = select(func.count()).select_from(AccountModel).where(
            AccountModel.username == username,
        )
        result = await self._session.execute(stmt)
        return result.scalar_one() > 0

    async def save(self, account: Account) -> None:
        """Insert or update ``account``.

        An update only goes through while the stored row still carries the
        version ``account`` was loaded at. Otherwise another unit of work
        rotated or changed the account in between and this one loses.

        Raises
        ------
        AccountNotFoundError
            If the stored row moved past ``account.version``
        EmailAlreadyExistsError, UsernameAlreadyExistsError
            If a unique column collides with another account
        """
        existing = await self._find_model_by_id(account.id)

        try:
            if existing:
                if existing.version != account.version:
                    raise StaleDataError(
                        f"stored version {existing.version}, "
                        f"loaded version {account.version}",
                    )
                self._update_model(existing, account)
                logger.debug("Updated account: %s", account.id)
            else:
                existing = self._map_to_model(account)
                self._session.add(existing)
                logger.debug("Inserted account: %s", account.id)

            await self._session.flush()
        except IntegrityError as e:
            field = _collided_field(e)
            if field == "email":
                raise EmailAlreadyExistsError(account.email) from e
            if field == "username":
                raise UsernameAlreadyExistsError(account.username) from e
            raise InfrastructureError(
                "Account could not be stored",
                details={"account_id": str(account.id)},
            ) from e
        except StaleDataError as e:
            # Another unit of work saved the account first.
            logger.info("Concurrent update lost for account %s: %s", account.id, e)
            raise AccountNotFoundError(
                "token",
                "superseded by a concurrent request",
            ) from e

        account.version = existing.version

    async def count_active(self) -> int:
        stmt = (
            select(func.count())
            .select_from(AccountModel)
            .where(AccountModel.enabled.is_(True), AccountModel.deleted.is_(False))
        )
        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def _find_one(self, stmt) -> Account | None:
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            return None
        return self._map_to_domain(model)

    async def _find_model_by_id(self, account_id: UUID) -> AccountModel | None:
        stmt = select(AccountModel).where(AccountModel.id == account_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _map_to_domain(self, model: AccountModel) -> Account:
        token = SessionToken(
            value=model.token_value,
            confirmation_deadline=ConfirmationDeadline(
                ensure_tz_aware(model.confirmation_deadline),
            ),
            sliding_anchor=SlidingAnchor(ensure_tz_aware(model.sliding_anchor)),
        )
        return Account.reconstitute(
            id=model.id,
            username=model.username,
            email=model.email,
            password_hash=model.password_hash,
            session_token=token,
            first_name=model.first_name,
            last_name=model.last_name,
            role=model.role,
            enabled=model.enabled,
            deleted=model.deleted,
            created_at=ensure_tz_aware(model.created_at),
            updated_at=ensure_tz_aware(model.updated_at),
            version=model.version,
        )

    def _map_to_model(self, account: Account) -> AccountModel:
        token = account.session_token
        return AccountModel(
            id=account.id,
            username=account.username,
            email=account.email,
            password_hash=account.password_hash,
            first_name=account.first_name,
            last_name=account.last_name,
            role=account.role.value,
            enabled=account.enabled,
            deleted=account.deleted,
            token_value=token.value,
            confirmation_deadline=token.confirmation_deadline.expires_at,
            sliding_anchor=token.sliding_anchor.anchored_at,
            created_at=account.created_at,
            updated_at=account.updated_at,
        )

    def _update_model(self, model: AccountModel, account: Account) -> None:
        token = account.session_token
        model.username = account.username
        model.email = account.email
        model.password_hash = account.password_hash
        model.first_name = account.first_name
        model.last_name = account.last_name
        model.role = account.role.value
        model.enabled = account.enabled
        model.deleted = account.deleted
        model.token_value = token.value
        model.confirmation_deadline = token.confirmation_deadline.expires_at
        model.sliding_anchor = token.sliding_anchor.anchored_at
        model.updated_at = account.updated_at
