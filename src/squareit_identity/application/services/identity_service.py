"""Identity service: account creation, update, deletion and login."""

import logging
from typing import TypeVar

from squareit.domain.shared.time import Clock, utc_now
from squareit_identity.application.ports import NotificationKind
from squareit_identity.application.services.notification_service import (
    NotificationService,
)
from squareit_identity.domain.account import (
    Account,
    AccountDeletedError,
    AccountNotActivatedError,
    AccountNotFoundError,
    AccountRepository,
    AccountRole,
    EmailAlreadyExistsError,
    RotationMode,
    SessionPolicy,
    UsernameAlreadyExistsError,
    validate_token_format,
)
from squareit_identity.exceptions import (
    CredentialMismatchError,
    SessionExpiredError,
    TokenMismatchError,
    WeakPasswordError,
)
from squareit_identity.schemas import AccountProfile, LoginResult
from squareit_identity.services import PasswordHashingService

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _keep_if_none(new: T | None, stored: T) -> T:
    return stored if new is None else new


class IdentityService:
    """Drives the account lifecycle and enforces email/username uniqueness.

    Uniqueness is checked against every stored account, deleted ones
    included, so an email or username is never reused. The unique
    constraints of the store back these checks up under concurrency.
    """

    def __init__(  # noqa: PLR0913
        self,
        account_repository: AccountRepository,
        password_service: PasswordHashingService,
        notification_service: NotificationService,
        policy: SessionPolicy | None = None,
        clock: Clock = utc_now,
    ):
        self._account_repo = account_repository
        self._password_service = password_service
        self._notifications = notification_service
        self._policy = policy or SessionPolicy()
        self._clock = clock

    async def create_account(self, profile: AccountProfile) -> Account:
        """Create an unconfirmed account and send the confirmation mail.

        Raises
        ------
        EmailAlreadyExistsError
            If any account already uses the email
        UsernameAlreadyExistsError
            If any account already uses the username
        WeakPasswordError
            If the password is missing or too weak
        """
        if not profile.password:
            msg = "Password cannot be empty"
            raise WeakPasswordError(msg)

        await self._ensure_email_available(profile.email)
        await self._ensure_username_available(profile.username)

        password_hash = self._password_service.hash(profile.password)
        account = Account.create(
            username=profile.username,
            email=profile.email,
            password_hash=password_hash,
            now=self._clock(),
            policy=self._policy,
            first_name=profile.first_name or "",
            last_name=profile.last_name or "",
            role=profile.role or AccountRole.USER,
        )
        await self._account_repo.save(account)
        logger.info("Created account %s (username: %s)", account.id, account.username)

        self._notifications.dispatch(account, NotificationKind.NEW_ACCOUNT)
        return account

    async def update_account(
        self,
        current_email: str,
        profile: AccountProfile,
        presented_token: str | None,
    ) -> Account:
        """Apply a new profile to the account currently known by ``current_email``.

        The token is not rotated here; the caller rotates after this
        returns.

        Raises
        ------
        TokenMalformedError
            If the presented token has the wrong shape
        AccountNotFoundError
            If no account uses ``current_email``
        SessionExpiredError
            If the account's sliding window has elapsed
        TokenMismatchError
            If the presented token is not the account's current token
        AccountDeletedError
            If the account is soft-deleted
        AccountNotActivatedError
            If the account is unconfirmed
        AccountExistsError
            If a changed email or username is already taken
        """
        validate_token_format(presented_token)

        account = await self._account_repo.find_by_email(current_email)
        if account is None:
            raise AccountNotFoundError("email", current_email)

        now = self._clock()
        token = account.session_token
        if not token.is_live(now, self._policy):
            raise SessionExpiredError(
                account.email,
                token.session_expires_at(self._policy),
            )
        if not token.matches(presented_token):
            raise TokenMismatchError(account.email)
        if account.deleted:
            raise AccountDeletedError("email", account.email)
        if not account.enabled:
            raise AccountNotActivatedError("email", account.email)

        if profile.email != account.email:
            await self._ensure_email_available(profile.email)
        if profile.username != account.username:
            await self._ensure_username_available(profile.username)

        password_hash = (
            self._password_service.hash(profile.password) if profile.password else None
        )
        account.update_profile(
            username=profile.username,
            email=profile.email,
            first_name=_keep_if_none(profile.first_name, account.first_name),
            last_name=_keep_if_none(profile.last_name, account.last_name),
            role=_keep_if_none(profile.role, account.role),
            now=now,
            password_hash=password_hash,
        )
        await self._account_repo.save(account)
        logger.info("Updated account %s", account.id)

        return account

    async def delete_account(self, account: Account) -> None:
        """Soft-delete the account. Owned records are left untouched."""
        account.mark_deleted(self._clock())
        await self._account_repo.save(account)
        logger.info("Deleted account %s", account.id)

    async def login(self, identifier: str, password: str) -> LoginResult:
        """Authenticate by email or username.

        A still-live token is returned unchanged; a stale one is rotated
        first.

        Raises
        ------
        AccountNotFoundError
            If neither an email nor a username matches
        AccountDeletedError
            If the account is soft-deleted
        AccountNotActivatedError
            If the account is unconfirmed
        CredentialMismatchError
            If the password is wrong
        """
        account = await self._account_repo.find_by_email(identifier)
        if account is None:
            account = await self._account_repo.find_by_username(identifier)
        if account is None:
            raise AccountNotFoundError("email or username", identifier)

        if account.deleted:
            raise AccountDeletedError("email", account.email)
        if not account.enabled:
            raise AccountNotActivatedError("email", account.email)

        if not self._password_service.verify(password, account.password_hash):
            logger.debug("Password mismatch for account %s", account.id)
            raise CredentialMismatchError(identifier)

        now = self._clock()
        if account.session_token.is_live(now, self._policy):
            return LoginResult(
                account=account,
                token=account.session_token.value,
                rotated=False,
            )

        token = account.rotate_token(RotationMode.EXTEND, now, self._policy)
        await self._account_repo.save(account)
        logger.info("Login rotated stale token for account %s", account.id)

        return LoginResult(account=account, token=token.value, rotated=True)

    async def count_active(self) -> int:
        return await self._account_repo.count_active()

    async def _ensure_email_available(self, email: str) -> None:
        if await self._account_repo.exists_by_email(email):
            raise EmailAlreadyExistsError(email)

    async def _ensure_username_available(self, username: str) -> None:
        if await self._account_repo.exists_by_username(username):
            raise UsernameAlreadyExistsError(username)
