"""Session guard: token validation chain, rotation and email confirmation.

Every protected operation calls ``resolve`` before doing any work and
``rotate`` after it succeeded, inside the same unit of work, so the
operation and its rotation commit together.
"""

import logging

from squareit.domain.shared.time import Clock, utc_now
from squareit_identity.application.ports import NotificationKind
from squareit_identity.application.services.notification_service import (
    NotificationService,
)
from squareit_identity.domain.account import (
    Account,
    AccountAlreadyActivatedError,
    AccountDeletedError,
    AccountNotActivatedError,
    AccountNotFoundError,
    AccountRepository,
    RotationMode,
    SessionPolicy,
    mask_token,
    validate_token_format,
)
from squareit_identity.exceptions import SessionExpiredError
from squareit_identity.schemas import ConfirmationResult, ConfirmationStatus

logger = logging.getLogger(__name__)

CONFIRMED_MESSAGE = "Successfully activated user account"
PENDING_MESSAGE = (
    "Unsuccessful. User account not activated. New mail for verification sent"
)


class SessionGuard:
    """Resolves bearer tokens to accounts and rotates them after use."""

    def __init__(
        self,
        account_repository: AccountRepository,
        notification_service: NotificationService,
        policy: SessionPolicy | None = None,
        clock: Clock = utc_now,
    ):
        self._account_repo = account_repository
        self._notifications = notification_service
        self._policy = policy or SessionPolicy()
        self._clock = clock

    @property
    def policy(self) -> SessionPolicy:
        return self._policy

    async def resolve(
        self,
        token: str | None,
        require_activation: bool = True,
    ) -> Account:
        """Run the validation chain for a presented token.

        The checks run in a fixed order: format, lookup, deleted,
        activation (optional), sliding-window liveness.

        Parameters
        ----------
        token
            Token presented by the caller, possibly missing
        require_activation
            Whether the account must already have confirmed its email

        Returns
        -------
        The resolved account

        Raises
        ------
        TokenMalformedError
            If the token is missing or has the wrong shape
        AccountNotFoundError
            If no account currently holds this token
        AccountDeletedError
            If the account is soft-deleted
        AccountNotActivatedError
            If activation is required and the account is unconfirmed
        SessionExpiredError
            If the sliding window has elapsed
        """
        account = await self._lookup(token)

        if require_activation and not account.enabled:
            logger.debug("Rejected token for unconfirmed account %s", account.id)
            raise AccountNotActivatedError("email", account.email)

        if not account.session_token.is_live(self._clock(), self._policy):
            logger.debug("Rejected stale token for account %s", account.id)
            raise SessionExpiredError(
                account.email,
                account.session_token.session_expires_at(self._policy),
            )

        return account

    async def rotate(
        self,
        account: Account,
        mode: RotationMode = RotationMode.EXTEND,
    ) -> str:
        """Replace the account's token and persist it.

        Returns the new token value. The previous value stops resolving
        as soon as the unit of work commits.
        """
        previous = account.session_token.value
        token = account.rotate_token(mode, self._clock(), self._policy)
        await self._account_repo.save(account)

        logger.debug(
            "Rotated token for account %s (%s): %s -> %s",
            account.id,
            mode.value,
            mask_token(previous),
            mask_token(token.value),
        )
        return token.value

    async def confirm(self, token: str | None) -> ConfirmationResult:
        """Confirm an account's email using the token from the confirmation mail.

        Within the confirmation deadline the account is enabled and the
        token is extended. Past the deadline the account stays unconfirmed,
        the token is reissued and a new confirmation mail goes out. In both
        cases the returned result carries the newest token value.
        """
        account = await self._lookup(token)

        if account.enabled:
            raise AccountAlreadyActivatedError("email", account.email)

        now = self._clock()
        if account.session_token.confirmation_expired(now):
            new_token = await self.rotate(account, RotationMode.REISSUE)
            self._notifications.dispatch(account, NotificationKind.RESEND_NEW_ACCOUNT)
            logger.info(
                "Confirmation deadline passed for account %s, token reissued",
                account.id,
            )
            return ConfirmationResult(
                status=ConfirmationStatus.PENDING,
                token=new_token,
                message=PENDING_MESSAGE,
            )

        account.activate(now)
        new_token = await self.rotate(account, RotationMode.EXTEND)
        self._notifications.dispatch(account, NotificationKind.ACCOUNT_CONFIRMED)
        logger.info("Account confirmed: %s", account.id)

        return ConfirmationResult(
            status=ConfirmationStatus.CONFIRMED,
            token=new_token,
            message=CONFIRMED_MESSAGE,
        )

    async def request_confirmation_email(self, token: str | None) -> str:
        """Send the confirmation mail again for an unconfirmed account.

        Returns the presented token; no rotation takes place.
        """
        account = await self.resolve(token, require_activation=False)

        if account.enabled:
            raise AccountAlreadyActivatedError("email", account.email)

        self._notifications.dispatch(account, NotificationKind.NEW_ACCOUNT)
        return account.session_token.value

    async def resend_confirmation(self, email: str) -> str:
        """Reissue the token of an unconfirmed account and mail it.

        Returns the reissued token value.
        """
        account = await self._account_repo.find_by_email(email)
        if account is None:
            raise AccountNotFoundError("email", email)
        if account.deleted:
            raise AccountDeletedError("email", email)
        if account.enabled:
            raise AccountAlreadyActivatedError("email", email)

        new_token = await self.rotate(account, RotationMode.REISSUE)
        self._notifications.dispatch(account, NotificationKind.RESEND_NEW_ACCOUNT)
        logger.info("Confirmation reissued for account %s", account.id)
        return new_token

    async def _lookup(self, token: str | None) -> Account:
        value = validate_token_format(token)

        account = await self._account_repo.find_by_token_value(value)
        if account is None:
            logger.debug("No account holds token %s", mask_token(value))
            raise AccountNotFoundError("token", mask_token(value))

        if account.deleted:
            raise AccountDeletedError("token", mask_token(value))

        return account
