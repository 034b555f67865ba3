import logging

from squareit_identity.application.ports import NotificationGateway, NotificationKind
from squareit_identity.domain.account import Account

logger = logging.getLogger(__name__)


class NotificationService:
    """Fire-and-log wrapper around a NotificationGateway.

    A failed delivery is logged and reported through the return value; it
    never propagates into the state transition that triggered it.
    """

    def __init__(self, gateway: NotificationGateway):
        self._gateway = gateway

    def dispatch(self, account: Account, kind: NotificationKind) -> bool:
        try:
            self._gateway.notify(account, kind)
        except Exception as e:
            logger.error(
                "Failed to send %s notification to %s: %s",
                kind.value,
                account.email,
                e,
            )
            return False

        logger.debug("Dispatched %s notification to %s", kind.value, account.email)
        return True
