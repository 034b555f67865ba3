from squareit_identity.application.ports.notification_gateway import (
    NotificationGateway,
    NotificationKind,
)

__all__ = ["NotificationGateway", "NotificationKind"]
