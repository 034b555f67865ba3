from squareit_identity.application.services.identity_service import IdentityService
from squareit_identity.application.services.notification_service import (
    NotificationService,
)
from squareit_identity.application.services.session_guard import SessionGuard

__all__ = [
    "IdentityService",
    "NotificationService",
    "SessionGuard",
]
