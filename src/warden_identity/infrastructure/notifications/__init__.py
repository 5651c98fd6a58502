"""HTTP adapter for the notifications service."""

from warden_identity.infrastructure.notifications.notification_client import (
    NotificationServiceClient,
)

__all__ = ["NotificationServiceClient"]
