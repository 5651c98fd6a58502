"""Ports (interfaces) for infrastructure the identity services depend on."""

from warden_identity.application.ports.notification_sender import (
    NotificationKind,
    NotificationSender,
)

__all__ = ["NotificationKind", "NotificationSender"]
