"""Identity exceptions.

Error kinds raised by the identity services in addition to the
authentication errors of warden_auth (re-exported here so callers need a
single import). Every error reaches the caller untouched; mapping to
transport-level responses is the presentation layer's job.
"""

from warden_auth.exceptions import (
    AuthError,
    InvalidCredentialFormatError,
    InvalidCredentialsError,
    InvalidTokenError,
    TokenExpiredError,
    WeakPasswordError,
)


class RegistrationDeniedError(AuthError):
    """Raised when an invitation token is missing, invalid or bound to another email."""

    def __init__(self, message: str = "Registration denied"):
        super().__init__(message)


class StorageError(Exception):
    """Raised when the user store fails (connectivity, constraint violation)."""

    def __init__(self, message: str = "User storage failure"):
        self.message = message
        super().__init__(self.message)


class StorageConflictError(StorageError):
    """Raised when a write collides with a uniqueness constraint.

    This is the safety net for concurrent registrations of the same email,
    which both pass the service-level uniqueness check.
    """

    def __init__(self, message: str = "User already exists"):
        super().__init__(message)


class NotificationDeliveryError(Exception):
    """Base exception for failures handing a notification to the delivery service."""

    def __init__(self, message: str = "Notification delivery failed"):
        self.message = message
        super().__init__(self.message)


class NotificationServiceUnavailableError(NotificationDeliveryError):
    """Raised when the notification service cannot be reached."""

    def __init__(self, message: str = "Error while connecting to the notification service."):
        super().__init__(message)


class NotificationServiceTimeoutError(NotificationDeliveryError):
    """Raised when the request was sent but no reply arrived in time."""

    def __init__(self, message: str = "Timeout while waiting for the notification service."):
        super().__init__(message)


class NotificationRejectedError(NotificationDeliveryError):
    """Raised when the notification service answers with a non-success status."""

    def __init__(self, status_code: int, message: str | None = None):
        self.status_code = status_code
        super().__init__(
            message or f"Notification service rejected the request with status {status_code}."
        )


__all__ = [
    "AuthError",
    "InvalidCredentialFormatError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "NotificationDeliveryError",
    "NotificationRejectedError",
    "NotificationServiceTimeoutError",
    "NotificationServiceUnavailableError",
    "RegistrationDeniedError",
    "StorageConflictError",
    "StorageError",
    "TokenExpiredError",
    "WeakPasswordError",
]
