"""Warden Identity - Users, credentials and sessions.

This module handles all identity-related concerns:
- Registration (open or invitation-bound)
- Login through a pluggable session strategy
- Password reset (request, token validity check, update)
- Admin invitations
- Request authentication (bearer session tokens)

Infrastructure adapters (SQLAlchemy repository, notifications HTTP client)
live under warden_identity.infrastructure and are wired by the caller,
see warden_identity.bootstrap.
"""

from warden_identity.application.context import UserContext
from warden_identity.application.middleware import (
    AuthenticationResult,
    AuthMiddleware,
    AuthState,
)
from warden_identity.application.ports import NotificationKind, NotificationSender
from warden_identity.application.services import CredentialService, SessionService
from warden_identity.application.session import SessionStrategy, TokenSessionStrategy
from warden_identity.bootstrap import (
    IdentityServices,
    build_identity_services,
    token_policies_from_settings,
)
from warden_identity.domain.user import (
    Email,
    EmailAlreadyUsedError,
    InvalidEmailError,
    User,
    UserNotFoundError,
    UserRepository,
)
from warden_identity.exceptions import (
    AuthError,
    InvalidCredentialFormatError,
    InvalidCredentialsError,
    InvalidTokenError,
    NotificationDeliveryError,
    NotificationRejectedError,
    NotificationServiceTimeoutError,
    NotificationServiceUnavailableError,
    RegistrationDeniedError,
    StorageConflictError,
    StorageError,
    TokenExpiredError,
    WeakPasswordError,
)

__all__ = [
    # Application
    "AuthMiddleware",
    "AuthState",
    "AuthenticationResult",
    "CredentialService",
    "NotificationKind",
    "NotificationSender",
    "SessionService",
    "SessionStrategy",
    "TokenSessionStrategy",
    "UserContext",
    # Bootstrap
    "IdentityServices",
    "build_identity_services",
    "token_policies_from_settings",
    # Domain - User
    "Email",
    "EmailAlreadyUsedError",
    "InvalidEmailError",
    "User",
    "UserNotFoundError",
    "UserRepository",
    # Exceptions
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
