"""Request authentication."""

from warden_identity.application.middleware.auth_middleware import (
    USER_CONTEXT_KEY,
    USER_KEY,
    AuthenticationResult,
    AuthMiddleware,
    AuthState,
)

__all__ = [
    "USER_CONTEXT_KEY",
    "USER_KEY",
    "AuthMiddleware",
    "AuthState",
    "AuthenticationResult",
]
