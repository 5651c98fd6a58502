"""Request authentication against session tokens."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Mapping, MutableMapping

from warden_auth import InvalidTokenError, TokenExpiredError
from warden_identity.application.context import UserContext

if TYPE_CHECKING:
    from warden_identity.application.services import SessionService
    from warden_identity.domain.user import User

logger = logging.getLogger(__name__)

BEARER_SCHEME = "bearer"
USER_KEY = "user"
USER_CONTEXT_KEY = "user_context"


class AuthState(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED = "authenticated"
    REJECTED = "rejected"


@dataclass(frozen=True)
class AuthenticationResult:
    """Outcome of authenticating one request.

    Attributes
    ----------
    state
        AUTHENTICATED or REJECTED. UNAUTHENTICATED is only the start state.
    user
        The resolved user, set only when authenticated
    reason
        Why the request was rejected (for logs, not for clients)
    """

    state: AuthState
    user: User | None = None
    reason: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.state is AuthState.AUTHENTICATED


class AuthMiddleware:
    """Verifies a request's session token and resolves its user.

    Every request is checked independently; there is no refresh or
    rotation. A correctly signed token whose user no longer exists is
    rejected.
    """

    def __init__(self, session_service: SessionService):
        self._session_service = session_service

    @staticmethod
    def extract_bearer_token(authorization: str | None) -> str | None:
        """Return the token of an ``Authorization: Bearer <token>`` header."""
        if not authorization:
            return None

        scheme, _, token = authorization.strip().partition(" ")
        if scheme.lower() != BEARER_SCHEME:
            return None

        token = token.strip()
        return token or None

    async def authenticate(self, authorization: str | None) -> AuthenticationResult:
        token = self.extract_bearer_token(authorization)
        if token is None:
            return self._reject("Missing bearer token")

        try:
            user = await self._session_service.resolve_user(token)
        except TokenExpiredError:
            return self._reject("Session token has expired")
        except InvalidTokenError as e:
            return self._reject(e.message)

        if user is None:
            return self._reject("Session user no longer exists")

        return AuthenticationResult(state=AuthState.AUTHENTICATED, user=user)

    async def authenticate_request(
        self,
        headers: Mapping[str, str],
        context: MutableMapping[str, Any],
    ) -> AuthenticationResult:
        """Authenticate a request and attach the user to its context.

        Parameters
        ----------
        headers
            Request headers; the ``authorization`` header is looked up
            case-insensitively
        context
            Request-scoped storage for downstream consumers. On success it
            receives the User under ``"user"`` and its UserContext under
            ``"user_context"``.
        """
        authorization = next(
            (value for key, value in headers.items() if key.lower() == "authorization"),
            None,
        )
        result = await self.authenticate(authorization)

        if result.is_authenticated and result.user is not None:
            context[USER_KEY] = result.user
            context[USER_CONTEXT_KEY] = UserContext.create(result.user)

        return result

    def _reject(self, reason: str) -> AuthenticationResult:
        logger.debug("Request authentication rejected: %s", reason)
        return AuthenticationResult(state=AuthState.REJECTED, reason=reason)
