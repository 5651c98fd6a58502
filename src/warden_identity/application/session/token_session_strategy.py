"""Session strategy issuing signed session tokens."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING
from uuid import UUID

from warden_auth import (
    InvalidCredentialsError,
    InvalidTokenError,
    PasswordHashingService,
    TokenCodec,
    TokenPolicy,
    TokenPurpose,
    WeakPasswordError,
)
from warden_identity.application.session.session_strategy import SessionStrategy
from warden_identity.application.token_claims import USER_ID_CLAIM
from warden_identity.domain.user import normalize_email

if TYPE_CHECKING:
    from warden_identity.domain.user import User, UserRepository

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid credentials."


class TokenSessionStrategy(SessionStrategy):
    """Stateless JWT sessions.

    The artifact is a session-purpose token carrying the user's id. Unknown
    email and wrong password fail with the same error and message. A
    successful login re-hashes the password when its stored hash was made
    with another bcrypt cost factor than the configured one.
    """

    def __init__(
        self,
        password_service: PasswordHashingService,
        token_codec: TokenCodec,
        session_policy: TokenPolicy,
    ):
        if session_policy.purpose is not TokenPurpose.SESSION:
            msg = "TokenSessionStrategy requires a session token policy"
            raise ValueError(msg)

        self._password_service = password_service
        self._token_codec = token_codec
        self._policy = session_policy

    async def log_in(
        self,
        email: str,
        password: str,
        user_repository: UserRepository,
    ) -> str:
        user = await user_repository.find_by_email(normalize_email(email))
        if user is None:
            raise InvalidCredentialsError(INVALID_CREDENTIALS_MESSAGE)

        matches = await asyncio.to_thread(
            self._password_service.verify,
            password,
            user.password_hash,
        )
        if not matches:
            raise InvalidCredentialsError(INVALID_CREDENTIALS_MESSAGE)

        if self._password_service.needs_rehash(user.password_hash):
            await self._upgrade_password_hash(user, password, user_repository)

        return self._generate_token_for_user(user)

    async def resolve_user(
        self,
        artifact: str,
        user_repository: UserRepository,
    ) -> User | None:
        payload = self._token_codec.verify_for(self._policy, artifact)

        try:
            user_id = UUID(payload.claim(USER_ID_CLAIM))
        except ValueError as e:
            msg = "Session token carries a malformed user id"
            raise InvalidTokenError(msg) from e

        user = await user_repository.find_by_id(user_id)
        if user is None:
            logger.warning("Session token references unknown user: %s", user_id)
        return user

    async def _upgrade_password_hash(
        self,
        user: User,
        password: str,
        user_repository: UserRepository,
    ) -> None:
        try:
            password_hash = await asyncio.to_thread(self._password_service.hash, password)
        except WeakPasswordError:
            # Set under an older password rule; keep the existing hash
            logger.debug("Password of user %s not re-hashed: fails the password rule", user.id)
            return

        await user_repository.update_user_password(user.id, password_hash)
        logger.info(
            "Re-hashed password of user %s with cost factor %d",
            user.id,
            self._password_service.rounds,
        )

    def _generate_token_for_user(self, user: User) -> str:
        return self._token_codec.issue_for(self._policy, {USER_ID_CLAIM: str(user.id)})
