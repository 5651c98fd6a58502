"""Session façade delegating to the configured SessionStrategy."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from warden_identity.application.session import SessionStrategy
    from warden_identity.domain.user import User, UserRepository

logger = logging.getLogger(__name__)


class SessionService:
    """Delegates login and session resolution to one strategy.

    The strategy is chosen at construction; callers never see which one.
    """

    def __init__(
        self,
        strategy: SessionStrategy,
        user_repository: UserRepository,
    ):
        self._strategy = strategy
        self._user_repo = user_repository

    @property
    def strategy(self) -> SessionStrategy:
        return self._strategy

    async def log_in(self, email: str, password: str) -> str:
        logger.debug("Attempting to log in user with email: %s", email)
        artifact = await self._strategy.log_in(email, password, self._user_repo)

        logger.info("User logged in: %s", email)
        return artifact

    async def resolve_user(self, artifact: str) -> User | None:
        return await self._strategy.resolve_user(artifact, self._user_repo)
