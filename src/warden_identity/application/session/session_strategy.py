"""Pluggable login strategy."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from warden_identity.domain.user import User, UserRepository


class SessionStrategy(ABC):
    """Turns verified credentials into a session artifact and back.

    The artifact is an opaque string for callers. Implementations decide
    its format; the strategy that issued an artifact is the one that
    resolves it on later requests.
    """

    @abstractmethod
    async def log_in(
        self,
        email: str,
        password: str,
        user_repository: UserRepository,
    ) -> str:
        """Log the user in.

        Parameters
        ----------
        email
            The email of the user trying to log in
        password
            The plaintext password to check
        user_repository
            Where users are looked up

        Returns
        -------
        The session artifact

        Raises
        ------
        InvalidCredentialsError
            If the email is unknown or the password does not match
        """

    @abstractmethod
    async def resolve_user(
        self,
        artifact: str,
        user_repository: UserRepository,
    ) -> User | None:
        """Resolve a session artifact to its user.

        Returns None when the artifact is valid but its user no longer exists.

        Raises
        ------
        TokenExpiredError
            If the artifact has expired
        InvalidTokenError
            If the artifact is forged or malformed
        """
