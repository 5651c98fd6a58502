"""User repository interface.

The only way the identity services reach persisted users. Implementations
issue single read/write calls; no transaction spans a service operation.
"""

from abc import ABC, abstractmethod
from typing import Optional, Union
from uuid import UUID

from warden_identity.domain.user.aggregates.user import User
from warden_identity.domain.user.value_objects.email import Email


class UserRepository(ABC):
    """Repository interface for User aggregates."""

    @abstractmethod
    async def find_by_id(self, user_id: UUID) -> Optional[User]:
        """Find a user by their ID."""

    @abstractmethod
    async def find_by_email(self, email: Union[str, Email]) -> Optional[User]:
        """Find a user by their (normalized) email address."""

    @abstractmethod
    async def save(self, user: User) -> User:
        """Persist a user and return the stored aggregate.

        Raises
        ------
        StorageConflictError
            If the email is already bound to another user
        StorageError
            On any other storage failure
        """

    @abstractmethod
    async def update_user_password(self, user_id: UUID, password_hash: str) -> None:
        """Replace the password hash of a user.

        Raises
        ------
        UserNotFoundError
            If no user has the given ID
        StorageError
            On any other storage failure
        """
