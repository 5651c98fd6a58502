"""SQLAlchemy implementation of UserRepository."""

import logging
from typing import Union
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from warden_auth.time import utc_now
from warden_identity.domain.user import (
    Email,
    User,
    UserNotFoundError,
    UserRepository,
    normalize_email,
)
from warden_identity.exceptions import StorageConflictError, StorageError
from warden_identity.infrastructure.persistence.sqlalchemy.models import UserModel

logger = logging.getLogger(__name__)


class UserRepositorySQLAlchemy(UserRepository):
    """SQLAlchemy implementation of the UserRepository interface.

    Writes are flushed, not committed; the caller owns the transaction.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_id(self, user_id: UUID) -> User | None:
        model = await self._find_model_by_id(user_id)

        if model is None:
            return None

        return self._map_to_domain(model)

    async def find_by_email(self, email: Union[str, Email]) -> User | None:
        email_value = email.value if isinstance(email, Email) else normalize_email(email)

        stmt = select(UserModel).where(UserModel.email == email_value)
        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as e:
            msg = "Failed to look up user by email"
            raise StorageError(msg) from e
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return self._map_to_domain(model)

    async def save(self, user: User) -> User:
        try:
            existing = await self._find_model_by_id(user.id)
            if existing:
                self._update_model(existing, user)
                logger.debug("Updated user: %s", user.id)
            else:
                self._session.add(self._map_to_model(user))
                logger.info("Created user: %s (email: %s)", user.id, user.email)

            await self._session.flush()
        except IntegrityError as e:
            msg = f"User with email {user.email} already exists"
            raise StorageConflictError(msg) from e
        except SQLAlchemyError as e:
            msg = "Failed to save user"
            raise StorageError(msg) from e

        return user

    async def update_user_password(self, user_id: UUID, password_hash: str) -> None:
        stmt = (
            update(UserModel)
            .where(UserModel.id == user_id)
            .values(password_hash=password_hash, updated_at=utc_now())
        )
        try:
            result = await self._session.execute(stmt)
            await self._session.flush()
        except SQLAlchemyError as e:
            msg = "Failed to update user password"
            raise StorageError(msg) from e

        if result.rowcount == 0:
            raise UserNotFoundError(str(user_id))

        logger.debug("Updated password hash of user: %s", user_id)

    async def _find_model_by_id(self, user_id: UUID) -> UserModel | None:
        stmt = select(UserModel).where(UserModel.id == user_id)
        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as e:
            msg = "Failed to look up user by id"
            raise StorageError(msg) from e
        return result.scalar_one_or_none()

    def _map_to_domain(self, model: UserModel) -> User:
        return User.reconstitute(
            id=model.id,
            email=model.email,
            password_hash=model.password_hash,
            is_email_verified=model.is_email_verified,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _map_to_model(self, user: User) -> UserModel:
        return UserModel(
            id=user.id,
            email=user.email,
            password_hash=user.password_hash,
            is_email_verified=user.is_email_verified,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )

    def _update_model(self, model: UserModel, user: User) -> None:
        model.password_hash = user.password_hash
        model.is_email_verified = user.is_email_verified
        model.updated_at = user.updated_at
