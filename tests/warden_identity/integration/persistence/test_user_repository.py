"""Integration tests for UserRepositorySQLAlchemy on SQLite."""

from uuid import UUID, uuid4

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from warden_identity.domain.user import Email, User, UserNotFoundError
from warden_identity.exceptions import StorageConflictError, StorageError
from warden_identity.infrastructure.persistence.sqlalchemy import (
    UserRepositorySQLAlchemy,
)

TEST_EMAIL = "test@example.com"


@pytest.fixture
def user_repo(db_session):
    """Create UserRepository instance with the test session."""
    return UserRepositorySQLAlchemy(db_session)


@pytest.mark.integration
class TestUserRepositorySQLAlchemy:
    """Integration tests for UserRepositorySQLAlchemy."""

    @pytest.mark.asyncio
    async def test_save_and_find_by_id(self, user_repo):
        user = User.create(TEST_EMAIL, "hash", is_email_verified=True)

        saved = await user_repo.save(user)
        found = await user_repo.find_by_id(user.id)

        assert saved is user
        assert found is not None
        assert found.id == user.id
        assert isinstance(found.id, UUID)
        assert found.email == TEST_EMAIL
        assert found.password_hash == "hash"
        assert found.is_email_verified is True

    @pytest.mark.asyncio
    async def test_find_by_id_not_found(self, user_repo):
        assert await user_repo.find_by_id(uuid4()) is None

    @pytest.mark.asyncio
    async def test_find_by_email(self, user_repo):
        await user_repo.save(User.create(TEST_EMAIL, "hash"))

        found = await user_repo.find_by_email(TEST_EMAIL)

        assert found is not None
        assert found.email == TEST_EMAIL

    @pytest.mark.asyncio
    async def test_find_by_email_case_insensitive(self, user_repo):
        await user_repo.save(User.create(TEST_EMAIL, "hash"))

        found = await user_repo.find_by_email(" TEST@EXAMPLE.COM")

        assert found is not None
        assert found.email == TEST_EMAIL

    @pytest.mark.asyncio
    async def test_find_by_email_value_object(self, user_repo):
        await user_repo.save(User.create(TEST_EMAIL, "hash"))

        assert await user_repo.find_by_email(Email(TEST_EMAIL)) is not None

    @pytest.mark.asyncio
    async def test_find_by_malformed_email_returns_none(self, user_repo):
        assert await user_repo.find_by_email("not-an-email") is None

    @pytest.mark.asyncio
    async def test_duplicate_email_is_storage_conflict(self, user_repo):
        """The unique constraint rejects the second writer."""
        await user_repo.save(User.create(TEST_EMAIL, "hash"))

        with pytest.raises(StorageConflictError) as exc_info:
            await user_repo.save(User.create(TEST_EMAIL, "other-hash"))

        assert isinstance(exc_info.value, StorageError)

    @pytest.mark.asyncio
    async def test_save_existing_updates(self, user_repo):
        user = User.create(TEST_EMAIL, "hash")
        await user_repo.save(user)

        verified = User.reconstitute(
            id=user.id,
            email=user.email,
            password_hash="new-hash",
            is_email_verified=True,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
        await user_repo.save(verified)
        found = await user_repo.find_by_id(user.id)

        assert found.password_hash == "new-hash"
        assert found.is_email_verified is True

    @pytest.mark.asyncio
    async def test_update_user_password(self, user_repo, db_session):
        user = User.create(TEST_EMAIL, "old-hash")
        await user_repo.save(user)

        await user_repo.update_user_password(user.id, "new-hash")
        db_session.expire_all()
        found = await user_repo.find_by_id(user.id)

        assert found.password_hash == "new-hash"

    @pytest.mark.asyncio
    async def test_update_password_unknown_user(self, user_repo):
        with pytest.raises(UserNotFoundError):
            await user_repo.update_user_password(uuid4(), "new-hash")

    @pytest.mark.asyncio
    async def test_committed_data_visible_in_new_session(self, async_engine, db_session):
        await UserRepositorySQLAlchemy(db_session).save(User.create(TEST_EMAIL, "hash"))
        await db_session.commit()

        session_maker = async_sessionmaker(async_engine, class_=AsyncSession)
        async with session_maker() as other_session:
            found = await UserRepositorySQLAlchemy(other_session).find_by_email(TEST_EMAIL)

        assert found is not None
