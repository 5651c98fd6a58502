"""Tests for the User aggregate."""

from datetime import datetime, timezone
from uuid import uuid4

import pytest

from warden_identity.domain.user import Email, InvalidEmailError, User


class TestUserCreate:
    def test_create_generates_id_and_timestamps(self):
        user = User.create("a@b.com", "hash")

        assert user.id is not None
        assert user.created_at.tzinfo is not None
        assert user.updated_at.tzinfo is not None

    def test_create_normalizes_email(self):
        user = User.create(" A@B.com ", "hash")

        assert user.email == "a@b.com"
        assert user.email_obj == Email("a@b.com")

    def test_create_defaults_to_unverified(self):
        assert User.create("a@b.com", "hash").is_email_verified is False

    def test_create_verified(self):
        user = User.create("a@b.com", "hash", is_email_verified=True)

        assert user.is_email_verified is True

    def test_create_rejects_invalid_email(self):
        with pytest.raises(InvalidEmailError):
            User.create("invalid", "hash")

    def test_ids_are_unique(self):
        assert User.create("a@b.com", "h").id != User.create("a@b.com", "h").id


class TestUserReconstitute:
    def test_reconstitute_keeps_all_fields(self):
        user_id = uuid4()
        created = datetime(2023, 1, 1, tzinfo=timezone.utc)
        updated = datetime(2023, 6, 1, tzinfo=timezone.utc)

        user = User.reconstitute(
            id=user_id,
            email="a@b.com",
            password_hash="stored-hash",
            is_email_verified=True,
            created_at=created,
            updated_at=updated,
        )

        assert user.id == user_id
        assert user.password_hash == "stored-hash"
        assert user.is_email_verified is True
        assert user.created_at == created
        assert user.updated_at == updated


class TestUserEquality:
    def test_equal_by_id(self):
        user = User.create("a@b.com", "hash")
        same = User.reconstitute(
            id=user.id,
            email="other@b.com",
            password_hash="other",
            is_email_verified=False,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )

        assert user == same
        assert hash(user) == hash(same)

    def test_not_equal_to_other_types(self):
        assert User.create("a@b.com", "hash") != "a@b.com"

    def test_repr_hides_password_hash(self):
        user = User.create("a@b.com", "secret-hash")

        assert "secret-hash" not in repr(user)
