"""
Pytest configuration for warden_identity tests.

Provides an in-memory user repository, a recording notification sender,
a controllable clock and token policies with distinct secrets.
"""

from datetime import datetime, timedelta, timezone
from uuid import UUID

import pytest

from warden_auth import (
    PasswordHashingService,
    TokenCodec,
    TokenPolicies,
    TokenPolicy,
    TokenPurpose,
)
from warden_identity.application.ports import NotificationKind, NotificationSender
from warden_identity.domain.user import User, UserNotFoundError, UserRepository
from warden_identity.exceptions import StorageConflictError

START = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

SESSION_TTL = timedelta(hours=1)
RESET_TTL = timedelta(minutes=15)
INVITATION_TTL = timedelta(days=1)
MASTER_TOKEN = "master-registration-token"  # noqa: S105


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, now: datetime = START):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


class InMemoryUserRepository(UserRepository):
    """Dict-backed repository enforcing the unique email constraint."""

    def __init__(self) -> None:
        self.users: dict[UUID, User] = {}

    async def find_by_id(self, user_id: UUID) -> User | None:
        return self.users.get(user_id)

    async def find_by_email(self, email) -> User | None:
        value = str(email).strip().lower()
        return next((u for u in self.users.values() if u.email == value), None)

    async def save(self, user: User) -> User:
        existing = await self.find_by_email(user.email)
        if existing is not None and existing.id != user.id:
            raise StorageConflictError
        self.users[user.id] = user
        return user

    async def update_user_password(self, user_id: UUID, password_hash: str) -> None:
        user = self.users.get(user_id)
        if user is None:
            raise UserNotFoundError(str(user_id))
        self.users[user_id] = User.reconstitute(
            id=user.id,
            email=user.email,
            password_hash=password_hash,
            is_email_verified=user.is_email_verified,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class RecordingNotificationSender(NotificationSender):
    """Keeps every notification instead of delivering it."""

    def __init__(self) -> None:
        self.sent: list[tuple[NotificationKind, frozenset[str], dict[str, str]]] = []

    async def send(self, kind, destinations, params) -> None:
        self.sent.append((kind, frozenset(destinations), dict(params)))

    @property
    def last_token(self) -> str:
        return self.sent[-1][2]["token"]


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def token_codec(clock) -> TokenCodec:
    return TokenCodec(clock=clock)


@pytest.fixture
def password_service() -> PasswordHashingService:
    # Minimum work factor keeps the tests fast
    return PasswordHashingService(rounds=4)


@pytest.fixture
def token_policies() -> TokenPolicies:
    return TokenPolicies(
        session=TokenPolicy(TokenPurpose.SESSION, "session-secret", SESSION_TTL),
        password_reset=TokenPolicy(
            TokenPurpose.PASSWORD_RESET,
            "password-reset-secret",
            RESET_TTL,
        ),
        invitation=TokenPolicy(
            TokenPurpose.INVITATION,
            "invitation-secret",
            INVITATION_TTL,
        ),
    )


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def notification_sender() -> RecordingNotificationSender:
    return RecordingNotificationSender()


@pytest.fixture
def master_token() -> str:
    return MASTER_TOKEN
