"""Pytest fixtures for API integration tests."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from warden.presentation.api.app import API_V1_PREFIX, create_app
from warden.presentation.api.dependencies import get_db_session, get_notification_sender
from warden_identity.application.ports import NotificationSender
from warden_identity.infrastructure.persistence.sqlalchemy import Base


class RecordingNotificationSender(NotificationSender):
    """Keeps every notification instead of delivering it."""

    def __init__(self) -> None:
        self.sent: list[tuple] = []
        self.error: Exception | None = None

    async def send(self, kind, destinations, params) -> None:
        if self.error is not None:
            raise self.error
        self.sent.append((kind, frozenset(destinations), dict(params)))

    @property
    def last_token(self) -> str:
        return self.sent[-1][2]["token"]


@pytest.fixture
def api_v1_prefix() -> str:
    """Get the API v1 prefix for building URLs."""
    return API_V1_PREFIX


@pytest.fixture
def auth_prefix(api_v1_prefix) -> str:
    return f"{api_v1_prefix}/auth"


@pytest.fixture
def api_settings(settings_factory):
    """Test API settings with debug enabled."""
    return settings_factory(
        api_debug=True,
        api_cors_origins="http://localhost:3000",
    )


@pytest.fixture
def database_path(tmp_path):
    """Create an SQLite database file with all tables."""
    path = tmp_path / "warden.db"
    sync_engine = create_engine(f"sqlite:///{path}")
    Base.metadata.create_all(sync_engine)
    sync_engine.dispose()
    return path


@pytest.fixture
def notification_sender() -> RecordingNotificationSender:
    return RecordingNotificationSender()


def build_client(settings, database_path, notification_sender) -> TestClient:
    """Create a test client backed by the SQLite database at database_path."""
    app = create_app(settings=settings)

    # NullPool: every request opens its own connection in its own event loop
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{database_path}",
        poolclass=NullPool,
    )
    test_session_maker = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async def override_get_db_session():
        async with test_session_maker() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session
    app.dependency_overrides[get_notification_sender] = lambda: notification_sender

    return TestClient(app)


@pytest.fixture
def client_factory(database_path, notification_sender):
    """Build a test client for custom settings, sharing the test database."""

    def _build(settings) -> TestClient:
        return build_client(settings, database_path, notification_sender)

    return _build


@pytest.fixture
def test_client(api_settings, client_factory) -> TestClient:
    return client_factory(api_settings)


@pytest.fixture
def registered_user_data() -> dict:
    """Test user registration data."""
    return {
        "email": "test@example.com",
        "password": "SecurePassword123!",
    }


@pytest.fixture
def auth_headers(test_client, registered_user_data, auth_prefix) -> dict:
    """Get auth headers for a registered user."""
    response = test_client.post(f"{auth_prefix}/register", json=registered_user_data)
    assert response.status_code == 201

    response = test_client.post(f"{auth_prefix}/login", json=registered_user_data)
    assert response.status_code == 200

    token = response.json()["token"]
    return {"Authorization": f"Bearer {token}"}
