"""Root pytest configuration.

Test Structure:
    tests/
    ├── warden_auth/           # Password hashing and token codec
    ├── warden_config/         # Settings validation
    ├── warden_identity/       # Identity services, domain and adapters
    │   ├── unit/
    │   └── integration/       # SQLAlchemy adapter on SQLite
    ├── integration/api/       # HTTP layer through FastAPI's TestClient
    └── unit/presentation/     # CLI and exception mapping
"""

from pathlib import Path
from typing import Any, Callable

import pytest
from dotenv import load_dotenv
from pydantic import SecretStr

from warden_config import Settings, clear_settings_cache

PROJECT_ROOT = Path(__file__).resolve().parents[1]

# Load a local test env file if one exists (same discovery as development)
if (PROJECT_ROOT / "config" / ".env.test").exists():
    load_dotenv(PROJECT_ROOT / "config" / ".env.test")

TEST_SESSION_SECRET = "test-session-secret"  # noqa: S105
TEST_RESET_SECRET = "test-password-reset-secret"  # noqa: S105
TEST_INVITATION_SECRET = "test-invitation-secret"  # noqa: S105
TEST_MASTER_TOKEN = "test-master-registration-token"  # noqa: S105


def build_test_settings(**overrides: Any) -> Settings:
    """Create Settings with valid test values for every required field."""
    values: dict[str, Any] = {
        "session_token_secret": SecretStr(TEST_SESSION_SECRET),
        "session_token_ttl_seconds": 3600,
        "password_reset_token_secret": SecretStr(TEST_RESET_SECRET),
        "password_reset_token_ttl_seconds": 900,
        "invitation_token_secret": SecretStr(TEST_INVITATION_SECRET),
        "invitation_token_ttl_seconds": 86400,
        "registration_master_token": SecretStr(TEST_MASTER_TOKEN),
        "notifications_base_url": "http://notifications.test",
        "password_hash_rounds": 4,
        "database_url": "sqlite+aiosqlite:///:memory:",
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def settings_factory() -> Callable[..., Settings]:
    return build_test_settings


@pytest.fixture
def test_settings() -> Settings:
    return build_test_settings()


@pytest.fixture(scope="session", autouse=True)
def configure_app_settings():
    """Make sure no cached settings leak between test sessions."""
    clear_settings_cache()
    yield
    clear_settings_cache()
