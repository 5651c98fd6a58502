"""Unit tests for Settings validation."""

import pytest
from pydantic import SecretStr, ValidationError

from warden_config import Settings

REQUIRED_ENV = {
    "SESSION_TOKEN_SECRET": "env-session-secret",
    "SESSION_TOKEN_TTL_SECONDS": "3600",
    "PASSWORD_RESET_TOKEN_SECRET": "env-reset-secret",
    "PASSWORD_RESET_TOKEN_TTL_SECONDS": "900",
    "INVITATION_TOKEN_SECRET": "env-invitation-secret",
    "INVITATION_TOKEN_TTL_SECONDS": "86400",
    "REGISTRATION_MASTER_TOKEN": "env-master-token",
    "NOTIFICATIONS_BASE_URL": "http://notifications.local",
}


@pytest.fixture
def required_env(monkeypatch):
    for key, value in REQUIRED_ENV.items():
        monkeypatch.setenv(key, value)
    return REQUIRED_ENV


class TestSettingsFromEnvironment:
    def test_loads_required_values(self, required_env):
        settings = Settings(_env_file=None)

        assert settings.session_token_secret.get_secret_value() == "env-session-secret"
        assert settings.password_reset_token_ttl_seconds == 900
        assert settings.notifications_base_url == "http://notifications.local"

    def test_defaults(self, required_env):
        settings = Settings(_env_file=None)

        assert settings.registration_mode == "open"
        assert settings.requires_invitation is False
        assert settings.password_hash_rounds == 12
        assert settings.notifications_enabled is True
        assert settings.cors_origins == []

    @pytest.mark.parametrize("missing", sorted(REQUIRED_ENV))
    def test_missing_required_value_fails(self, required_env, monkeypatch, missing):
        monkeypatch.delenv(missing)

        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_secrets_are_masked(self, required_env):
        settings = Settings(_env_file=None)

        assert "env-session-secret" not in repr(settings)


class TestSettingsValidation:
    def test_valid(self, settings_factory):
        settings = settings_factory()

        assert settings.session_token_ttl_seconds == 3600

    def test_shared_secret_rejected(self, settings_factory):
        with pytest.raises(ValidationError, match="must differ"):
            settings_factory(invitation_token_secret=SecretStr("test-session-secret"))

    def test_empty_secret_rejected(self, settings_factory):
        with pytest.raises(ValidationError, match="cannot be empty"):
            settings_factory(session_token_secret=SecretStr(""))

    @pytest.mark.parametrize("ttl", [0, -5])
    def test_non_positive_ttl_rejected(self, settings_factory, ttl):
        with pytest.raises(ValidationError):
            settings_factory(session_token_ttl_seconds=ttl)

    def test_invitation_only_mode(self, settings_factory):
        settings = settings_factory(registration_mode="invitation_only")

        assert settings.requires_invitation is True

    def test_unknown_registration_mode_rejected(self, settings_factory):
        with pytest.raises(ValidationError):
            settings_factory(registration_mode="closed")

    def test_cors_origins_parsed(self, settings_factory):
        settings = settings_factory(
            api_cors_origins="http://a.test, http://b.test,",
        )

        assert settings.cors_origins == ["http://a.test", "http://b.test"]

    def test_cors_origins_from_list(self, settings_factory):
        settings = settings_factory(api_cors_origins=["http://a.test", "http://b.test"])

        assert settings.api_cors_origins == "http://a.test,http://b.test"
