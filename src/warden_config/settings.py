"""Application settings loaded from environment variables.

Configuration file discovery (in priority order):
1. OS environment variables (always highest priority)
2. WARDEN_ENV_FILE environment variable (path to .env file)
3. config/.env.dev - local development
4. config/.env - production/Docker

Uses pydantic-settings for automatic type coercion and validation.
Token secrets, token lifetimes, the master registration token and the
notification service URL have no defaults: a missing value makes
``Settings()`` fail, which aborts startup.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

from pydantic import Field, SecretStr, computed_field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _find_project_root() -> Path:
    """Find the project root directory."""
    current = Path(__file__).resolve().parent

    for parent in [current, *current.parents]:
        if (parent / "config").is_dir():
            return parent
        if (parent / ".git").is_dir():
            return parent
        if parent == Path("/app"):
            return parent

    return Path(__file__).resolve().parents[2]


def get_config_dir() -> Path:
    """Get the config directory path."""
    return _find_project_root() / "config"


def _resolve_env_file_path() -> Path | None:
    """Resolve the .env file path.

    Priority:
    1. WARDEN_ENV_FILE env var (full path)
    2. config/.env.dev (local development)
    3. config/.env (production)
    """
    env_file_path = os.environ.get("WARDEN_ENV_FILE")
    if env_file_path:
        path = Path(env_file_path)
        if not path.is_absolute():
            path = _find_project_root() / path
        if path.exists():
            return path

    config_dir = get_config_dir()

    dev_env = config_dir / ".env.dev"
    if dev_env.exists():
        return dev_env

    prod_env = config_dir / ".env"
    if prod_env.exists():
        return prod_env

    return None


class Settings(BaseSettings):
    """Application configuration loaded from environment variables.

    Values are loaded from:
    1. OS environment variables (highest priority)
    2. .env file (config/.env.dev or config/.env)
    3. Default values
    """

    model_config = SettingsConfigDict(
        env_file=_resolve_env_file_path(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Token signing (MUST be set - one secret and lifetime per token purpose)
    session_token_secret: SecretStr
    session_token_ttl_seconds: int = Field(gt=0)
    password_reset_token_secret: SecretStr
    password_reset_token_ttl_seconds: int = Field(gt=0)
    invitation_token_secret: SecretStr
    invitation_token_ttl_seconds: int = Field(gt=0)

    # Registers users without an invitation. Must be kept secret.
    registration_master_token: SecretStr

    # Notifications microservice (NOTIFICATIONS_ prefix)
    notifications_base_url: str
    notifications_send_path: str = "/v1/notifications"
    notifications_sender: str = "no-reply@warden.local"
    notifications_timeout: float = 10.0
    notifications_enabled: bool = True

    # Application
    app_name: str = "Warden"

    # Database
    database_url: str = "sqlite+aiosqlite:///./data/warden.db"

    # API (API_ prefix)
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_debug: bool = False
    api_cors_origins: str = ""  # Empty = no CORS allowed

    @field_validator("api_cors_origins", mode="before")
    @classmethod
    def _validate_cors_origins(cls, v: Any) -> str:
        """Ensure cors_origins is stored as comma-separated string."""
        if isinstance(v, list):
            return ",".join(v)
        return str(v) if v else ""

    # Registration
    registration_mode: Literal["open", "invitation_only"] = "open"

    # Password hashing
    password_hash_rounds: int = Field(default=12, ge=4, le=31)

    # Logging (LOG_ prefix)
    log_level: str = "INFO"

    @model_validator(mode="after")
    def _validate_distinct_token_secrets(self) -> Settings:
        """Reject configurations that reuse a signing secret across purposes."""
        secrets = [
            self.session_token_secret.get_secret_value(),
            self.password_reset_token_secret.get_secret_value(),
            self.invitation_token_secret.get_secret_value(),
        ]
        if any(not secret for secret in secrets):
            msg = "Token signing secrets cannot be empty"
            raise ValueError(msg)
        if len(set(secrets)) != len(secrets):
            msg = "Session, password reset and invitation secrets must differ"
            raise ValueError(msg)
        return self

    @computed_field  # type: ignore[prop-decorator]
    @property
    def cors_origins(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        return [o.strip() for o in self.api_cors_origins.split(",") if o.strip()]

    @property
    def requires_invitation(self) -> bool:
        return self.registration_mode == "invitation_only"


@lru_cache()
def get_settings() -> Settings:
    """Return cached application settings.

    Required fields must be provided via environment variables or .env file.
    """
    return Settings()  # type: ignore[call-arg]  # pydantic-settings loads from env


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for tests)."""
    get_settings.cache_clear()
