"""Session strategies: how credentials become a session artifact."""

from warden_identity.application.session.session_strategy import SessionStrategy
from warden_identity.application.session.token_session_strategy import (
    INVALID_CREDENTIALS_MESSAGE,
    TokenSessionStrategy,
)

__all__ = [
    "INVALID_CREDENTIALS_MESSAGE",
    "SessionStrategy",
    "TokenSessionStrategy",
]
