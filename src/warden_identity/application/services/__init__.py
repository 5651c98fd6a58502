"""Application services for identity management."""

from warden_identity.application.services.credential_service import (
    CredentialService,
)
from warden_identity.application.services.session_service import SessionService

__all__ = ["CredentialService", "SessionService"]
