"""Composition root for the identity services.

Leaf components (password hashing, token codec) are built first, then the
services that depend on them. Callers supply the infrastructure adapters
(user repository, notification sender), which keeps this module free of
any database or HTTP concerns.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Callable

from warden_auth import (
    PasswordHashingService,
    TokenCodec,
    TokenPolicies,
    TokenPolicy,
    TokenPurpose,
)
from warden_auth.time import utc_now
from warden_identity.application.middleware import AuthMiddleware
from warden_identity.application.services import CredentialService, SessionService
from warden_identity.application.session import TokenSessionStrategy

if TYPE_CHECKING:
    from warden_config.settings import Settings
    from warden_identity.application.ports import NotificationSender
    from warden_identity.domain.user import UserRepository


@dataclass(frozen=True)
class IdentityServices:
    credential_service: CredentialService
    session_service: SessionService
    auth_middleware: AuthMiddleware


def token_policies_from_settings(settings: Settings) -> TokenPolicies:
    """Build the per-purpose token policies from configuration."""
    return TokenPolicies(
        session=TokenPolicy(
            purpose=TokenPurpose.SESSION,
            secret=settings.session_token_secret.get_secret_value(),
            ttl=timedelta(seconds=settings.session_token_ttl_seconds),
        ),
        password_reset=TokenPolicy(
            purpose=TokenPurpose.PASSWORD_RESET,
            secret=settings.password_reset_token_secret.get_secret_value(),
            ttl=timedelta(seconds=settings.password_reset_token_ttl_seconds),
        ),
        invitation=TokenPolicy(
            purpose=TokenPurpose.INVITATION,
            secret=settings.invitation_token_secret.get_secret_value(),
            ttl=timedelta(seconds=settings.invitation_token_ttl_seconds),
        ),
    )


def build_identity_services(  # noqa: PLR0913
    settings: Settings,
    user_repository: UserRepository,
    notification_sender: NotificationSender,
    clock: Callable[[], datetime] = utc_now,
    password_service: PasswordHashingService | None = None,
    token_codec: TokenCodec | None = None,
) -> IdentityServices:
    """Wire the identity services for one unit of work.

    Parameters
    ----------
    settings
        Validated application settings
    user_repository
        Repository bound to the current database session
    notification_sender
        Adapter handing notifications to the delivery service
    clock
        Time source for token issuance and expiry checks
    password_service, token_codec
        Shared leaf components; built from settings when omitted

    Returns
    -------
    IdentityServices holding the credential and session services and the
    request authenticator
    """
    policies = token_policies_from_settings(settings)
    password_service = password_service or PasswordHashingService(
        rounds=settings.password_hash_rounds,
    )
    token_codec = token_codec or TokenCodec(clock=clock)

    strategy = TokenSessionStrategy(
        password_service=password_service,
        token_codec=token_codec,
        session_policy=policies.session,
    )
    session_service = SessionService(strategy=strategy, user_repository=user_repository)

    credential_service = CredentialService(
        user_repository=user_repository,
        password_service=password_service,
        token_codec=token_codec,
        notification_sender=notification_sender,
        token_policies=policies,
        master_registration_token=settings.registration_master_token.get_secret_value(),
        require_invitation=settings.requires_invitation,
    )

    return IdentityServices(
        credential_service=credential_service,
        session_service=session_service,
        auth_middleware=AuthMiddleware(session_service),
    )
