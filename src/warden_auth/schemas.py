"""Token schemas and data structures.

These are simple data classes used for transferring token data
between components.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from warden_auth.exceptions import InvalidTokenError


class TokenPurpose(str, Enum):
    """Kind of action a token authorizes."""

    SESSION = "session"
    PASSWORD_RESET = "password-reset"
    INVITATION = "invitation"
    GENERIC = "generic"


@dataclass(frozen=True)
class TokenPolicy:
    """Signing secret and lifetime for one token purpose.

    Attributes
    ----------
    purpose
        The purpose tokens signed under this policy are bound to
    secret
        HMAC secret, never shared with another purpose
    ttl
        Lifetime of issued tokens
    """

    purpose: TokenPurpose
    secret: str = field(repr=False)
    ttl: timedelta

    def __post_init__(self) -> None:
        if not self.secret:
            msg = f"Signing secret for {self.purpose.value} tokens cannot be empty"
            raise ValueError(msg)
        if self.ttl <= timedelta(0):
            msg = f"Lifetime of {self.purpose.value} tokens must be positive"
            raise ValueError(msg)


@dataclass(frozen=True)
class TokenPolicies:
    """The complete set of per-purpose policies used by the services."""

    session: TokenPolicy
    password_reset: TokenPolicy
    invitation: TokenPolicy

    def __post_init__(self) -> None:
        secrets = {self.session.secret, self.password_reset.secret, self.invitation.secret}
        if len(secrets) != 3:
            msg = "Each token purpose requires its own signing secret"
            raise ValueError(msg)


@dataclass(frozen=True)
class TokenPayload:
    """Verified token contents.

    Attributes
    ----------
    purpose
        Purpose claim embedded at issuance
    claims
        Caller-supplied claims (reserved claims removed)
    issued_at
        Issuance timestamp
    expires_at
        Expiration timestamp
    """

    purpose: TokenPurpose
    claims: Mapping[str, str]
    issued_at: datetime
    expires_at: datetime

    def __post_init__(self) -> None:
        object.__setattr__(self, "claims", MappingProxyType(dict(self.claims)))

    def claim(self, name: str) -> str:
        """Return a required claim or raise InvalidTokenError."""
        value = self.claims.get(name)
        if not value:
            msg = f"Token is missing the '{name}' claim"
            raise InvalidTokenError(msg)
        return value

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at
