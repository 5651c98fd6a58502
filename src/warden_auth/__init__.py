"""Warden Auth - Generic credential and token infrastructure.

This package is independent of the user domain. It handles:
- Password hashing (bcrypt)
- Purpose-bound token creation and verification (JWT, one secret per purpose)

Architecture:
    warden_auth/
    ├── services/           # Pure logic (password hashing, tokens)
    ├── schemas.py          # Data classes
    └── exceptions.py       # Auth exceptions

Usage:
    from warden_auth import PasswordHashingService, TokenCodec, TokenPurpose
"""

from warden_auth.exceptions import (
    AuthError,
    InvalidCredentialFormatError,
    InvalidCredentialsError,
    InvalidTokenError,
    TokenExpiredError,
    WeakPasswordError,
)
from warden_auth.schemas import TokenPayload, TokenPolicies, TokenPolicy, TokenPurpose
from warden_auth.services import PasswordHashingService, TokenCodec

__all__ = [
    # Services
    "PasswordHashingService",
    "TokenCodec",
    # Schemas
    "TokenPayload",
    "TokenPolicies",
    "TokenPolicy",
    "TokenPurpose",
    # Exceptions
    "AuthError",
    "InvalidCredentialFormatError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "TokenExpiredError",
    "WeakPasswordError",
]
