"""User domain manages user identity only.

This domain handles:
- User aggregate (identity: id, email, password hash)
- Email value object and format rules
- The repository contract used to look users up and persist them
"""

from warden_identity.domain.user.aggregates import User
from warden_identity.domain.user.exceptions import (
    EmailAlreadyUsedError,
    InvalidEmailError,
    UserNotFoundError,
)
from warden_identity.domain.user.repositories import UserRepository
from warden_identity.domain.user.value_objects import Email, normalize_email

__all__ = [
    "Email",
    "EmailAlreadyUsedError",
    "InvalidEmailError",
    "User",
    "UserNotFoundError",
    "UserRepository",
    "normalize_email",
]
