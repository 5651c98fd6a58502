"""Authentication services.

Provides password hashing and purpose-bound token management.
"""

from warden_auth.services.password_service import PasswordHashingService
from warden_auth.services.token_service import TokenCodec

__all__ = [
    "PasswordHashingService",
    "TokenCodec",
]
