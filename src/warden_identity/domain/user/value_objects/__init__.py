from warden_identity.domain.user.value_objects.email import (
    EMAIL_PATTERN,
    Email,
    normalize_email,
)

__all__ = ["EMAIL_PATTERN", "Email", "normalize_email"]
