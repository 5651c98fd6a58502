"""Email value object.

Provides validated, normalized email addresses for user identification.
"""

import re
from dataclasses import dataclass

from warden_identity.domain.user.exceptions import InvalidEmailError

# local@domain.tld, no whitespace, exactly one "@"
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def normalize_email(value: str) -> str:
    """Trim and lower-case an address without validating it."""
    return value.strip().lower()


@dataclass(frozen=True)
class Email:
    """Value object representing a validated email address."""

    value: str

    def __post_init__(self) -> None:
        if not self.value:
            msg = "Email cannot be empty."
            raise InvalidEmailError(msg)

        normalized = normalize_email(self.value)

        if not EMAIL_PATTERN.match(normalized):
            raise InvalidEmailError

        # Replace value with normalized version (frozen dataclass workaround)
        object.__setattr__(self, "value", normalized)

    @classmethod
    def is_valid(cls, value: str) -> bool:
        return bool(value) and EMAIL_PATTERN.match(normalize_email(value)) is not None

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"Email('{self.value}')"
