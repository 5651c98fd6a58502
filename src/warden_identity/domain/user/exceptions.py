"""User domain exceptions.

Custom exceptions for the user domain, used for validation
and business rule violations.
"""

from warden_auth.exceptions import InvalidCredentialFormatError


class InvalidEmailError(InvalidCredentialFormatError):
    """Raised when email format is invalid."""

    def __init__(self, message: str = "Invalid email.") -> None:
        super().__init__(message)


class EmailAlreadyUsedError(Exception):
    """Email already bound to an existing user."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(f"Email is already being used: {email}")


class UserNotFoundError(Exception):
    """User not found."""

    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        super().__init__(f"User not found: {identifier}")
