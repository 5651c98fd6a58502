"""Authentication exceptions.

These exceptions are raised by the warden_auth package and by the
identity services built on top of it. They reach the HTTP layer untouched,
which is the only place that maps them to status codes.
"""


class AuthError(Exception):
    """Base exception for all authentication errors."""

    def __init__(self, message: str = "Authentication error"):
        self.message = message
        super().__init__(self.message)


class InvalidTokenError(AuthError):
    """Raised when a token has a bad signature, wrong purpose or is malformed."""

    def __init__(self, message: str = "Invalid token"):
        super().__init__(message)


class TokenExpiredError(InvalidTokenError):
    """Raised when a correctly signed token is past its expiry."""

    def __init__(self, message: str = "Token has expired"):
        super().__init__(message)


class InvalidCredentialFormatError(AuthError):
    """Raised when an email or password fails local format validation."""

    def __init__(self, message: str = "Invalid credential format"):
        super().__init__(message)


class WeakPasswordError(InvalidCredentialFormatError):
    """Raised when a password doesn't meet strength requirements."""

    def __init__(self, message: str = "Password does not meet requirements"):
        super().__init__(message)


class InvalidCredentialsError(AuthError):
    """Raised when email or password is incorrect during login.

    Unknown email and wrong password produce the same message so that the
    response does not reveal whether an account exists.
    """

    def __init__(self, message: str = "Invalid credentials."):
        super().__init__(message)
