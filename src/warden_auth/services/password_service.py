"""Password hashing service using bcrypt.

Hashes and checks passwords, enforces the password rule (8 characters to
72 UTF-8 bytes) and tells whether a stored hash was made with an outdated
work factor.
"""

import bcrypt

from warden_auth.exceptions import WeakPasswordError


def _encode(password: str) -> bytes:
    return password.encode("utf-8")


class PasswordHashingService:
    """bcrypt hashing with a configurable work factor.

    Passwords longer than bcrypt's 72-byte input are refused when hashing
    and never match when verifying, whatever the installed bcrypt version
    does with them.

    Examples
    --------
    >>> service = PasswordHashingService(rounds=4)
    >>> password_hash = service.hash("longenough1")
    >>> service.verify("longenough1", password_hash)
    True
    >>> service.verify("wrong_password", password_hash)
    False
    """

    MIN_LENGTH = 8
    MAX_BYTES = 72

    def __init__(self, rounds: int = 12):
        """
        Parameters
        ----------
        rounds
            bcrypt cost factor (log2 of the key expansion iterations)
        """
        self._rounds = rounds

    @property
    def rounds(self) -> int:
        return self._rounds

    def hash(self, password: str) -> str:
        """Hash a password that satisfies the password rule.

        Raises
        ------
        WeakPasswordError
            If the password is empty, too short or too long
        """
        self.validate_strength(password)
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(_encode(password), salt).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Check a candidate password against a stored hash.

        Over-long candidates and malformed hashes never match.
        """
        candidate = _encode(password)
        if len(candidate) > self.MAX_BYTES:
            return False

        try:
            return bcrypt.checkpw(candidate, password_hash.encode("utf-8"))
        except (ValueError, TypeError, AttributeError):
            # Not a bcrypt hash
            return False

    def validate_strength(self, password: str) -> None:
        """Enforce the password rule.

        Raises
        ------
        WeakPasswordError
            If the password is empty, shorter than MIN_LENGTH characters or
            longer than MAX_BYTES once UTF-8 encoded
        """
        if not password:
            msg = "Password cannot be empty"
            raise WeakPasswordError(msg)

        if len(password) < self.MIN_LENGTH:
            msg = f"Password must be at least {self.MIN_LENGTH} characters long."
            raise WeakPasswordError(msg)

        if len(_encode(password)) > self.MAX_BYTES:
            msg = f"Password cannot exceed {self.MAX_BYTES} bytes"
            raise WeakPasswordError(msg)

    def needs_rehash(self, password_hash: str) -> bool:
        """Whether a stored hash uses another cost factor than configured.

        bcrypt hashes look like ``$2b$<cost>$<salt+digest>``. Anything that
        does not parse counts as outdated.
        """
        parts = password_hash.split("$")
        if len(parts) != 4 or not parts[2].isdigit():
            return True
        return int(parts[2]) != self._rounds
