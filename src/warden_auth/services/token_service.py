"""Purpose-bound token service.

Signs, verifies and decodes short-lived JWTs. Every token carries a
``purpose`` claim and is signed with the secret of that purpose, so a token
minted for one flow (e.g. password reset) never verifies as another
(e.g. session).
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Mapping

import jwt

from warden_auth.exceptions import InvalidTokenError, TokenExpiredError
from warden_auth.schemas import TokenPayload, TokenPolicy, TokenPurpose
from warden_auth.time import ensure_tz_aware, utc_now


class TokenCodec:
    """Service for token issuance and verification.

    Stateless: validity is fully determined by signature and expiry.
    Expiry is evaluated against the injected clock rather than PyJWT's
    internal time source.

    Examples
    --------
    >>> codec = TokenCodec()
    >>> token = codec.issue({"userId": "42"}, "secret", timedelta(hours=1))
    >>> codec.verify(token, "secret").claim("userId")
    '42'
    """

    ALGORITHM = "HS256"
    PURPOSE_CLAIM = "purpose"
    RESERVED_CLAIMS = frozenset({PURPOSE_CLAIM, "iat", "exp"})

    def __init__(self, clock: Callable[[], datetime] = utc_now):
        """Initialize the codec.

        Parameters
        ----------
        clock
            Returns the current time. Must be timezone-aware.
        """
        self._clock = clock

    def now(self) -> datetime:
        return ensure_tz_aware(self._clock())

    def issue(
        self,
        claims: Mapping[str, str],
        secret: str,
        ttl: timedelta,
        purpose: TokenPurpose = TokenPurpose.GENERIC,
    ) -> str:
        """Create a signed token.

        Parameters
        ----------
        claims
            Claims to embed (e.g. ``userId`` or ``email``)
        secret
            Signing secret of the token's purpose
        ttl
            Time until the token expires
        purpose
            Purpose the token is bound to

        Returns
        -------
        The encoded token string

        Raises
        ------
        ValueError
            If the secret is empty or a reserved claim is overridden
        """
        if not secret:
            msg = "Token signing secret cannot be empty"
            raise ValueError(msg)

        clashing = self.RESERVED_CLAIMS.intersection(claims)
        if clashing:
            msg = f"Reserved claims cannot be set by callers: {sorted(clashing)}"
            raise ValueError(msg)

        now = self.now()
        payload: dict[str, Any] = {
            **claims,
            self.PURPOSE_CLAIM: purpose.value,
            "iat": now,
            "exp": now + ttl,
        }

        return jwt.encode(payload, secret, algorithm=self.ALGORITHM)

    def issue_for(self, policy: TokenPolicy, claims: Mapping[str, str]) -> str:
        """Create a token under a purpose policy."""
        return self.issue(claims, policy.secret, policy.ttl, purpose=policy.purpose)

    def verify(
        self,
        token: str,
        secret: str,
        purpose: TokenPurpose | None = None,
    ) -> TokenPayload:
        """Verify the signature and expiry of a token and decode it.

        Parameters
        ----------
        token
            The token string to verify
        secret
            Secret the token must have been signed with
        purpose
            If given, the token's purpose claim must match it

        Returns
        -------
        TokenPayload containing the decoded data

        Raises
        ------
        TokenExpiredError
            If the token is correctly signed but past its expiry
        InvalidTokenError
            If the signature does not match or the token is malformed
        """
        if not isinstance(token, str) or not token:
            msg = "Token must be a non-empty string"
            raise InvalidTokenError(msg)

        try:
            payload = jwt.decode(
                token,
                secret,
                algorithms=[self.ALGORITHM],
                options={
                    "verify_exp": False,
                    "verify_iat": False,
                    "require": ["exp", "iat", self.PURPOSE_CLAIM],
                },
            )
            decoded = self._to_payload(payload)
        except jwt.PyJWTError as e:
            raise InvalidTokenError(f"Invalid token: {e}") from e
        except (KeyError, ValueError, TypeError, OverflowError) as e:
            raise InvalidTokenError(f"Malformed token payload: {e}") from e

        if purpose is not None and decoded.purpose is not purpose:
            msg = f"Expected a {purpose.value} token"
            raise InvalidTokenError(msg)

        if decoded.is_expired(self.now()):
            raise TokenExpiredError

        return decoded

    def verify_for(self, policy: TokenPolicy, token: str) -> TokenPayload:
        """Verify a token under a purpose policy."""
        return self.verify(token, policy.secret, purpose=policy.purpose)

    def decode_unsafe(self, token: str) -> dict[str, Any]:
        """Decode a token WITHOUT checking its signature or expiry.

        Only for callers that re-verify independently; never trust the
        returned claims on their own.

        Raises
        ------
        InvalidTokenError
            If the token cannot be decoded at all
        """
        try:
            return jwt.decode(
                token,
                options={"verify_signature": False, "verify_exp": False},
            )
        except jwt.PyJWTError as e:
            raise InvalidTokenError(f"Invalid token: {e}") from e

    def _to_payload(self, payload: dict[str, Any]) -> TokenPayload:
        purpose = TokenPurpose(payload[self.PURPOSE_CLAIM])
        issued_at = datetime.fromtimestamp(payload["iat"], tz=timezone.utc)
        expires_at = datetime.fromtimestamp(payload["exp"], tz=timezone.utc)
        claims = {
            key: str(value)
            for key, value in payload.items()
            if key not in self.RESERVED_CLAIMS
        }

        return TokenPayload(
            purpose=purpose,
            claims=claims,
            issued_at=issued_at,
            expires_at=expires_at,
        )
