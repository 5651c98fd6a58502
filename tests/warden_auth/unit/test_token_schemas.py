"""Unit tests for token policies and payloads."""

from datetime import datetime, timedelta, timezone

import pytest

from warden_auth.exceptions import InvalidTokenError
from warden_auth.schemas import TokenPayload, TokenPolicies, TokenPolicy, TokenPurpose

NOW = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _policy(purpose: TokenPurpose, secret: str) -> TokenPolicy:
    return TokenPolicy(purpose=purpose, secret=secret, ttl=timedelta(minutes=5))


class TestTokenPolicy:
    def test_empty_secret_raises(self):
        with pytest.raises(ValueError, match="cannot be empty"):
            _policy(TokenPurpose.SESSION, "")

    @pytest.mark.parametrize("ttl", [timedelta(0), timedelta(seconds=-1)])
    def test_non_positive_ttl_raises(self, ttl):
        with pytest.raises(ValueError, match="must be positive"):
            TokenPolicy(purpose=TokenPurpose.SESSION, secret="s", ttl=ttl)

    def test_secret_hidden_from_repr(self):
        assert "top-secret" not in repr(_policy(TokenPurpose.SESSION, "top-secret"))


class TestTokenPolicies:
    def test_distinct_secrets_accepted(self):
        policies = TokenPolicies(
            session=_policy(TokenPurpose.SESSION, "a"),
            password_reset=_policy(TokenPurpose.PASSWORD_RESET, "b"),
            invitation=_policy(TokenPurpose.INVITATION, "c"),
        )

        assert policies.session.secret == "a"

    def test_shared_secret_rejected(self):
        with pytest.raises(ValueError, match="its own signing secret"):
            TokenPolicies(
                session=_policy(TokenPurpose.SESSION, "a"),
                password_reset=_policy(TokenPurpose.PASSWORD_RESET, "a"),
                invitation=_policy(TokenPurpose.INVITATION, "c"),
            )


class TestTokenPayload:
    def setup_method(self):
        self.payload = TokenPayload(
            purpose=TokenPurpose.SESSION,
            claims={"userId": "42", "empty": ""},
            issued_at=NOW,
            expires_at=NOW + timedelta(minutes=5),
        )

    def test_claim(self):
        assert self.payload.claim("userId") == "42"

    @pytest.mark.parametrize("name", ["missing", "empty"])
    def test_missing_or_empty_claim_raises(self, name):
        with pytest.raises(InvalidTokenError, match=name):
            self.payload.claim(name)

    def test_claims_are_read_only(self):
        with pytest.raises(TypeError):
            self.payload.claims["userId"] = "1"  # type: ignore[index]

    def test_is_expired_boundary(self):
        assert self.payload.is_expired(NOW + timedelta(minutes=5)) is False
        assert self.payload.is_expired(NOW + timedelta(minutes=5, microseconds=1)) is True
