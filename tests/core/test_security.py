"""Tests for password hashing and access tokens."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
from jose import jwt

from myfinance.core.errors import AuthenticationError, InvalidTokenError, MalformedTokenError, TokenExpiredError
from myfinance.core.security import (
    PasswordHasher,
    TokenService,
    hash_password_sync,
    verify_password_sync,
)

SECRET = "unit-test-secret"
USER_ID = "550e8400-e29b-41d4-a716-446655440000"


class TestPasswordHashing:
    def test_hash_is_not_plaintext_and_verifies(self):
        digest = hash_password_sync("secret123", rounds=4)
        assert digest != "secret123"
        assert digest.startswith("$2")
        assert verify_password_sync("secret123", digest)

    def test_wrong_password_rejected(self):
        digest = hash_password_sync("secret123", rounds=4)
        assert not verify_password_sync("secret124", digest)

    def test_hashes_are_salted(self):
        assert hash_password_sync("same", rounds=4) != hash_password_sync("same", rounds=4)

    def test_default_cost_factor_is_ten(self):
        digest = hash_password_sync("secret123")
        assert digest.split("$")[2] == "10"

    def test_garbage_hash_is_false_not_error(self):
        assert verify_password_sync("secret123", "not-a-bcrypt-hash") is False

    def test_overlong_input_is_false(self):
        digest = hash_password_sync("a" * 72, rounds=4)
        assert verify_password_sync("a" * 73, digest) is False

    @pytest.mark.asyncio
    async def test_async_facade(self):
        hasher = PasswordHasher(rounds=4)
        digest = await hasher.hash("secret123")
        assert await hasher.verify("secret123", digest)
        assert not await hasher.verify("nope", digest)


class TestTokenService:
    def test_round_trip(self):
        tokens = TokenService(SECRET)
        claims = tokens.verify(tokens.issue(USER_ID, "ana@example.com"))
        assert claims.user_id == USER_ID
        assert claims.email == "ana@example.com"

    def test_expires_seven_days_after_issue(self):
        tokens = TokenService(SECRET)
        now = datetime.now(UTC).replace(microsecond=0)
        claims = tokens.verify(tokens.issue(USER_ID, "ana@example.com", now=now))
        assert claims.issued_at == now
        assert claims.expires_at - claims.issued_at == timedelta(days=7)

    def test_payload_uses_hs256_and_camel_case_claims(self):
        token = TokenService(SECRET).issue(USER_ID, "ana@example.com")
        assert jwt.get_unverified_header(token)["alg"] == "HS256"
        payload = jwt.get_unverified_claims(token)
        assert set(payload) == {"userId", "email", "iat", "exp"}

    def test_expired_token(self):
        tokens = TokenService(SECRET)
        token = tokens.issue(USER_ID, "ana@example.com", now=datetime.now(UTC) - timedelta(days=8))
        with pytest.raises(TokenExpiredError) as exc_info:
            tokens.verify(token)
        assert exc_info.value.message == "Token expired"

    def test_wrong_secret(self):
        token = TokenService("other-secret").issue(USER_ID, "ana@example.com")
        with pytest.raises(InvalidTokenError) as exc_info:
            TokenService(SECRET).verify(token)
        assert exc_info.value.message == "Invalid token"

    @pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
    def test_malformed_token(self, token):
        with pytest.raises(InvalidTokenError):
            TokenService(SECRET).verify(token)

    def test_missing_user_id_claim(self):
        now = int(datetime.now(UTC).timestamp())
        token = jwt.encode({"email": "a@b.co", "iat": now, "exp": now + 60}, SECRET, algorithm="HS256")
        with pytest.raises(MalformedTokenError):
            TokenService(SECRET).verify(token)

    def test_all_failures_are_authentication_errors(self):
        for exc in (InvalidTokenError(), TokenExpiredError(), MalformedTokenError()):
            assert isinstance(exc, AuthenticationError)
            assert exc.status == 401
