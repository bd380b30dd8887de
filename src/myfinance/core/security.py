"""
Password hashing and access tokens.

Passwords are hashed with bcrypt (cost factor 10 by default).  Hashing and
verification are CPU-bound, so the async helpers hand them to the worker
thread pool.

Access tokens are HS256 JWTs carrying ``{userId, email, iat, exp}`` and
expire seven days after issuance.

Usage::

    tokens = TokenService(secret="...")
    token = tokens.issue(user_id, "ann@x.com")
    claims = tokens.verify(token)      # TokenClaims
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
from jose import ExpiredSignatureError, JWTError, jwt
from starlette.concurrency import run_in_threadpool

from myfinance.core.errors import InvalidTokenError, MalformedTokenError, TokenExpiredError
from myfinance.core.ids import EntityId

DEFAULT_BCRYPT_ROUNDS = 10
DEFAULT_TOKEN_TTL = timedelta(days=7)

# bcrypt ignores (and newer releases reject) input past 72 bytes.
BCRYPT_MAX_BYTES = 72


# ── Passwords ────────────────────────────────────────────────────────────


def hash_password_sync(password: str, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> str:
    """Return a salted bcrypt hash of *password*."""
    digest = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds))
    return digest.decode("utf-8")


def verify_password_sync(password: str, password_hash: str) -> bool:
    """Check *password* against a stored bcrypt hash."""
    candidate = password.encode("utf-8")
    if len(candidate) > BCRYPT_MAX_BYTES:
        return False
    try:
        return bcrypt.checkpw(candidate, password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash.
        return False


class PasswordHasher:
    """Async facade over bcrypt used by the controllers."""

    def __init__(self, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> None:
        self.rounds = rounds

    async def hash(self, password: str) -> str:
        return await run_in_threadpool(hash_password_sync, password, self.rounds)

    async def verify(self, password: str, password_hash: str) -> bool:
        return await run_in_threadpool(verify_password_sync, password, password_hash)


# ── Tokens ───────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class TokenClaims:
    """Decoded access-token payload."""

    user_id: str
    email: str
    issued_at: datetime
    expires_at: datetime


class TokenService:
    """Issue and verify signed access tokens.

    Parameters
    ----------
    secret:
        HMAC signing key.
    algorithm:
        JWS algorithm (``HS256``).
    ttl:
        Lifetime of issued tokens.
    """

    def __init__(
        self,
        secret: str,
        *,
        algorithm: str = "HS256",
        ttl: timedelta = DEFAULT_TOKEN_TTL,
    ) -> None:
        self._secret = secret
        self.algorithm = algorithm
        self.ttl = ttl

    def issue(self, user_id: EntityId | str, email: str, *, now: datetime | None = None) -> str:
        issued_at = now or datetime.now(UTC)
        payload: dict[str, Any] = {
            "userId": str(user_id),
            "email": email,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self.ttl).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaims:
        """Decode *token* and return its claims.

        Raises:
            TokenExpiredError: signature is valid but ``exp`` has passed.
            InvalidTokenError: malformed token or signature mismatch.
            MalformedTokenError: required claims are missing.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require_exp": True, "require_iat": True},
            )
        except ExpiredSignatureError as e:
            raise TokenExpiredError() from e
        except JWTError as e:
            raise InvalidTokenError() from e

        user_id = payload.get("userId")
        email = payload.get("email")
        if not isinstance(user_id, str) or not isinstance(email, str):
            raise MalformedTokenError()

        return TokenClaims(
            user_id=user_id,
            email=email,
            issued_at=datetime.fromtimestamp(payload["iat"], tz=UTC),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=UTC),
        )
