"""
Authentication operations: register, login and "who am I".

Login failures for an unknown email and for a wrong password raise the very
same :class:`InvalidCredentialsError`, so callers cannot probe which emails
are registered.
"""

from __future__ import annotations

from myfinance.core.errors import ConflictError, InvalidCredentialsError, MalformedTokenError, NotFoundError
from myfinance.core.ids import is_valid_uuid
from myfinance.core.logging import get_logger
from myfinance.core.repositories.protocols import UserStore
from myfinance.core.repositories.users import DUPLICATE_EMAIL_MESSAGE
from myfinance.core.security import PasswordHasher, TokenService
from myfinance.ops.context import AuthContext
from myfinance.ops.requests import LoginBody, RegisterBody
from myfinance.ops.responses import LoginResponse, MeResponse, RegisterResponse, UserProfile, UserSummary

logger = get_logger(__name__)


class AuthController:
    def __init__(self, users: UserStore, tokens: TokenService, passwords: PasswordHasher) -> None:
        self.users = users
        self.tokens = tokens
        self.passwords = passwords

    async def register(self, body: RegisterBody) -> RegisterResponse:
        """Create an account and return it with a fresh token.

        Raises:
            ConflictError: the email is already registered.
        """
        if await self.users.get_by_email(body.email) is not None:
            raise ConflictError(DUPLICATE_EMAIL_MESSAGE)

        password_hash = await self.passwords.hash(body.password)
        user = await self.users.create(name=body.name, email=body.email, password_hash=password_hash)
        token = self.tokens.issue(user.id, user.email)

        logger.info("user_registered", user_id=user.id)
        return RegisterResponse(
            user=UserProfile(id=user.id, name=user.name, email=user.email, created_at=user.created_at),
            token=token,
        )

    async def login(self, body: LoginBody) -> LoginResponse:
        user = await self.users.get_by_email(body.email)
        if user is None:
            logger.info("login_failed", reason="unknown_email")
            raise InvalidCredentialsError()

        if not await self.passwords.verify(body.password, user.password):
            logger.info("login_failed", reason="bad_password", user_id=user.id)
            raise InvalidCredentialsError()

        logger.info("login_succeeded", user_id=user.id)
        return LoginResponse(
            user=UserSummary(id=user.id, name=user.name, email=user.email),
            token=self.tokens.issue(user.id, user.email),
        )

    async def me(self, auth: AuthContext) -> MeResponse:
        """Profile of the authenticated caller.

        Raises:
            NotFoundError: the account behind the token no longer exists.
        """
        user_id = str(auth.user_id)
        if not is_valid_uuid(user_id):
            raise MalformedTokenError()

        user = await self.users.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")

        return MeResponse(
            user=UserProfile(id=user.id, name=user.name, email=user.email, created_at=user.created_at)
        )
