"""User administration: list accounts, provision an account without logging in as it."""

from __future__ import annotations

from myfinance.core.errors import ConflictError
from myfinance.core.logging import get_logger
from myfinance.core.repositories.protocols import UserStore
from myfinance.core.repositories.users import DUPLICATE_EMAIL_MESSAGE
from myfinance.core.security import PasswordHasher
from myfinance.ops.requests import RegisterBody
from myfinance.ops.responses import CreatedUser, CreateUserResponse, UserListItem, UserListResponse

logger = get_logger(__name__)


class UserController:
    def __init__(self, users: UserStore, passwords: PasswordHasher) -> None:
        self.users = users
        self.passwords = passwords

    async def list_users(self) -> UserListResponse:
        rows = await self.users.list_all()
        return UserListResponse(
            users=[
                UserListItem(name=u.name, email=u.email, created_at=u.created_at, updated_at=u.updated_at)
                for u in rows
            ]
        )

    async def create_user(self, body: RegisterBody) -> CreateUserResponse:
        """Same rules as registration, but no token is issued."""
        if await self.users.get_by_email(body.email) is not None:
            raise ConflictError(DUPLICATE_EMAIL_MESSAGE)

        password_hash = await self.passwords.hash(body.password)
        user = await self.users.create(name=body.name, email=body.email, password_hash=password_hash)

        logger.info("user_provisioned", user_id=user.id)
        return CreateUserResponse(
            user=CreatedUser(name=user.name, email=user.email, created_at=user.created_at)
        )
