"""User store backed by an ``AsyncSession``."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from myfinance.core.errors import ConflictError
from myfinance.core.orm.tables import UserTable
from myfinance.core.repositories._helpers import translate_db_errors

DUPLICATE_EMAIL_MESSAGE = "User with this email already exists"


class SqlUserStore:
    """CRUD for the ``users`` table."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    # -- reads -----------------------------------------------------------------

    async def get_by_email(self, email: str) -> UserTable | None:
        with translate_db_errors("users.get_by_email"):
            result = await self.session.execute(select(UserTable).where(UserTable.email == email))
            return result.scalar_one_or_none()

    async def get_by_id(self, user_id: str) -> UserTable | None:
        with translate_db_errors("users.get_by_id"):
            return await self.session.get(UserTable, user_id)

    async def list_all(self) -> list[UserTable]:
        """Every user, oldest account first."""
        with translate_db_errors("users.list_all"):
            result = await self.session.execute(
                select(UserTable).order_by(UserTable.created_at, UserTable.email)
            )
            return list(result.scalars())

    # -- writes ----------------------------------------------------------------

    async def create(self, *, name: str, email: str, password_hash: str) -> UserTable:
        """Insert a user.

        Raises:
            ConflictError: the email is already taken.  A concurrent insert
                that slips past the controller's pre-check lands here through
                the unique constraint.
        """
        user = UserTable(name=name, email=email, password=password_hash)
        self.session.add(user)
        with translate_db_errors("users.create"):
            try:
                await self.session.commit()
            except IntegrityError as e:
                await self.session.rollback()
                raise ConflictError(DUPLICATE_EMAIL_MESSAGE, cause=e) from e
        return user
