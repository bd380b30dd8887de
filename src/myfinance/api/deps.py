"""
FastAPI dependency injection: shared singletons and per-request factories.

Usage in routers::

    from myfinance.api.deps import TransactionControllerDep

    @router.get("/financial-transactions")
    async def list_transactions(controller: TransactionControllerDep, ...):
        ...

Singletons (settings, engine, token and password services) are built once
in :func:`~myfinance.api.app.create_app` and parked on ``app.state``.  Per
request, one ``AsyncSession`` is opened and shared by every store the
request touches.  Tests swap any layer through ``app.dependency_overrides``.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Annotated

from fastapi import Depends, Path, Request
from sqlalchemy.ext.asyncio import AsyncSession

from myfinance.core.ids import EntityId
from myfinance.core.repositories import SqlTransactionStore, SqlUserStore
from myfinance.core.repositories.protocols import TransactionStore, UserStore
from myfinance.core.security import PasswordHasher, TokenService
from myfinance.core.settings import Settings, get_settings
from myfinance.ops import AuthController, FinancialTransactionController, UserController

# ── Settings & services (singletons) ─────────────────────────────────────

SettingsDep = Annotated[Settings, Depends(get_settings)]


def get_token_service(request: Request) -> TokenService:
    return request.app.state.tokens


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.passwords


TokenServiceDep = Annotated[TokenService, Depends(get_token_service)]
PasswordHasherDep = Annotated[PasswordHasher, Depends(get_password_hasher)]


# ── Database session (per-request) ───────────────────────────────────────


async def get_session(request: Request) -> AsyncIterator[AsyncSession]:
    """Yield an ``AsyncSession`` for the request lifespan."""
    async with request.app.state.session_factory() as session:
        yield session


SessionDep = Annotated[AsyncSession, Depends(get_session)]


def get_user_store(session: SessionDep) -> UserStore:
    return SqlUserStore(session)


def get_transaction_store(session: SessionDep) -> TransactionStore:
    return SqlTransactionStore(session)


UserStoreDep = Annotated[UserStore, Depends(get_user_store)]
TransactionStoreDep = Annotated[TransactionStore, Depends(get_transaction_store)]


# ── Controllers (per-request) ────────────────────────────────────────────


def get_auth_controller(
    users: UserStoreDep, tokens: TokenServiceDep, passwords: PasswordHasherDep
) -> AuthController:
    return AuthController(users, tokens, passwords)


def get_user_controller(users: UserStoreDep, passwords: PasswordHasherDep) -> UserController:
    return UserController(users, passwords)


def get_transaction_controller(transactions: TransactionStoreDep) -> FinancialTransactionController:
    return FinancialTransactionController(transactions)


AuthControllerDep = Annotated[AuthController, Depends(get_auth_controller)]
UserControllerDep = Annotated[UserController, Depends(get_user_controller)]
TransactionControllerDep = Annotated[FinancialTransactionController, Depends(get_transaction_controller)]


# ── Path parameters ──────────────────────────────────────────────────────


def get_transaction_id(
    id: Annotated[str, Path(description="Transaction UUID")],  # noqa: A002
) -> EntityId:
    """Reject a malformed ``{id}`` with 400 before any lookup happens."""
    return EntityId.parse(id)


TransactionIdDep = Annotated[EntityId, Depends(get_transaction_id)]
