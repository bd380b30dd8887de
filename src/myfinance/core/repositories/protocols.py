"""Store protocols.

Controllers depend on these protocols only, so tests can hand them in-memory
fakes and the API layer can hand them the SQLAlchemy implementations.
"""

from __future__ import annotations

import datetime
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Protocol

from myfinance.core.orm.tables import FinancialTransactionTable, TransactionType, UserTable


@dataclass(frozen=True, slots=True)
class TransactionFilters:
    """Conjunctive filter over one user's transactions.

    ``None`` means "no constraint" for every field except ``user_id``.
    """

    user_id: str
    tipo: TransactionType | None = None
    empresa: str | None = None
    start_date: datetime.datetime | None = None
    end_date: datetime.datetime | None = None


class UserStore(Protocol):
    async def get_by_email(self, email: str) -> UserTable | None: ...

    async def get_by_id(self, user_id: str) -> UserTable | None: ...

    async def list_all(self) -> list[UserTable]: ...

    async def create(self, *, name: str, email: str, password_hash: str) -> UserTable: ...


class TransactionStore(Protocol):
    async def get_owned(self, transaction_id: str, user_id: str) -> FinancialTransactionTable | None: ...

    async def list_page(
        self, filters: TransactionFilters, *, page: int, limit: int
    ) -> tuple[list[FinancialTransactionTable], int]: ...

    async def count(self, filters: TransactionFilters) -> int: ...

    async def aggregate(self, filters: TransactionFilters, tipo: TransactionType) -> tuple[Decimal, int]: ...

    async def create(
        self,
        *,
        user_id: str,
        valor: Decimal,
        empresa: str,
        data: datetime.datetime,
        tipo: TransactionType,
    ) -> FinancialTransactionTable: ...

    async def update(
        self, transaction_id: str, user_id: str, changes: dict[str, Any]
    ) -> FinancialTransactionTable | None: ...

    async def delete(self, transaction_id: str, user_id: str) -> bool: ...
