"""Financial-transaction store backed by an ``AsyncSession``.

Every query is scoped by ``user_id``; a row owned by someone else is
indistinguishable from a missing one.
"""

from __future__ import annotations

import datetime
from decimal import Decimal
from typing import Any

from sqlalchemy import Select, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from myfinance.core.orm.tables import FinancialTransactionTable, TransactionType
from myfinance.core.repositories._helpers import translate_db_errors
from myfinance.core.repositories.protocols import TransactionFilters

_T = FinancialTransactionTable

# Columns a caller may change through ``update``.
UPDATABLE_FIELDS = frozenset({"valor", "empresa", "data", "tipo"})


def _where(filters: TransactionFilters) -> list[Any]:
    clauses: list[Any] = [_T.user_id == filters.user_id]
    if filters.tipo is not None:
        clauses.append(_T.tipo == filters.tipo)
    if filters.empresa:
        clauses.append(_T.empresa.icontains(filters.empresa, autoescape=True))
    if filters.start_date is not None:
        clauses.append(_T.data >= filters.start_date)
    if filters.end_date is not None:
        clauses.append(_T.data <= filters.end_date)
    return clauses


def _to_decimal(value: Any) -> Decimal:
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


class SqlTransactionStore:
    """CRUD and aggregates for ``financial_transactions``."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    # -- reads -----------------------------------------------------------------

    async def get_owned(self, transaction_id: str, user_id: str) -> FinancialTransactionTable | None:
        with translate_db_errors("transactions.get_owned"):
            result = await self.session.execute(
                select(_T).where(_T.id == transaction_id, _T.user_id == user_id)
            )
            return result.scalar_one_or_none()

    async def list_page(
        self, filters: TransactionFilters, *, page: int, limit: int
    ) -> tuple[list[FinancialTransactionTable], int]:
        """One page of matching rows, newest ``data`` first, plus the total."""
        stmt: Select[Any] = (
            select(_T)
            .where(*_where(filters))
            .order_by(_T.data.desc(), _T.created_at.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        with translate_db_errors("transactions.list_page"):
            rows = list((await self.session.execute(stmt)).scalars())
        total = await self.count(filters)
        return rows, total

    async def count(self, filters: TransactionFilters) -> int:
        with translate_db_errors("transactions.count"):
            result = await self.session.execute(select(func.count(_T.id)).where(*_where(filters)))
            return int(result.scalar_one())

    async def aggregate(self, filters: TransactionFilters, tipo: TransactionType) -> tuple[Decimal, int]:
        """Sum of ``valor`` and row count for *tipo* within *filters*.

        An empty match yields ``(Decimal("0"), 0)``.
        """
        stmt = select(func.sum(_T.valor), func.count(_T.id)).where(*_where(filters), _T.tipo == tipo)
        with translate_db_errors("transactions.aggregate"):
            total, count = (await self.session.execute(stmt)).one()
        return _to_decimal(total), int(count or 0)

    # -- writes ----------------------------------------------------------------

    async def create(
        self,
        *,
        user_id: str,
        valor: Decimal,
        empresa: str,
        data: datetime.datetime,
        tipo: TransactionType,
    ) -> FinancialTransactionTable:
        row = _T(user_id=user_id, valor=valor, empresa=empresa, data=data, tipo=tipo)
        self.session.add(row)
        with translate_db_errors("transactions.create"):
            await self.session.commit()
        return row

    async def update(
        self, transaction_id: str, user_id: str, changes: dict[str, Any]
    ) -> FinancialTransactionTable | None:
        """Apply *changes* to an owned row; ``None`` if not found.

        Keys outside :data:`UPDATABLE_FIELDS` are ignored.
        """
        row = await self.get_owned(transaction_id, user_id)
        if row is None:
            return None
        for key, value in changes.items():
            if key in UPDATABLE_FIELDS:
                setattr(row, key, value)
        with translate_db_errors("transactions.update"):
            await self.session.commit()
        return row

    async def delete(self, transaction_id: str, user_id: str) -> bool:
        """Delete an owned row.  Returns ``False`` when nothing matched."""
        with translate_db_errors("transactions.delete"):
            result = await self.session.execute(
                delete(_T).where(_T.id == transaction_id, _T.user_id == user_id)
            )
            await self.session.commit()
        return bool(result.rowcount)
