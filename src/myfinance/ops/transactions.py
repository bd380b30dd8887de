"""
Financial-transaction operations.

Every read and write is scoped to ``auth.user_id``.  A transaction owned by
another user behaves exactly like a missing one: 404
"Financial transaction not found".
"""

from __future__ import annotations

from decimal import Decimal

from myfinance.core.errors import NotFoundError
from myfinance.core.ids import EntityId
from myfinance.core.logging import get_logger
from myfinance.core.orm.tables import TransactionType
from myfinance.core.repositories.protocols import TransactionFilters, TransactionStore
from myfinance.ops.context import AuthContext
from myfinance.ops.requests import CreateTransactionBody, ListTransactionsQuery, StatsQuery, UpdateTransactionBody
from myfinance.ops.responses import (
    Pagination,
    StatsResponse,
    TransactionListResponse,
    TransactionRecord,
    TransactionStats,
    TypeTotal,
)

logger = get_logger(__name__)

NOT_FOUND_MESSAGE = "Financial transaction not found"


class FinancialTransactionController:
    def __init__(self, transactions: TransactionStore) -> None:
        self.transactions = transactions

    async def create(self, auth: AuthContext, body: CreateTransactionBody) -> TransactionRecord:
        row = await self.transactions.create(
            user_id=str(auth.user_id),
            valor=body.valor,
            empresa=body.empresa,
            data=body.data,
            tipo=body.tipo,
        )
        logger.info("transaction_created", transaction_id=row.id, user_id=row.user_id, tipo=row.tipo.value)
        return TransactionRecord.from_row(row)

    async def list(self, auth: AuthContext, query: ListTransactionsQuery) -> TransactionListResponse:
        """One page of the caller's transactions, newest ``data`` first.

        A page past the end is not an error: it comes back empty with the
        real ``total``.
        """
        filters = TransactionFilters(
            user_id=str(auth.user_id),
            tipo=query.tipo,
            empresa=query.empresa,
            start_date=query.start_date,
            end_date=query.end_date,
        )
        rows, total = await self.transactions.list_page(filters, page=query.page, limit=query.limit)
        return TransactionListResponse(
            transactions=[TransactionRecord.from_row(r) for r in rows],
            pagination=Pagination.from_result(page=query.page, limit=query.limit, total=total),
        )

    async def get(self, auth: AuthContext, transaction_id: EntityId) -> TransactionRecord:
        row = await self.transactions.get_owned(str(transaction_id), str(auth.user_id))
        if row is None:
            raise NotFoundError(NOT_FOUND_MESSAGE)
        return TransactionRecord.from_row(row)

    async def update(
        self, auth: AuthContext, transaction_id: EntityId, body: UpdateTransactionBody
    ) -> TransactionRecord:
        """Apply the fields present in *body*; absent fields keep their value."""
        changes = body.changes()
        row = await self.transactions.update(str(transaction_id), str(auth.user_id), changes)
        if row is None:
            raise NotFoundError(NOT_FOUND_MESSAGE)
        logger.info("transaction_updated", transaction_id=row.id, fields=sorted(changes))
        return TransactionRecord.from_row(row)

    async def delete(self, auth: AuthContext, transaction_id: EntityId) -> None:
        deleted = await self.transactions.delete(str(transaction_id), str(auth.user_id))
        if not deleted:
            raise NotFoundError(NOT_FOUND_MESSAGE)
        logger.info("transaction_deleted", transaction_id=str(transaction_id))

    async def stats(self, auth: AuthContext, query: StatsQuery) -> StatsResponse:
        """Totals per tipo and the balance ``receitas - despesas``.

        Nothing matching yields zeros, never nulls.
        """
        filters = TransactionFilters(
            user_id=str(auth.user_id),
            empresa=query.empresa,
            start_date=query.start_date,
            end_date=query.end_date,
        )
        total = await self.transactions.count(filters)
        receitas, receitas_count = await self.transactions.aggregate(filters, TransactionType.RECEITA)
        despesas, despesas_count = await self.transactions.aggregate(filters, TransactionType.DESPESA)
        saldo: Decimal = receitas - despesas

        return StatsResponse(
            stats=TransactionStats(
                total_transactions=total,
                total_receitas=TypeTotal(amount=float(receitas), count=receitas_count),
                total_despesas=TypeTotal(amount=float(despesas), count=despesas_count),
                saldo=float(saldo),
            )
        )
