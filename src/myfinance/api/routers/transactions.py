"""
Financial transactions router (protected).

Every endpoint acts on the caller's own transactions only.  ``{id}`` must be
a UUID; anything else is rejected with 400 before the database is touched.

Endpoints:
    POST   /financial-transactions          Create
    GET    /financial-transactions          List (filters + pagination)
    GET    /financial-transactions/stats    Totals per tipo and balance
    GET    /financial-transactions/{id}     Fetch one
    PUT    /financial-transactions/{id}     Update (fields present only)
    PATCH  /financial-transactions/{id}     Same as PUT
    DELETE /financial-transactions/{id}     Delete (204)
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Query, Response

from myfinance.api.deps import TransactionControllerDep, TransactionIdDep
from myfinance.api.middleware.auth import CurrentUser
from myfinance.api.schemas.common import ProblemDetail
from myfinance.ops.requests import CreateTransactionBody, ListTransactionsQuery, StatsQuery, UpdateTransactionBody
from myfinance.ops.responses import StatsResponse, TransactionListResponse, TransactionRecord

router = APIRouter(
    prefix="/financial-transactions",
    tags=["financial-transactions"],
    responses={400: {"model": ProblemDetail}, 401: {"model": ProblemDetail}},
)

_NOT_FOUND = {404: {"model": ProblemDetail}}


@router.post("", response_model=TransactionRecord, status_code=201)
async def create_transaction(
    body: CreateTransactionBody,
    auth: CurrentUser,
    controller: TransactionControllerDep,
) -> TransactionRecord:
    """Record a transaction owned by the caller.

    Example:
        POST /financial-transactions
        {"valor": 123.456, "empresa": "ACME", "data": "2024-03-01T10:00:00Z", "tipo": "Receita"}
    """
    return await controller.create(auth, body)


@router.get("", response_model=TransactionListResponse)
async def list_transactions(
    query: Annotated[ListTransactionsQuery, Query()],
    auth: CurrentUser,
    controller: TransactionControllerDep,
) -> TransactionListResponse:
    """List the caller's transactions, newest ``data`` first.

    Query parameters ``page`` (≥ 1, default 1), ``limit`` (1-100, default 10),
    ``tipo``, ``empresa`` (case-insensitive substring), ``startDate`` and
    ``endDate`` (inclusive).  All filters combine with AND.
    """
    return await controller.list(auth, query)


# Registered before /{id} so "stats" is never taken for an id.
@router.get("/stats", response_model=StatsResponse)
async def transaction_stats(
    query: Annotated[StatsQuery, Query()],
    auth: CurrentUser,
    controller: TransactionControllerDep,
) -> StatsResponse:
    """Count, per-tipo totals and ``saldo = receitas - despesas``."""
    return await controller.stats(auth, query)


@router.get("/{id}", response_model=TransactionRecord, responses=_NOT_FOUND)
async def get_transaction(
    auth: CurrentUser,
    transaction_id: TransactionIdDep,
    controller: TransactionControllerDep,
) -> TransactionRecord:
    return await controller.get(auth, transaction_id)


@router.put("/{id}", response_model=TransactionRecord, responses=_NOT_FOUND)
@router.patch("/{id}", response_model=TransactionRecord, responses=_NOT_FOUND)
async def update_transaction(
    auth: CurrentUser,
    transaction_id: TransactionIdDep,
    body: UpdateTransactionBody,
    controller: TransactionControllerDep,
) -> TransactionRecord:
    """Apply the fields present in the body; omitted fields are unchanged."""
    return await controller.update(auth, transaction_id, body)


@router.delete("/{id}", status_code=204, response_class=Response, responses=_NOT_FOUND)
async def delete_transaction(
    auth: CurrentUser,
    transaction_id: TransactionIdDep,
    controller: TransactionControllerDep,
) -> Response:
    await controller.delete(auth, transaction_id)
    return Response(status_code=204)
