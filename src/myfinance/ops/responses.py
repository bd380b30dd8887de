"""
Controller outputs.

Each model is the exact body of one endpoint's success response, keyed in
camelCase on the wire.  Timestamps are rendered in UTC.
"""

from __future__ import annotations

import datetime
import math

from pydantic import field_validator

from myfinance.core.models import CamelModel, as_utc
from myfinance.core.orm.tables import FinancialTransactionTable, TransactionType

# ------------------------------------------------------------------ #
# Accounts
# ------------------------------------------------------------------ #


class _UserTimestamps(CamelModel):
    @field_validator("created_at", "updated_at", check_fields=False)
    @classmethod
    def _utc(cls, value: datetime.datetime) -> datetime.datetime:
        return as_utc(value)


class UserSummary(CamelModel):
    id: str
    name: str
    email: str


class UserProfile(_UserTimestamps):
    id: str
    name: str
    email: str
    created_at: datetime.datetime


class UserListItem(_UserTimestamps):
    name: str
    email: str
    created_at: datetime.datetime
    updated_at: datetime.datetime


class CreatedUser(_UserTimestamps):
    name: str
    email: str
    created_at: datetime.datetime


class RegisterResponse(CamelModel):
    message: str = "User created successfully"
    user: UserProfile
    token: str


class LoginResponse(CamelModel):
    message: str = "Login successful"
    user: UserSummary
    token: str


class MeResponse(CamelModel):
    user: UserProfile


class UserListResponse(CamelModel):
    users: list[UserListItem]


class CreateUserResponse(CamelModel):
    message: str = "User created successfully"
    user: CreatedUser


# ------------------------------------------------------------------ #
# Financial transactions
# ------------------------------------------------------------------ #


class Pagination(CamelModel):
    page: int
    limit: int
    total: int
    total_pages: int

    @classmethod
    def from_result(cls, *, page: int, limit: int, total: int) -> Pagination:
        """Factory computing ``total_pages = ceil(total / limit)``."""
        return cls(page=page, limit=limit, total=total, total_pages=math.ceil(total / limit))


class TransactionRecord(CamelModel):
    id: str
    valor: float
    empresa: str
    data: datetime.datetime
    tipo: TransactionType
    user_id: str
    created_at: datetime.datetime
    updated_at: datetime.datetime

    @field_validator("data", "created_at", "updated_at")
    @classmethod
    def _utc(cls, value: datetime.datetime) -> datetime.datetime:
        return as_utc(value)

    @classmethod
    def from_row(cls, row: FinancialTransactionTable) -> TransactionRecord:
        return cls(
            id=row.id,
            valor=float(row.valor),
            empresa=row.empresa,
            data=row.data,
            tipo=row.tipo,
            user_id=row.user_id,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )


class TransactionListResponse(CamelModel):
    transactions: list[TransactionRecord]
    pagination: Pagination


class TypeTotal(CamelModel):
    amount: float
    count: int


class TransactionStats(CamelModel):
    total_transactions: int
    total_receitas: TypeTotal
    total_despesas: TypeTotal
    saldo: float


class StatsResponse(CamelModel):
    stats: TransactionStats
