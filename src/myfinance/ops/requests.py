"""
Validated inputs for the controllers.

``valor`` travels as a JSON number and is held as :class:`~decimal.Decimal`
(at most three fractional digits), so ``123.456`` stays ``123.456``.
"""

from __future__ import annotations

import datetime
from decimal import Decimal
from typing import Any

from pydantic import EmailStr, Field, field_validator

from myfinance.core.models import CamelModel, as_utc
from myfinance.core.orm.tables import TransactionType
from myfinance.core.security import BCRYPT_MAX_BYTES

MIN_PASSWORD_LENGTH = 6
MAX_EMPRESA_LENGTH = 255
MAX_PAGE_SIZE = 100
# Keeps (page - 1) * limit inside a signed 64-bit OFFSET.
MAX_PAGE = (2**63 - 1) // MAX_PAGE_SIZE


# ------------------------------------------------------------------ #
# Accounts
# ------------------------------------------------------------------ #


class RegisterBody(CamelModel):
    """Body of ``POST /auth/register`` and ``POST /users``."""

    name: str = Field(min_length=1, description="Display name")
    email: EmailStr
    password: str = Field(min_length=MIN_PASSWORD_LENGTH, description="Plaintext password, at least 6 characters")

    @field_validator("password")
    @classmethod
    def _fits_bcrypt(cls, value: str) -> str:
        if len(value.encode("utf-8")) > BCRYPT_MAX_BYTES:
            raise ValueError(f"Password must be at most {BCRYPT_MAX_BYTES} bytes")
        return value


class LoginBody(CamelModel):
    email: EmailStr
    password: str = Field(min_length=1)


# ------------------------------------------------------------------ #
# Financial transactions
# ------------------------------------------------------------------ #


def _coerce_valor(value: Any) -> Any:
    """Accept JSON numbers only; floats go through ``repr`` to avoid binary drift."""
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise ValueError("Valor must be a number")
    if isinstance(value, float):
        return Decimal(repr(value))
    return value


class CreateTransactionBody(CamelModel):
    valor: Decimal = Field(gt=0, max_digits=15, decimal_places=3, allow_inf_nan=False)
    empresa: str = Field(min_length=1, max_length=MAX_EMPRESA_LENGTH)
    data: datetime.datetime
    tipo: TransactionType

    @field_validator("valor", mode="before")
    @classmethod
    def _valor_is_number(cls, value: Any) -> Any:
        return _coerce_valor(value)

    @field_validator("data")
    @classmethod
    def _data_utc(cls, value: datetime.datetime) -> datetime.datetime:
        return as_utc(value)


class UpdateTransactionBody(CamelModel):
    """Partial update.  Absent fields are left alone; ``null`` is rejected."""

    valor: Decimal | None = Field(default=None, gt=0, max_digits=15, decimal_places=3, allow_inf_nan=False)
    empresa: str | None = Field(default=None, min_length=1, max_length=MAX_EMPRESA_LENGTH)
    data: datetime.datetime | None = None
    tipo: TransactionType | None = None

    @field_validator("*", mode="before")
    @classmethod
    def _no_nulls(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("Field may be omitted but not null")
        return value

    @field_validator("valor", mode="before")
    @classmethod
    def _valor_is_number(cls, value: Any) -> Any:
        return _coerce_valor(value)

    @field_validator("data")
    @classmethod
    def _data_utc(cls, value: datetime.datetime) -> datetime.datetime:
        return as_utc(value)

    def changes(self) -> dict[str, Any]:
        """Only the fields the caller actually sent."""
        return self.model_dump(exclude_unset=True)


class StatsQuery(CamelModel):
    """Filters accepted by ``GET /financial-transactions/stats``."""

    empresa: str | None = Field(default=None, description="Case-insensitive substring of empresa")
    start_date: datetime.datetime | None = Field(default=None, description="Inclusive lower bound on data")
    end_date: datetime.datetime | None = Field(default=None, description="Inclusive upper bound on data")

    @field_validator("start_date", "end_date")
    @classmethod
    def _bounds_utc(cls, value: datetime.datetime | None) -> datetime.datetime | None:
        return as_utc(value) if value is not None else None


class ListTransactionsQuery(StatsQuery):
    """Filters and paging accepted by ``GET /financial-transactions``."""

    page: int = Field(default=1, ge=1, le=MAX_PAGE, description="1-based page number")
    limit: int = Field(default=10, ge=1, le=MAX_PAGE_SIZE, description="Page size")
    tipo: TransactionType | None = Field(default=None, description="Despesa or Receita")
