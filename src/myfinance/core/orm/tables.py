"""Table definitions for users and financial transactions."""

from __future__ import annotations

import datetime
from decimal import Decimal
from enum import Enum

from sqlalchemy import CheckConstraint, ForeignKey, Index, String
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from myfinance.core.ids import generate_id
from myfinance.core.orm.base import UUID_TEXT, Base, TimestampMixin


class TransactionType(str, Enum):
    """Transaction category."""

    DESPESA = "Despesa"
    RECEITA = "Receita"


class UserTable(TimestampMixin, Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(UUID_TEXT, primary_key=True, default=generate_id)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    password: Mapped[str] = mapped_column(String(255), nullable=False)

    # --- relationships ---
    transactions: Mapped[list[FinancialTransactionTable]] = relationship(
        "FinancialTransactionTable", back_populates="user", lazy="raise"
    )

    def __repr__(self) -> str:
        return f"<User {self.email}>"


class FinancialTransactionTable(TimestampMixin, Base):
    __tablename__ = "financial_transactions"
    __table_args__ = (
        CheckConstraint("valor > 0", name="ck_financial_transactions_valor_positive"),
        Index("ix_financial_transactions_user_data", "user_id", "data"),
    )

    id: Mapped[str] = mapped_column(UUID_TEXT, primary_key=True, default=generate_id)
    valor: Mapped[Decimal] = mapped_column(nullable=False)
    empresa: Mapped[str] = mapped_column(String(255), nullable=False)
    data: Mapped[datetime.datetime] = mapped_column(nullable=False)
    tipo: Mapped[TransactionType] = mapped_column(
        SAEnum(
            TransactionType,
            name="transaction_type",
            values_callable=lambda enum: [member.value for member in enum],
            validate_strings=True,
        ),
        nullable=False,
    )
    user_id: Mapped[str] = mapped_column(
        UUID_TEXT,
        ForeignKey("users.id"),
        nullable=False,
    )

    # --- relationships ---
    user: Mapped[UserTable] = relationship("UserTable", back_populates="transactions", lazy="raise")

    def __repr__(self) -> str:
        return f"<FinancialTransaction {self.id} {self.tipo.value} {self.valor}>"
