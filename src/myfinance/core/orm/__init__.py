"""SQLAlchemy ORM layer: declarative base, tables, engine and sessions."""

from myfinance.core.orm.base import Base, TimestampMixin
from myfinance.core.orm.session import create_engine_from_url, create_session_factory, init_schema, to_async_url
from myfinance.core.orm.tables import FinancialTransactionTable, TransactionType, UserTable

__all__ = [
    "Base",
    "FinancialTransactionTable",
    "TimestampMixin",
    "TransactionType",
    "UserTable",
    "create_engine_from_url",
    "create_session_factory",
    "init_schema",
    "to_async_url",
]
