"""Persistence gateway: typed stores over the ORM tables."""

from myfinance.core.repositories.protocols import TransactionFilters, TransactionStore, UserStore
from myfinance.core.repositories.transactions import SqlTransactionStore
from myfinance.core.repositories.users import SqlUserStore

__all__ = [
    "SqlTransactionStore",
    "SqlUserStore",
    "TransactionFilters",
    "TransactionStore",
    "UserStore",
]
