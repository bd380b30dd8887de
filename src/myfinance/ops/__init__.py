"""
Controllers.

Each controller takes its stores (and, for auth, the token and password
services) in its constructor and exposes one coroutine per endpoint.  Inputs
come from :mod:`myfinance.ops.requests`, outputs are
:mod:`myfinance.ops.responses` models, and failures are
:mod:`myfinance.core.errors` types; the HTTP layer does the rest.
"""

from myfinance.ops.auth import AuthController
from myfinance.ops.context import AuthContext
from myfinance.ops.transactions import FinancialTransactionController
from myfinance.ops.users import UserController

__all__ = [
    "AuthContext",
    "AuthController",
    "FinancialTransactionController",
    "UserController",
]
