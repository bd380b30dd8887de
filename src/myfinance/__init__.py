"""myfinance: personal finance ledger API.

Users register, authenticate with bearer tokens, and manage their own
income (``Receita``) and expense (``Despesa``) records.
"""

__version__ = "1.0.0"
