"""Command-line interface (``myfinance``)."""
