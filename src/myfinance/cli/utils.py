"""
CLI utility helpers: consoles and settings loading.
"""

from __future__ import annotations

import typer
from pydantic import ValidationError as SettingsValidationError
from rich.console import Console

from myfinance.core.settings import Settings

console = Console()
err_console = Console(stderr=True)


def load_settings(database_url: str | None = None) -> Settings:
    """Read settings from the environment, optionally overriding ``DATABASE_URL``.

    Exits with code 2 and a readable message when required values are missing.
    """
    overrides = {"database_url": database_url} if database_url else {}
    try:
        return Settings(**overrides)
    except SettingsValidationError as e:
        missing = ", ".join(".".join(str(p) for p in err["loc"]).upper() for err in e.errors())
        err_console.print(f"[red]Invalid configuration:[/red] {missing}")
        raise typer.Exit(code=2) from e
