"""
CLI: ``myfinance db``: database management commands.
"""

from __future__ import annotations

import asyncio

import typer

from myfinance.cli.utils import console, err_console, load_settings
from myfinance.core.errors import AppError
from myfinance.core.orm import create_engine_from_url, create_session_factory, init_schema
from myfinance.core.repositories import SqlUserStore
from myfinance.core.security import PasswordHasher
from myfinance.core.settings import Settings

app = typer.Typer(no_args_is_help=True)

ADMIN_EMAIL = "admin@myfinance.com"
ADMIN_PASSWORD = "admin123"
ADMIN_NAME = "Administrador"


async def _init(settings: Settings) -> str:
    engine = create_engine_from_url(settings.database_url)
    try:
        await init_schema(engine)
        return engine.dialect.name
    finally:
        await engine.dispose()


async def _seed(settings: Settings, *, email: str, password: str, name: str) -> bool:
    """Create the administrator unless the email is taken.  Returns ``True`` if created."""
    engine = create_engine_from_url(settings.database_url)
    try:
        await init_schema(engine)
        async with create_session_factory(engine)() as session:
            users = SqlUserStore(session)
            if await users.get_by_email(email) is not None:
                return False
            password_hash = await PasswordHasher(settings.bcrypt_rounds).hash(password)
            await users.create(name=name, email=email, password_hash=password_hash)
            return True
    finally:
        await engine.dispose()


@app.command()
def init(
    database_url: str | None = typer.Option(None, "--database-url", "-d", help="Override DATABASE_URL"),
) -> None:
    """Initialise database schema (create tables)."""
    settings = load_settings(database_url)
    backend = asyncio.run(_init(settings))
    console.print(f"[green]Schema ready[/green] ({backend})")


@app.command()
def seed(
    database_url: str | None = typer.Option(None, "--database-url", "-d", help="Override DATABASE_URL"),
    email: str = typer.Option(ADMIN_EMAIL, "--email", help="Administrator email"),
    password: str = typer.Option(ADMIN_PASSWORD, "--password", help="Administrator password"),
    name: str = typer.Option(ADMIN_NAME, "--name", help="Administrator display name"),
) -> None:
    """Create the administrator account if it does not exist yet."""
    settings = load_settings(database_url)
    try:
        created = asyncio.run(_seed(settings, email=email, password=password, name=name))
    except AppError as e:
        err_console.print(f"[red]Seed failed:[/red] {e.message}")
        raise typer.Exit(code=1) from e

    if not created:
        console.print(f"[yellow]User {email} already exists[/yellow], nothing to do")
        return

    console.print(f"[green]Created administrator[/green] {email}")
    if password == ADMIN_PASSWORD:
        console.print("[bold yellow]Change the default password after the first login.[/bold yellow]")
