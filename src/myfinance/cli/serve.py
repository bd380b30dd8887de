"""
CLI: ``myfinance serve``: start the API server.
"""

from __future__ import annotations

import typer
import uvicorn

from myfinance.cli.utils import console, load_settings


def serve(
    host: str | None = typer.Option(None, "--host", "-h", help="Bind address (default: HOST)"),
    port: int | None = typer.Option(None, "--port", "-p", help="Bind port (default: PORT, 3333)"),
    reload: bool = typer.Option(False, "--reload", help="Auto-reload on changes"),
    workers: int = typer.Option(1, "--workers", "-w", help="Number of workers"),
) -> None:
    """Start the myfinance REST API server."""
    settings = load_settings()
    host = host or settings.host
    port = port or settings.port

    console.print(f"[bold green]Starting myfinance API[/bold green] on {host}:{port}")
    console.print("All protected endpoints require: [bold]Authorization: Bearer <token>[/bold]")
    uvicorn.run(
        "myfinance.api.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        workers=workers,
        log_level=settings.log_level.lower(),
    )
