"""
Root Typer application for the myfinance CLI.

    myfinance serve          Start the API server
    myfinance db init        Create missing tables
    myfinance db seed        Create the administrator account
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version

import typer
from typer import Typer

from myfinance import __version__
from myfinance.cli.db import app as db_app
from myfinance.cli.serve import serve

app = Typer(
    name="myfinance",
    help="myfinance: personal finance API.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        try:
            v = pkg_version("myfinance")
        except PackageNotFoundError:
            v = __version__
        typer.echo(f"myfinance {v}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """myfinance CLI. Run the API and manage its database."""


app.command("serve")(serve)
app.add_typer(db_app, name="db", help="Database operations.")
