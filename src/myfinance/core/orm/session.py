"""Async SQLAlchemy engine and session factory.

This module provides:

* ``to_async_url``           -- Map ``postgresql://`` / ``sqlite://`` URLs to
  their asyncio drivers (``asyncpg`` / ``aiosqlite``).
* ``create_engine_from_url`` -- Create an ``AsyncEngine`` with sane defaults.
* ``create_session_factory`` -- ``async_sessionmaker`` producing sessions
  with ``expire_on_commit=False``.
* ``init_schema``            -- Create any missing tables.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from myfinance.core.orm.base import Base

_ASYNC_DRIVERS = {
    "postgresql": "postgresql+asyncpg",
    "postgres": "postgresql+asyncpg",
    "postgresql+psycopg2": "postgresql+asyncpg",
    "sqlite": "sqlite+aiosqlite",
    "sqlite+pysqlite": "sqlite+aiosqlite",
}


def to_async_url(url: str) -> str:
    """Return *url* with its driver swapped for the asyncio one.

    URLs that already name an async driver are returned unchanged.
    """
    parsed = make_url(url)
    driver = _ASYNC_DRIVERS.get(parsed.drivername)
    if driver is None:
        return url
    return parsed.set(drivername=driver).render_as_string(hide_password=False)


def create_engine_from_url(
    url: str,
    *,
    echo: bool = False,
    pool_size: int | None = None,
    pool_timeout: float | None = None,
    **kwargs: Any,
) -> AsyncEngine:
    """Create an ``AsyncEngine``.

    Parameters
    ----------
    url:
        Database URL (``sqlite:///…``, ``postgresql://…``, etc.)
    echo:
        If ``True``, log all SQL.
    pool_size, pool_timeout:
        Connection pool parameters (ignored for SQLite).
    **kwargs:
        Extra arguments forwarded to ``create_async_engine``.
    """
    async_url = to_async_url(url)

    if async_url.startswith("sqlite"):
        engine = create_async_engine(async_url, echo=echo, **kwargs)

        @event.listens_for(engine.sync_engine, "connect")
        def _set_sqlite_pragma(dbapi_connection: Any, _rec: Any) -> None:
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return engine

    pool_kwargs: dict[str, Any] = {"pool_pre_ping": True}
    if pool_size is not None:
        pool_kwargs["pool_size"] = pool_size
    if pool_timeout is not None:
        pool_kwargs["pool_timeout"] = pool_timeout
        # asyncpg connect timeout, so an unreachable server fails fast
        kwargs.setdefault("connect_args", {"timeout": pool_timeout})

    return create_async_engine(async_url, echo=echo, **pool_kwargs, **kwargs)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Return an ``async_sessionmaker`` bound to *engine*."""
    return async_sessionmaker(bind=engine, expire_on_commit=False)


async def init_schema(engine: AsyncEngine) -> None:
    """Create all tables that do not exist yet."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
