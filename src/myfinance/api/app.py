"""
FastAPI application factory.

``create_app()`` wires settings, the database engine, the token and
password services, middleware, routers, error handlers and lifespan events
into a single ``FastAPI`` instance.  It is the only composition root.

Startup fails with :class:`~myfinance.core.errors.ConfigError` when
``JWT_SECRET`` is missing outside development/test.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from myfinance.api.middleware.errors import (
    app_error_handler,
    http_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from myfinance.api.middleware.request_context import RequestContextMiddleware
from myfinance.api.middleware.timing import TimingMiddleware
from myfinance.api.routers import health, transactions, users
from myfinance.api.routers.auth import create_auth_router
from myfinance.core.errors import AppError
from myfinance.core.logging import configure_logging, get_logger
from myfinance.core.orm import create_engine_from_url, create_session_factory, init_schema
from myfinance.core.security import PasswordHasher, TokenService
from myfinance.core.settings import Settings, get_settings

ENDPOINTS = (
    ("POST", "/auth/register", "Register new user"),
    ("POST", "/auth/login", "User login"),
    ("GET", "/auth/me", "Get current user info (protected)"),
    ("GET", "/users", "List all users (protected)"),
    ("POST", "/users", "Create new user (protected)"),
    ("POST", "/financial-transactions", "Create transaction (protected)"),
    ("GET", "/financial-transactions", "List transactions (protected)"),
    ("GET", "/financial-transactions/stats", "Get statistics (protected)"),
    ("GET", "/financial-transactions/{id}", "Get transaction by id (protected)"),
    ("PUT", "/financial-transactions/{id}", "Update transaction (protected)"),
    ("PATCH", "/financial-transactions/{id}", "Partial update transaction (protected)"),
    ("DELETE", "/financial-transactions/{id}", "Delete transaction (protected)"),
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: schema bootstrap on startup, engine disposal on shutdown."""
    log = get_logger("myfinance.api")
    settings: Settings = app.state.settings
    engine = app.state.engine

    if settings.auto_create_schema:
        try:
            await init_schema(engine)
            log.info("database_initialized", backend=engine.dialect.name)
        except (SQLAlchemyError, OSError) as e:
            # Keep serving; store calls answer 503 until the database is back.
            log.warning("database_auto_init_failed", error=str(e))

    log.info(
        "server_started",
        host=settings.host,
        port=settings.port,
        version=app.version,
        registration_requires_auth=settings.registration_requires_auth,
        endpoints=[f"{method} {path}" for method, path, _ in ENDPOINTS],
    )

    yield

    await engine.dispose()
    log.info("server_stopped")


def create_app(*, settings: Settings | None = None) -> FastAPI:
    """Build and return a fully-configured FastAPI application.

    Parameters
    ----------
    settings : Settings | None
        Override settings (useful for testing).  When ``None`` the cached
        singleton from :func:`get_settings` is used.

    Raises
    ------
    ConfigError
        ``JWT_SECRET`` is unset and the environment is not development/test.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level, settings.log_format)

    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan,
    )

    # ── Shared state ─────────────────────────────────────────────────
    app.state.settings = settings
    app.state.tokens = TokenService(
        settings.resolve_jwt_secret(),
        algorithm=settings.jwt_algorithm,
        ttl=timedelta(days=settings.jwt_expires_days),
    )
    app.state.passwords = PasswordHasher(settings.bcrypt_rounds)
    app.state.engine = create_engine_from_url(
        settings.database_url,
        pool_size=settings.db_pool_size,
        pool_timeout=settings.db_pool_timeout,
    )
    app.state.session_factory = create_session_factory(app.state.engine)

    # Override DI so endpoints use the provided settings
    app.dependency_overrides[get_settings] = lambda: settings

    # ── Middleware (last added is outermost) ──────────────────────────
    app.add_middleware(TimingMiddleware, timeout=settings.request_timeout_seconds)
    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Exception handlers ───────────────────────────────────────────
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # ── Routers ──────────────────────────────────────────────────────
    app.include_router(health.router)
    app.include_router(create_auth_router(registration_requires_auth=settings.registration_requires_auth))
    app.include_router(users.router)
    app.include_router(transactions.router)

    return app
