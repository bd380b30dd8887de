"""Tests for the middleware stack and error handlers.

Uses minimal FastAPI apps so each piece is exercised on its own.
"""

from __future__ import annotations

import asyncio

import pytest
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.testclient import TestClient

from myfinance.api.deps import get_token_service
from myfinance.api.middleware.auth import CurrentUser, authenticate
from myfinance.api.middleware.errors import (
    app_error_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from myfinance.api.middleware.request_context import RequestContextMiddleware
from myfinance.api.middleware.timing import TimingMiddleware
from myfinance.core.errors import (
    AppError,
    InvalidTokenError,
    MalformedTokenError,
    MissingTokenError,
    NotFoundError,
    StoreUnavailableError,
)
from myfinance.core.security import TokenService
from tests._support.helpers import bearer

SECRET = "middleware-secret"
USER_ID = "550e8400-e29b-41d4-a716-446655440000"


class _Settings:
    debug = False


def _make_app(*, timeout: float | None = None) -> FastAPI:
    """Create a minimal FastAPI app with the middleware and handlers."""
    app = FastAPI()
    app.state.settings = _Settings()
    app.add_middleware(TimingMiddleware, timeout=timeout)
    app.add_middleware(RequestContextMiddleware)
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
    app.dependency_overrides[get_token_service] = lambda: TokenService(SECRET)

    @app.get("/ok")
    async def _ok():
        return {"status": "ok"}

    @app.get("/whoami")
    async def _whoami(auth: CurrentUser):
        return {"user_id": str(auth.user_id), "email": auth.email}

    @app.get("/missing")
    async def _missing():
        raise NotFoundError("Thing not found")

    @app.get("/db-down")
    async def _db_down():
        raise StoreUnavailableError()

    @app.get("/boom")
    async def _boom():
        raise RuntimeError("secret internals")

    @app.get("/slow")
    async def _slow():
        await asyncio.sleep(2)
        return {"status": "late"}

    return app


class TestAuthenticate:
    def test_valid_token(self):
        tokens = TokenService(SECRET)
        auth = authenticate(f"Bearer {tokens.issue(USER_ID, 'a@b.co')}", tokens)
        assert str(auth.user_id) == USER_ID
        assert auth.email == "a@b.co"

    @pytest.mark.parametrize("header", [None, "", "Bearer", "Bearer ", "Token abc", "bearer abc"])
    def test_missing_or_wrong_scheme(self, header):
        with pytest.raises(MissingTokenError):
            authenticate(header, TokenService(SECRET))

    def test_bad_signature(self):
        token = TokenService("other").issue(USER_ID, "a@b.co")
        with pytest.raises(InvalidTokenError):
            authenticate(f"Bearer {token}", TokenService(SECRET))

    def test_non_uuid_user_id(self):
        tokens = TokenService(SECRET)
        with pytest.raises(MalformedTokenError):
            authenticate(f"Bearer {tokens.issue('user-1', 'a@b.co')}", tokens)


class TestRequireAuthDependency:
    def test_accepts_token(self):
        client = TestClient(_make_app())
        resp = client.get("/whoami", headers=bearer(TokenService(SECRET).issue(USER_ID, "a@b.co")))
        assert resp.status_code == 200
        assert resp.json() == {"user_id": USER_ID, "email": "a@b.co"}

    def test_rejects_missing_token_as_problem_detail(self):
        client = TestClient(_make_app())
        resp = client.get("/whoami")
        assert resp.status_code == 401
        assert resp.headers["WWW-Authenticate"] == "Bearer"
        body = resp.json()
        assert body["status"] == 401
        assert body["detail"] == "Access token is required"
        assert body["instance"] == "/whoami"


class TestErrorHandlers:
    def test_app_error_status(self):
        client = TestClient(_make_app())
        resp = client.get("/missing")
        assert resp.status_code == 404
        assert resp.json()["title"] == "Thing not found"

    def test_store_unavailable_is_503(self):
        client = TestClient(_make_app())
        resp = client.get("/db-down")
        assert resp.status_code == 503
        assert resp.json()["detail"] == "Service temporarily unavailable"

    def test_validation_errors_aggregate(self, client, auth_headers):
        resp = client.post("/financial-transactions", json={"valor": -1, "empresa": "ACME"}, headers=auth_headers)
        assert resp.status_code == 400
        errors = resp.json()["errors"]
        assert {e["field"] for e in errors} == {"valor", "data", "tipo"}
        assert {e["code"] for e in errors} == {"GREATER_THAN", "MISSING"}

    def test_unexpected_error_is_generic_500(self):
        client = TestClient(_make_app(), raise_server_exceptions=False)
        resp = client.get("/boom")
        assert resp.status_code == 500
        assert "secret internals" not in resp.text
        assert resp.json()["detail"] == "An unexpected error occurred."


class TestRequestContextMiddleware:
    def test_generates_request_id(self):
        client = TestClient(_make_app())
        resp = client.get("/ok")
        assert len(resp.headers["X-Request-ID"]) == 36

    def test_echoes_client_request_id(self):
        client = TestClient(_make_app())
        resp = client.get("/ok", headers={"X-Request-ID": "abc-123"})
        assert resp.headers["X-Request-ID"] == "abc-123"


class TestTimingMiddleware:
    def test_header_present(self):
        client = TestClient(_make_app())
        resp = client.get("/ok")
        assert float(resp.headers["X-Process-Time-Ms"]) >= 0

    def test_timeout_returns_503(self):
        client = TestClient(_make_app(timeout=0.05))
        resp = client.get("/slow")
        assert resp.status_code == 503
        assert resp.json()["detail"] == "Request timed out"

    def test_fast_request_within_timeout(self):
        client = TestClient(_make_app(timeout=5))
        assert client.get("/ok").status_code == 200
