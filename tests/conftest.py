"""
Shared pytest fixtures for myfinance tests.

This module provides:
- ``settings``: test configuration pointing at a throwaway SQLite file
- ``app`` / ``client``: the real application behind a ``TestClient``
- ``register_user`` / ``auth_headers``: sign up a user and get a bearer header

Usage::

    def test_something(client, auth_headers):
        resp = client.get("/auth/me", headers=auth_headers)
"""

from __future__ import annotations

import os
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

# Settings() falls back to the environment; keep stray shells from leaking in.
os.environ["ENVIRONMENT"] = "test"
os.environ.setdefault("DATABASE_URL", "sqlite:///./myfinance-test.db")
os.environ.pop("JWT_SECRET", None)

from myfinance.api.app import create_app  # noqa: E402
from myfinance.core.settings import Settings, get_settings  # noqa: E402
from tests._support.helpers import TEST_JWT_SECRET, bearer  # noqa: E402


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> Generator[None, None, None]:
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def database_url(tmp_path: Path) -> str:
    return f"sqlite:///{tmp_path / 'myfinance.db'}"


@pytest.fixture
def make_settings(database_url: str) -> Callable[..., Settings]:
    """Factory for test settings; keyword arguments override the defaults."""

    def _make(**overrides: Any) -> Settings:
        values: dict[str, Any] = {
            "database_url": database_url,
            "environment": "test",
            "jwt_secret": TEST_JWT_SECRET,
            "bcrypt_rounds": 4,
            "log_level": "WARNING",
        }
        values.update(overrides)
        return Settings(_env_file=None, **values)

    return _make


@pytest.fixture
def settings(make_settings: Callable[..., Settings]) -> Settings:
    return make_settings()


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    return create_app(settings=settings)


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    # Entering the context runs the lifespan, which creates the tables.
    with TestClient(app) as c:
        yield c


@pytest.fixture
def register_user(client: TestClient) -> Callable[..., dict[str, Any]]:
    """Register a user and return the response body (``user`` + ``token``)."""

    def _register(
        email: str = "ana@example.com",
        password: str = "secret123",
        name: str = "Ana",
    ) -> dict[str, Any]:
        resp = client.post("/auth/register", json={"name": name, "email": email, "password": password})
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _register


@pytest.fixture
def auth_headers(register_user: Callable[..., dict[str, Any]]) -> dict[str, str]:
    return bearer(register_user()["token"])
