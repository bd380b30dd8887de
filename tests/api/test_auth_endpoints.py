"""Tests for /auth/register, /auth/login and /auth/me."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from myfinance.core.security import TokenService
from tests._support.helpers import TEST_JWT_SECRET, bearer


class TestRegister:
    def test_creates_user_and_returns_token(self, client):
        resp = client.post(
            "/auth/register", json={"name": "Ana", "email": "ana@example.com", "password": "secret123"}
        )
        assert resp.status_code == 201
        body = resp.json()
        assert body["message"] == "User created successfully"
        assert set(body["user"]) == {"id", "name", "email", "createdAt"}
        assert body["user"]["email"] == "ana@example.com"
        assert "password" not in body["user"]
        assert body["token"]

    def test_token_is_usable(self, client, register_user):
        body = register_user()
        resp = client.get("/auth/me", headers=bearer(body["token"]))
        assert resp.status_code == 200
        assert resp.json()["user"]["id"] == body["user"]["id"]

    def test_duplicate_email(self, client, register_user):
        register_user()
        resp = client.post(
            "/auth/register", json={"name": "Other", "email": "ana@example.com", "password": "another1"}
        )
        assert resp.status_code == 400
        assert resp.json()["detail"] == "User with this email already exists"

    def test_all_invalid_fields_are_reported(self, client):
        resp = client.post("/auth/register", json={"name": "", "email": "not-an-email", "password": "123"})
        assert resp.status_code == 400
        fields = {e["field"] for e in resp.json()["errors"]}
        assert fields == {"name", "email", "password"}

    def test_missing_body(self, client):
        resp = client.post("/auth/register")
        assert resp.status_code == 400

    def test_public_by_default(self, client):
        resp = client.post("/auth/register", json={"name": "A", "email": "a@example.com", "password": "secret1"})
        assert resp.status_code == 201


class TestRegisterRequiresAuth:
    def test_protected_when_configured(self, make_settings):
        from fastapi.testclient import TestClient

        from myfinance.api.app import create_app

        app = create_app(settings=make_settings(registration_requires_auth=True))
        with TestClient(app) as c:
            body = {"name": "A", "email": "a@example.com", "password": "secret1"}
            resp = c.post("/auth/register", json=body)
            assert resp.status_code == 401
            assert resp.json()["detail"] == "Access token is required"

            token = TokenService(TEST_JWT_SECRET).issue("550e8400-e29b-41d4-a716-446655440000", "admin@x.com")
            resp = c.post("/auth/register", json=body, headers=bearer(token))
            assert resp.status_code == 201


class TestLogin:
    def test_success(self, client, register_user):
        register_user()
        resp = client.post("/auth/login", json={"email": "ana@example.com", "password": "secret123"})
        assert resp.status_code == 200
        body = resp.json()
        assert body["message"] == "Login successful"
        assert set(body["user"]) == {"id", "name", "email"}
        assert body["token"]

    def test_failures_are_indistinguishable(self, client, register_user):
        register_user()
        wrong_password = client.post("/auth/login", json={"email": "ana@example.com", "password": "nope"})
        unknown_email = client.post("/auth/login", json={"email": "ghost@example.com", "password": "nope"})
        assert wrong_password.status_code == unknown_email.status_code == 401
        assert wrong_password.json() == unknown_email.json()
        assert wrong_password.json()["detail"] == "Invalid credentials"

    def test_invalid_payload(self, client):
        resp = client.post("/auth/login", json={"email": "bad", "password": ""})
        assert resp.status_code == 400
        assert {e["field"] for e in resp.json()["errors"]} == {"email", "password"}


class TestMe:
    def test_profile(self, client, register_user):
        body = register_user(name="Ana Maria")
        resp = client.get("/auth/me", headers=bearer(body["token"]))
        user = resp.json()["user"]
        assert user["name"] == "Ana Maria"
        assert set(user) == {"id", "name", "email", "createdAt"}

    def test_requires_token(self, client):
        resp = client.get("/auth/me")
        assert resp.status_code == 401
        assert resp.json()["detail"] == "Access token is required"

    def test_non_bearer_scheme(self, client):
        resp = client.get("/auth/me", headers={"Authorization": "Basic abc"})
        assert resp.status_code == 401
        assert resp.json()["detail"] == "Access token is required"

    def test_invalid_token(self, client):
        resp = client.get("/auth/me", headers=bearer("garbage"))
        assert resp.status_code == 401
        assert resp.json()["detail"] == "Invalid token"

    def test_expired_token(self, client, register_user):
        user_id = register_user()["user"]["id"]
        token = TokenService(TEST_JWT_SECRET).issue(
            user_id, "ana@example.com", now=datetime.now(UTC) - timedelta(days=8)
        )
        resp = client.get("/auth/me", headers=bearer(token))
        assert resp.status_code == 401
        assert resp.json()["detail"] == "Token expired"

    def test_non_uuid_subject(self, client):
        token = TokenService(TEST_JWT_SECRET).issue("42", "ana@example.com")
        resp = client.get("/auth/me", headers=bearer(token))
        assert resp.status_code == 401
        assert resp.json()["detail"] == "Invalid token format"

    def test_deleted_user(self, client):
        token = TokenService(TEST_JWT_SECRET).issue("550e8400-e29b-41d4-a716-446655440000", "gone@example.com")
        resp = client.get("/auth/me", headers=bearer(token))
        assert resp.status_code == 404
        assert resp.json()["detail"] == "User not found"
