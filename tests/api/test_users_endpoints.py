"""Tests for /users."""

from __future__ import annotations


class TestListUsers:
    def test_requires_auth(self, client):
        assert client.get("/users").status_code == 401

    def test_lists_without_ids_or_passwords(self, client, register_user, auth_headers):
        register_user(email="bia@example.com", name="Bia")
        resp = client.get("/users", headers=auth_headers)
        assert resp.status_code == 200
        users = resp.json()["users"]
        assert {u["email"] for u in users} == {"ana@example.com", "bia@example.com"}
        for u in users:
            assert set(u) == {"name", "email", "createdAt", "updatedAt"}


class TestCreateUser:
    def test_requires_auth(self, client):
        resp = client.post("/users", json={"name": "Bia", "email": "bia@example.com", "password": "secret1"})
        assert resp.status_code == 401

    def test_creates_without_token(self, client, auth_headers):
        resp = client.post(
            "/users", json={"name": "Bia", "email": "bia@example.com", "password": "secret1"}, headers=auth_headers
        )
        assert resp.status_code == 201
        body = resp.json()
        assert body["message"] == "User created successfully"
        assert set(body["user"]) == {"name", "email", "createdAt"}
        assert "token" not in body

        login = client.post("/auth/login", json={"email": "bia@example.com", "password": "secret1"})
        assert login.status_code == 200

    def test_duplicate(self, client, auth_headers):
        resp = client.post(
            "/users", json={"name": "Ana", "email": "ana@example.com", "password": "secret1"}, headers=auth_headers
        )
        assert resp.status_code == 400
        assert resp.json()["detail"] == "User with this email already exists"

    def test_validation(self, client, auth_headers):
        resp = client.post("/users", json={"name": "Bia", "email": "bia@example.com"}, headers=auth_headers)
        assert resp.status_code == 400
        assert resp.json()["errors"][0]["field"] == "password"
