"""Small helpers shared by API tests."""

from __future__ import annotations

TEST_JWT_SECRET = "test-secret-key"


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def transaction_payload(**overrides: object) -> dict[str, object]:
    body: dict[str, object] = {
        "valor": 100.5,
        "empresa": "ACME Ltda",
        "data": "2024-03-01T10:00:00Z",
        "tipo": "Despesa",
    }
    body.update(overrides)
    return body
