"""Registration, login and role gate tests."""

from __future__ import annotations

from typing import Any

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


async def _login(client: AsyncClient, email: str, password: str) -> str:
    response = await client.post(
        "/api/auth/login", json={"email": email, "password": password}
    )
    assert response.status_code == 200, response.text
    return response.json()["token"]


async def test_register_returns_user_and_token(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    response = await client.post(
        "/api/auth/register",
        json={
            "email": "New.Dependant@Example.com",
            "password": "secret1",
            "name": "Nia New",
            "role": "dependant",
        },
    )
    assert response.status_code == 201, response.text
    body = response.json()
    assert body["message"] == "User created successfully"
    assert body["user"]["email"] == "new.dependant@example.com"
    assert body["user"]["role"] == "dependant"
    assert "hashed_password" not in body["user"]

    token = await _login(client, "new.dependant@example.com", "secret1")
    mine = await client.get(
        "/api/medications/mine", headers={"Authorization": f"Bearer {token}"}
    )
    assert mine.status_code == 200
    assert mine.json() == []


async def test_register_duplicate_email_conflicts(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    response = await client.post(
        "/api/auth/register",
        json={
            "email": app_context["carer_email"],
            "password": "secret1",
            "name": "Again",
            "role": "carer",
        },
    )
    assert response.status_code == 409
    assert response.json() == {"message": "User already exists"}


async def test_register_rejects_unknown_role(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    response = await client.post(
        "/api/auth/register",
        json={
            "email": "admin@example.com",
            "password": "secret1",
            "name": "Admin",
            "role": "admin",
        },
    )
    assert response.status_code == 400
    assert "message" in response.json()


async def test_login_with_bad_password(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    response = await client.post(
        "/api/auth/login",
        json={"email": app_context["carer_email"], "password": "wrong-pass"},
    )
    assert response.status_code == 401
    assert response.json() == {"message": "Invalid credentials"}


async def test_missing_and_invalid_tokens(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]

    missing = await client.get("/api/medications/mine")
    assert missing.status_code == 401
    assert missing.json() == {"message": "Access token required"}

    invalid = await client.get(
        "/api/medications/mine", headers={"Authorization": "Bearer not-a-jwt"}
    )
    assert invalid.status_code == 401
    assert invalid.json() == {"message": "Invalid token"}


async def test_wrong_role_is_forbidden(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    carer_token = await _login(
        client, app_context["carer_email"], app_context["password"]
    )
    dependant_token = await _login(
        client, app_context["dependant_email"], app_context["password"]
    )

    as_carer = await client.get(
        "/api/medications/mine", headers={"Authorization": f"Bearer {carer_token}"}
    )
    assert as_carer.status_code == 403
    assert as_carer.json() == {"message": "Access denied. dependant role required."}

    as_dependant = await client.get(
        "/api/confirmations/pending",
        headers={"Authorization": f"Bearer {dependant_token}"},
    )
    assert as_dependant.status_code == 403
    assert as_dependant.json() == {"message": "Access denied. carer role required."}
