"""Confirmation workflow endpoint tests."""

from __future__ import annotations

from typing import Any

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


async def _authenticate(client: AsyncClient, email: str, password: str) -> dict[str, str]:
    response = await client.post(
        "/api/auth/login", json={"email": email, "password": password}
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}


async def _setup(app_context: dict[str, Any]) -> tuple[AsyncClient, dict, dict, dict]:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    password = app_context["password"]
    carer = await _authenticate(client, app_context["carer_email"], password)
    dependant = await _authenticate(client, app_context["dependant_email"], password)
    response = await client.post(
        "/api/medications",
        json={
            "name": "Warfarin",
            "dependant_id": str(app_context["dependant_id"]),
            "schedules": [{"time_of_day": "18:00", "days_of_week": [0, 1, 2, 3, 4, 5, 6]}],
        },
        headers=carer,
    )
    assert response.status_code == 201
    return client, carer, dependant, response.json()["medication"]


async def test_submit_confirm_and_recent(app_context: dict[str, Any]) -> None:
    client, carer, dependant, medication = await _setup(app_context)

    submitted = await client.post(
        "/api/confirmations/submit",
        json={
            "medicationId": medication["id"],
            "scheduleId": medication["schedules"][0]["id"],
            "photoPath": "uploads/warfarin.jpg",
        },
        headers=dependant,
    )
    assert submitted.status_code == 201, submitted.text
    confirmation = submitted.json()["confirmation"]
    assert confirmation["confirmed_by_carer"] is False

    recent_before = await client.get("/api/confirmations/recent", headers=dependant)
    assert recent_before.json() == []

    pending = await client.get("/api/confirmations/pending", headers=carer)
    assert pending.status_code == 200
    rows = pending.json()
    assert [row["id"] for row in rows] == [confirmation["id"]]
    assert rows[0]["medication_name"] == "Warfarin"
    assert rows[0]["dependant_name"] == "Dana Dependant"

    confirmed = await client.post(
        f"/api/confirmations/{confirmation['id']}/confirm",
        json={"notes": "Seen"},
        headers=carer,
    )
    assert confirmed.status_code == 200, confirmed.text
    body = confirmed.json()
    assert body["message"] == "Medication confirmed successfully"
    assert body["confirmation"]["confirmed_by_carer"] is True
    assert body["confirmation"]["carer_confirmed_at"] is not None

    pending_after = await client.get("/api/confirmations/pending", headers=carer)
    assert pending_after.json() == []

    recent = await client.get("/api/confirmations/recent", headers=dependant)
    assert [row["id"] for row in recent.json()] == [confirmation["id"]]
    assert recent.json()[0]["time_of_day"] == "18:00"

    board = await client.get("/api/medications/mine/doses", headers=dependant)
    assert board.json()[0]["taken_today"] is True


async def test_confirm_without_body(app_context: dict[str, Any]) -> None:
    client, carer, dependant, medication = await _setup(app_context)
    submitted = await client.post(
        "/api/confirmations/submit",
        json={"medication_id": medication["id"], "photo_path": "uploads/a.jpg"},
        headers=dependant,
    )
    confirmation_id = submitted.json()["confirmation"]["id"]

    confirmed = await client.post(
        f"/api/confirmations/{confirmation_id}/confirm", headers=carer
    )
    assert confirmed.status_code == 200
    assert confirmed.json()["confirmation"]["notes"] is None


async def test_submit_requires_medication_and_photo(app_context: dict[str, Any]) -> None:
    client, _, dependant, medication = await _setup(app_context)
    response = await client.post(
        "/api/confirmations/submit",
        json={"medicationId": medication["id"]},
        headers=dependant,
    )
    assert response.status_code == 400
    assert response.json() == {"message": "Medication ID and photo path are required"}


async def test_other_carer_cannot_confirm(app_context: dict[str, Any]) -> None:
    client, _, dependant, medication = await _setup(app_context)
    other = await _authenticate(
        client, app_context["other_carer_email"], app_context["password"]
    )
    submitted = await client.post(
        "/api/confirmations/submit",
        json={"medication_id": medication["id"], "photo_path": "uploads/a.jpg"},
        headers=dependant,
    )
    confirmation_id = submitted.json()["confirmation"]["id"]

    response = await client.post(
        f"/api/confirmations/{confirmation_id}/confirm", headers=other
    )
    assert response.status_code == 404
    assert response.json() == {"message": "Confirmation not found or access denied"}

    other_pending = await client.get("/api/confirmations/pending", headers=other)
    assert other_pending.json() == []
