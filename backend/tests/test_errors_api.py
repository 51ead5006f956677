"""Error rendering tests for unexpected server failures."""

from __future__ import annotations

from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError

from dosewatch.main import app
from dosewatch.services import confirmation_service

pytestmark = pytest.mark.asyncio


async def _failing_pending(*args: Any, **kwargs: Any) -> list:
    raise OperationalError("SELECT 1", {}, Exception("database is locked"))


async def test_database_failure_renders_message_json(
    app_context: dict[str, Any], monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(
        confirmation_service, "list_pending_for_carer", _failing_pending
    )
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        login = await client.post(
            "/api/auth/login",
            json={
                "email": app_context["carer_email"],
                "password": app_context["password"],
            },
        )
        assert login.status_code == 200
        headers = {"Authorization": f"Bearer {login.json()['token']}"}

        response = await client.get("/api/confirmations/pending", headers=headers)

    assert response.status_code == 500
    assert response.headers["content-type"].startswith("application/json")
    assert response.json() == {"message": "Internal server error"}
