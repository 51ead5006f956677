"""Test fixtures for the Dosewatch backend."""
from __future__ import annotations

import os
from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine

os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test.db")

from dosewatch.core.config import get_settings
from dosewatch.core.security import get_password_hash
from dosewatch.db.base import Base
from dosewatch.db.session import dispose_engine, get_sessionmaker
from dosewatch.integrations.reminders import (
    InMemoryReminderDelivery,
    get_reminder_delivery,
)
from dosewatch.main import app
from dosewatch.models import CarerDependantRelationship, User, UserRole

PASSWORD = "Passw0rd!"


@pytest.fixture(scope="session")
def db_url(tmp_path_factory: pytest.TempPathFactory) -> str:
    """Provide a temporary SQLite database URL for the test session."""
    db_path = tmp_path_factory.mktemp("db") / "test.db"
    return f"sqlite+aiosqlite:///{db_path}"


@pytest_asyncio.fixture()
async def reset_database(db_url: str) -> AsyncIterator[None]:
    """Drop and recreate the database schema for an isolated test."""
    os.environ["DATABASE_URL"] = db_url
    get_settings.cache_clear()
    get_settings()

    await dispose_engine(db_url)
    engine = create_async_engine(db_url, future=True)
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.drop_all)
        await connection.run_sync(Base.metadata.create_all)
    await engine.dispose()
    yield
    await dispose_engine(db_url)


@pytest.fixture()
def delivery() -> InMemoryReminderDelivery:
    return InMemoryReminderDelivery()


@pytest_asyncio.fixture()
async def people(reset_database: AsyncIterator[None], db_url: str) -> dict[str, User]:
    """Seed a linked carer/dependant pair plus an unrelated carer."""
    async with get_sessionmaker(db_url)() as session:
        return await _seed_people(session)


async def _seed_people(session) -> dict[str, User]:
    carer = User(
        email="carer@example.com",
        hashed_password=get_password_hash(PASSWORD),
        name="Casey Carer",
        role=UserRole.CARER,
    )
    dependant = User(
        email="dependant@example.com",
        hashed_password=get_password_hash(PASSWORD),
        name="Dana Dependant",
        role=UserRole.DEPENDANT,
    )
    other_carer = User(
        email="other.carer@example.com",
        hashed_password=get_password_hash(PASSWORD),
        name="Olive Other",
        role=UserRole.CARER,
    )
    session.add_all([carer, dependant, other_carer])
    await session.flush()
    session.add(CarerDependantRelationship(carer_id=carer.id, dependant_id=dependant.id))
    await session.commit()
    return {"carer": carer, "dependant": dependant, "other_carer": other_carer}


@pytest_asyncio.fixture()
async def app_context(
    people: dict[str, User],
    delivery: InMemoryReminderDelivery,
) -> AsyncIterator[dict[str, object]]:
    """Yield an async client and seeded carer/dependant data."""
    context: dict[str, object] = {
        "carer_id": people["carer"].id,
        "carer_email": people["carer"].email,
        "dependant_id": people["dependant"].id,
        "dependant_email": people["dependant"].email,
        "other_carer_email": people["other_carer"].email,
        "password": PASSWORD,
        "delivery": delivery,
    }

    app.dependency_overrides[get_reminder_delivery] = lambda: delivery
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            context["client"] = client
            yield context
    finally:
        app.dependency_overrides.pop(get_reminder_delivery, None)

