"""Shared fixtures: in-memory SQLite store and an ASGI client bound to the app."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import httpx
import pytest
import pytest_asyncio
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

REPO_DIR = Path(__file__).resolve().parent.parent
BACKEND_DIR = REPO_DIR / "backend"
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("EPAPER_MODE", "live")

from database import get_db, init_db  # noqa: E402
from session_context import SessionContext  # noqa: E402


@pytest.fixture()
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture()
def db(engine):
    Session = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = Session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def guest() -> SessionContext:
    return SessionContext()


@pytest_asyncio.fixture()
async def client(engine):
    """Async httpx client against the FastAPI app with the test store injected."""
    from main import app

    TestingSession = sessionmaker(bind=engine, autocommit=False, autoflush=False)

    def override_get_db():
        session = TestingSession()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


def forecast_payload(**overrides) -> dict:
    """Minimal Open-Meteo forecast body."""
    payload = {
        "current_weather": {"temperature": 11.6, "windspeed": 23.4, "weathercode": 61},
        "daily": {"temperature_2m_max": [13.5], "temperature_2m_min": [7.2]},
    }
    payload.update(overrides)
    return payload


def mock_weather_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))
