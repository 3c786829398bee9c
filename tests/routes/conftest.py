# tests/routes/conftest.py
"""Pytest configuration and fixtures for route tests."""

from collections.abc import AsyncGenerator
from typing import Any

from httpx import ASGITransport, AsyncClient
from pytest import fixture

from app.clients.memory_client import MemoryClient
from app.main import app
from app.managers.rate_limiter import limiter
from app.schemas.itinerary import Itinerary

OWNER_HEADERS = {"X-User-Id": "owner-1", "X-User-Email": "owner@example.com"}
GUEST_HEADERS = {"X-User-Id": "guest-1"}


@fixture
async def client(store: MemoryClient) -> AsyncGenerator[AsyncClient]:
    """Async HTTP client over the app, backed by a fresh in-memory store and no AI client."""
    limiter.enabled = False
    app.state.store = store
    app.state.ai_client = None
    async with AsyncClient(
        base_url="http://test",
        transport=ASGITransport(app=app),
    ) as ac:
        app.state.limiter = limiter
        yield ac


@fixture
async def saved_itinerary(client: AsyncClient, itinerary: Itinerary) -> dict[str, Any]:
    response = await client.post(
        "/itineraries",
        json={"itinerary": itinerary.to_document()},
        headers=OWNER_HEADERS,
    )
    assert response.status_code == 201
    return response.json()


@fixture
async def collab_share(client: AsyncClient, saved_itinerary: dict[str, Any]) -> dict[str, Any]:
    response = await client.post(
        "/shares",
        json={"itinerary_id": saved_itinerary["id"], "share_mode": "collaborate"},
        headers=OWNER_HEADERS,
    )
    assert response.status_code == 201
    return response.json()
