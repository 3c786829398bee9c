# tests/routes/test_main.py
"""Tests for the health check, root endpoint and error handling wiring."""

import pytest
from httpx import AsyncClient

from app.clients.memory_client import MemoryClient
from app.main import app


@pytest.mark.asyncio
async def test_root(client: AsyncClient) -> None:
    response = await client.get("/")
    assert response.status_code == 200
    assert "message" in response.json()


@pytest.mark.asyncio
async def test_health_ok(client: AsyncClient) -> None:
    response = await client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["services"]["store"] == "memory:ok"
    assert body["services"]["ai_client"] == "demo_mode"
    assert body["services"]["ai_circuit_breaker"]["name"] == "gemini_ai"
    assert body["services"]["store_circuit_breaker"]["name"] == "document_store"


@pytest.mark.asyncio
async def test_health_degraded_when_store_closed(client: AsyncClient) -> None:
    closed = MemoryClient()
    await closed.close()
    app.state.store = closed

    body = (await client.get("/health")).json()

    assert body["status"] == "degraded"
    assert body["services"]["store"] == "memory:unreachable"


@pytest.mark.asyncio
async def test_store_outage_maps_to_503(client: AsyncClient) -> None:
    closed = MemoryClient()
    await closed.close()
    app.state.store = closed

    response = await client.get("/itineraries", headers={"X-User-Id": "owner-1"})

    assert response.status_code == 503
    assert response.json()["detail"] == "In-memory store is closed"


@pytest.mark.asyncio
async def test_security_and_request_id_headers(client: AsyncClient) -> None:
    response = await client.get("/", headers={"X-Request-ID": "req-123"})

    assert response.headers["X-Request-ID"] == "req-123"
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"
