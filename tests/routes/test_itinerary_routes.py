# tests/routes/test_itinerary_routes.py
"""Tests for the /itineraries endpoints."""

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import AsyncClient
from orjson import dumps

from app.main import app
from app.schemas.itinerary import Itinerary
from app.services.refinement import VEGETARIAN_DINNER

OWNER_HEADERS = {"X-User-Id": "owner-1"}
GUEST_HEADERS = {"X-User-Id": "guest-1"}

PREFERENCES = {
    "origin": "Mumbai",
    "destination": "Goa",
    "startDate": "2025-12-20",
    "endDate": "2025-12-24",
    "budget": "budget",
    "interests": ["beaches"],
    "travelers": 2,
    "accommodationType": "hostel",
    "vacationPace": "balanced",
}


class TestGenerate:
    """Tests for POST /itineraries/generate."""

    @pytest.mark.asyncio
    async def test_demo_without_ai_client(self, client: AsyncClient) -> None:
        response = await client.post("/itineraries/generate", json={"preferences": PREFERENCES})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["isDemo"] is True
        assert body["error"] is None
        assert len(body["data"]["days"]) == 4
        assert body["data"]["totalBudget"] == "₹15,000-25,000"
        assert "estimatedCost" in body["data"]["days"][0]

    @pytest.mark.asyncio
    async def test_uses_ai_client(self, client: AsyncClient) -> None:
        ai_client = MagicMock()
        ai_client.complete = AsyncMock(return_value='{"title": "AI plan", "days": [{}]}')
        app.state.ai_client = ai_client

        response = await client.post("/itineraries/generate", json={"preferences": PREFERENCES})

        body = response.json()
        assert body["isDemo"] is False
        assert body["data"]["title"] == "AI plan"
        assert body["data"]["days"][0]["day"] == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "change",
        [
            {"endDate": "2025-12-20"},
            {"endDate": "2025-12-19"},
            {"endDate": "2026-02-20"},
            {"origin": "   "},
            {"destination": ""},
            {"budget": "unlimited"},
            {"travelers": 0},
        ],
    )
    async def test_invalid_preferences(self, client: AsyncClient, change: dict[str, Any]) -> None:
        response = await client.post(
            "/itineraries/generate",
            json={"preferences": {**PREFERENCES, **change}},
        )

        assert response.status_code == 422
        assert response.json()["detail"] == "Validation failed"


class TestRefine:
    """Tests for POST /itineraries/refine."""

    @pytest.mark.asyncio
    async def test_keyword_rewrite_without_ai_client(
        self,
        client: AsyncClient,
        itinerary: Itinerary,
    ) -> None:
        response = await client.post(
            "/itineraries/refine",
            json={
                "itinerary": itinerary.to_document(),
                "preferences": PREFERENCES,
                "message": "We are vegetarian",
            },
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["isDemo"] is True
        assert body["changeSummary"]
        assert body["data"]["days"][0]["meals"]["dinner"] == VEGETARIAN_DINNER
        assert body["data"]["days"][1] == itinerary.to_document()["days"][1]

    @pytest.mark.asyncio
    async def test_uses_ai_client(self, client: AsyncClient, itinerary: Itinerary) -> None:
        reply = {"response": "Shortened.", "itinerary": {"title": "AI refined", "days": [{}]}}
        ai_client = MagicMock()
        ai_client.complete = AsyncMock(return_value=dumps(reply).decode())
        app.state.ai_client = ai_client

        response = await client.post(
            "/itineraries/refine",
            json={
                "itinerary": itinerary.to_document(),
                "preferences": PREFERENCES,
                "message": "One day only",
            },
        )

        body = response.json()
        assert body["isDemo"] is False
        assert body["response"] == "Shortened."
        assert body["data"]["title"] == "AI refined"
        assert body["data"]["days"][0]["day"] == 1

    @pytest.mark.asyncio
    async def test_blank_message_rejected(self, client: AsyncClient, itinerary: Itinerary) -> None:
        response = await client.post(
            "/itineraries/refine",
            json={
                "itinerary": itinerary.to_document(),
                "preferences": PREFERENCES,
                "message": "   ",
            },
        )
        assert response.status_code == 422


class TestCrud:
    """Tests for saving, loading, updating and deleting itineraries."""

    @pytest.mark.asyncio
    async def test_requires_user(self, client: AsyncClient) -> None:
        response = await client.get("/itineraries")
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_save_with_preferences(self, client: AsyncClient, itinerary: Itinerary) -> None:
        response = await client.post(
            "/itineraries",
            json={"itinerary": itinerary.to_document(), "preferences": PREFERENCES},
            headers=OWNER_HEADERS,
        )

        assert response.status_code == 201
        body = response.json()
        assert body["user_id"] == "owner-1"
        assert body["origin"] == "Mumbai"
        assert body["start_date"] == "2025-12-20"

    @pytest.mark.asyncio
    async def test_list_and_get(
        self,
        client: AsyncClient,
        saved_itinerary: dict[str, Any],
    ) -> None:
        listed = await client.get("/itineraries", headers=OWNER_HEADERS)
        assert [row["id"] for row in listed.json()] == [saved_itinerary["id"]]

        fetched = await client.get(f"/itineraries/{saved_itinerary['id']}", headers=OWNER_HEADERS)
        assert fetched.status_code == 200
        assert fetched.json()["title"] == "3-Day Goa Escape"

    @pytest.mark.asyncio
    async def test_other_user_gets_404(
        self,
        client: AsyncClient,
        saved_itinerary: dict[str, Any],
    ) -> None:
        response = await client.get(
            f"/itineraries/{saved_itinerary['id']}",
            headers=GUEST_HEADERS,
        )
        assert response.status_code == 404
        assert saved_itinerary["id"] in response.json()["detail"]

    @pytest.mark.asyncio
    async def test_patch(self, client: AsyncClient, saved_itinerary: dict[str, Any]) -> None:
        response = await client.patch(
            f"/itineraries/{saved_itinerary['id']}",
            json={"title": "Renamed", "totalBudget": "₹1"},
            headers=OWNER_HEADERS,
        )

        body = response.json()
        assert response.status_code == 200
        assert body["title"] == "Renamed"
        assert body["total_budget"] == "₹1"
        assert body["overview"] == saved_itinerary["overview"]

    @pytest.mark.asyncio
    async def test_replace_document(
        self,
        client: AsyncClient,
        saved_itinerary: dict[str, Any],
        itinerary: Itinerary,
    ) -> None:
        document = itinerary.to_document()
        document["days"] = list(reversed(document["days"]))
        document["tips"] = []

        response = await client.put(
            f"/itineraries/{saved_itinerary['id']}/document",
            json=document,
            headers=OWNER_HEADERS,
        )

        body = response.json()
        assert body["tips"] == []
        assert body["days"][0]["notes"] == "Notes for day 3"

    @pytest.mark.asyncio
    async def test_text_export(self, client: AsyncClient, saved_itinerary: dict[str, Any]) -> None:
        response = await client.get(
            f"/itineraries/{saved_itinerary['id']}/text",
            headers=OWNER_HEADERS,
        )

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert response.text.startswith("3-Day Goa Escape")

    @pytest.mark.asyncio
    async def test_delete(self, client: AsyncClient, saved_itinerary: dict[str, Any]) -> None:
        url = f"/itineraries/{saved_itinerary['id']}"

        assert (await client.delete(url, headers=OWNER_HEADERS)).status_code == 204
        assert (await client.get(url, headers=OWNER_HEADERS)).status_code == 404
        assert (await client.delete(url, headers=OWNER_HEADERS)).status_code == 404
