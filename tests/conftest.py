# tests/conftest.py
"""Root pytest configuration and shared fixtures."""

import os
from collections.abc import AsyncGenerator
from datetime import date

# Tests always run against the in-memory store and the demo generator.
# This must happen before app is imported anywhere
os.environ["SUPABASE_URL"] = ""
os.environ["SUPABASE_SERVICE_ROLE_KEY"] = ""
os.environ["GEMINI_API_KEY"] = ""
os.environ["LOG_TO_FILE"] = "false"

from pytest import fixture

from app.clients.memory_client import MemoryClient
from app.schemas.itinerary import Day, Itinerary, Meals, TravelPreferences


@fixture
def preferences() -> TravelPreferences:
    return TravelPreferences(
        origin="Mumbai",
        destination="Goa",
        start_date=date(2025, 12, 20),
        end_date=date(2025, 12, 23),
        budget="mid-range",
        interests=["beaches", "food"],
        travelers=2,
        accommodation_type="resort",
        vacation_pace="relaxed",
    )


@fixture
def itinerary() -> Itinerary:
    """Three-day document with distinct activities per day."""
    return Itinerary(
        title="3-Day Goa Escape",
        destination="Goa",
        duration="3 days",
        total_budget="₹30,000",
        overview="Sun, sand and seafood.",
        days=[
            Day(
                day=index + 1,
                date=f"2025-12-{20 + index}",
                activities=[f"Activity {index + 1}a", f"Activity {index + 1}b"],
                meals=Meals(breakfast="Cafe", lunch="Shack", dinner="Fort view"),
                accommodation="Beach resort",
                estimated_cost="₹5,000",
                notes=f"Notes for day {index + 1}",
            )
            for index in range(3)
        ],
        tips=["Carry sunscreen", "Rent a scooter"],
    )


@fixture
async def store() -> AsyncGenerator[MemoryClient]:
    client = MemoryClient()
    yield client
    await client.close()
