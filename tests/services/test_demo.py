# tests/services/test_demo.py
"""Tests for the demo itinerary generator."""

from datetime import date

from app.schemas.itinerary import TravelPreferences
from app.services.demo import DAILY_COST, TOTAL_BUDGET, generate_demo_itinerary


def test_one_day_per_trip_day(preferences: TravelPreferences) -> None:
    itinerary = generate_demo_itinerary(preferences)

    assert len(itinerary.days) == preferences.duration_days == 3
    assert [day.day for day in itinerary.days] == [1, 2, 3]
    assert [day.date for day in itinerary.days] == ["2025-12-20", "2025-12-21", "2025-12-22"]


def test_header_fields(preferences: TravelPreferences) -> None:
    itinerary = generate_demo_itinerary(preferences)

    assert itinerary.title == "3-Day Journey from Mumbai to Goa"
    assert itinerary.destination == "Goa"
    assert itinerary.duration == "3 days"
    assert itinerary.total_budget == TOTAL_BUDGET["mid-range"]
    assert "beaches and food" in itinerary.overview
    assert "relaxed pace" in itinerary.overview
    assert len(itinerary.tips) == 4


def test_day_content_follows_preferences(preferences: TravelPreferences) -> None:
    first, middle, last = generate_demo_itinerary(preferences).days

    assert first.activities == [
        "Morning: Explore local beaches",
        "Afternoon: Visit popular food",
        "Evening: Experience local culture",
    ]
    assert first.accommodation == "Luxury resort"
    assert first.estimated_cost == DAILY_COST["mid-range"]
    assert first.notes == "Arrival day - lighter schedule recommended"
    assert middle.notes == "Full day of relaxed exploration"
    assert last.notes == "Departure day - plan for travel time"


def test_defaults_without_interests() -> None:
    prefs = TravelPreferences(
        origin="Delhi",
        destination="Jaipur",
        start_date=date(2025, 1, 1),
        end_date=date(2025, 1, 2),
        accommodation_type="any",
    )
    itinerary = generate_demo_itinerary(prefs)
    (day,) = itinerary.days

    assert day.activities[0] == "Morning: Explore local attractions"
    assert day.accommodation == "Best local accommodation"
    assert "best local experiences" in itinerary.overview


def test_deterministic(preferences: TravelPreferences) -> None:
    assert generate_demo_itinerary(preferences) == generate_demo_itinerary(preferences)
