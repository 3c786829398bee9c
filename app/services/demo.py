# app/services/demo.py

"""Deterministic placeholder itinerary used when real generation is unavailable."""

from datetime import timedelta

from app.schemas.itinerary import Day, Itinerary, Meals, TravelPreferences

TOTAL_BUDGET = {
    "budget": "₹15,000-25,000",
    "mid-range": "₹30,000-50,000",
    "luxury": "₹60,000-1,00,000",
}

DAILY_COST = {
    "budget": "₹2,500-3,500",
    "mid-range": "₹4,500-6,500",
    "luxury": "₹8,500-12,000",
}

ACCOMMODATION = {
    "hotel": "Recommended hotel",
    "hostel": "Top-rated hostel",
    "airbnb": "Unique local Airbnb",
    "resort": "Luxury resort",
    "villa": "Private villa",
    "mix": "Mix of accommodations",
}
DEFAULT_ACCOMMODATION = "Best local accommodation"

DEMO_MEALS = Meals(
    breakfast="Local café recommendation",
    lunch="Traditional restaurant",
    dinner="Highly-rated local dining",
)


def _interest(interests: list[str], index: int, fallback: str) -> str:
    return interests[index] if index < len(interests) else fallback


def _notes(index: int, duration: int, pace: str) -> str:
    if index == 0:
        return "Arrival day - lighter schedule recommended"
    if index == duration - 1:
        return "Departure day - plan for travel time"
    return f"Full day of {pace} exploration"


def generate_demo_itinerary(preferences: TravelPreferences) -> Itinerary:
    """
    Build a structurally valid itinerary from preferences alone.

    The result has one day per trip day, dated consecutively from the start
    date, and is identical for identical preferences.

    Args:
        preferences: Validated trip preferences.

    Returns:
        A placeholder itinerary satisfying ``days[i].day == i + 1``.
    """
    p = preferences
    duration = p.duration_days
    interests = p.interests
    featured = " and ".join(interests) if interests else "local"

    days = [
        Day(
            day=index + 1,
            date=(p.start_date + timedelta(days=index)).isoformat(),
            activities=[
                f"Morning: Explore local {_interest(interests, 0, 'attractions')}",
                f"Afternoon: Visit popular {_interest(interests, 1, 'landmarks')}",
                f"Evening: Experience local {_interest(interests, 2, 'culture')}",
            ],
            meals=DEMO_MEALS,
            accommodation=ACCOMMODATION.get(p.accommodation_type, DEFAULT_ACCOMMODATION),
            estimated_cost=DAILY_COST[p.budget],
            notes=_notes(index, duration, p.vacation_pace),
        )
        for index in range(duration)
    ]

    return Itinerary(
        title=f"{duration}-Day Journey from {p.origin} to {p.destination}",
        destination=p.destination,
        duration=f"{duration} days",
        total_budget=TOTAL_BUDGET[p.budget],
        overview=(
            f"A carefully crafted {duration}-day journey from {p.origin} to {p.destination}, "
            f"featuring the best {featured} experiences tailored to your {p.budget} budget "
            f"and {p.vacation_pace} pace."
        ),
        days=days,
        tips=[
            f"Best time to visit {p.destination} is during your planned dates",
            "Book accommodations in advance for better rates",
            "Try local transportation to save money and experience authentic culture",
            "Keep copies of important documents in separate locations",
        ],
    )
