# tests/services/test_prompt.py
"""Tests for generation prompt rendering."""

from app.schemas.itinerary import Itinerary, TravelPersona, TravelPreferences
from app.services.prompt import (
    build_prompt,
    build_refinement_prompt,
    json_example,
    persona_section,
)


def test_prompt_carries_trip_details(preferences: TravelPreferences) -> None:
    prompt = build_prompt(preferences)

    assert "3-day travel itinerary for Goa from 2025-12-20 to 2025-12-23" in prompt
    assert "- Travelling from: Mumbai" in prompt
    assert "- 2 travellers" in prompt
    assert "- Interests: beaches, food" in prompt
    assert 'Include exactly 3 entries in "days"' in prompt
    assert "Additional notes" not in prompt


def test_prompt_is_deterministic(preferences: TravelPreferences) -> None:
    assert build_prompt(preferences) == build_prompt(preferences)


def test_additional_notes_included(preferences: TravelPreferences) -> None:
    prefs = preferences.model_copy(update={"additional_notes": "Vegetarian food only"})
    assert "- Additional notes: Vegetarian food only" in build_prompt(prefs)


def test_json_example_prefilled(preferences: TravelPreferences) -> None:
    example = json_example(preferences)

    assert '"destination": "Goa"' in example
    assert '"duration": "3 days"' in example
    assert '"date": "2025-12-20"' in example
    assert build_prompt(preferences).endswith(example)


def test_no_persona_section_by_default(preferences: TravelPreferences) -> None:
    assert "Travel Persona" not in build_prompt(preferences)
    assert persona_section(TravelPersona()) == ""
    assert persona_section(TravelPersona(interests=["treks"])) == ""


def test_persona_rendered(preferences: TravelPreferences) -> None:
    persona = TravelPersona(
        time_preference="early-bird",
        food_adventure="adventurous",
        interests=["Heritage Sites", "Street Food"],
    )
    prompt = build_prompt(preferences.model_copy(update={"travel_persona": persona}))

    assert "Travel Persona:\n- Time Preference: early-bird\n- Food Adventure: adventurous" in prompt
    assert "Social Style" not in prompt
    assert "- Interests: Heritage Sites, Street Food" in prompt


def test_refinement_prompt(preferences: TravelPreferences, itinerary: Itinerary) -> None:
    prompt = build_refinement_prompt(itinerary, preferences, "Add a spa day")

    assert '"title": "3-Day Goa Escape"' in prompt
    assert '"totalBudget": "₹30,000"' in prompt
    assert "- Travellers: 2" in prompt
    assert 'Traveller Request: "Add a spa day"' in prompt
    assert '"response": "Brief explanation of changes made"' in prompt
    assert "relaxed pace" in prompt
