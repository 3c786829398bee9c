# tests/services/test_parser.py
"""Tests for completion parsing."""

import pytest
from orjson import dumps

from app.errors import ItineraryParseError
from app.services.parser import extract_json, parse_itinerary, parse_refinement

PAYLOAD = {
    "title": "Goa Getaway",
    "destination": "Goa",
    "duration": "2 days",
    "totalBudget": "₹20,000",
    "overview": "Beaches",
    "days": [
        {
            "day": 1,
            "date": "2025-12-20",
            "activities": ["Baga beach"],
            "meals": {"breakfast": "Cafe", "lunch": None, "dinner": "Shack"},
            "accommodation": "Hotel",
            "estimatedCost": "₹4,000",
            "notes": "Arrive",
        },
        {"day": 2, "date": "2025-12-21", "activities": ["Fort Aguada"]},
    ],
    "tips": ["Stay hydrated"],
}


@pytest.fixture
def raw() -> str:
    return dumps(PAYLOAD).decode()


class TestExtractJson:
    """Tests for isolating the JSON object in a completion."""

    def test_plain_json_untouched(self, raw: str) -> None:
        assert extract_json(raw) == raw

    def test_json_fence(self, raw: str) -> None:
        assert extract_json(f"```json\n{raw}\n```") == raw

    def test_bare_fence(self, raw: str) -> None:
        assert extract_json(f"```\n{raw}\n```") == raw

    def test_surrounding_prose(self, raw: str) -> None:
        text = f"Here is your plan:\n{raw}\nEnjoy the trip!"
        assert extract_json(text) == raw


class TestParseItinerary:
    """Tests for turning completion text into documents."""

    def test_valid_payload(self, raw: str) -> None:
        itinerary = parse_itinerary(raw)

        assert itinerary.title == "Goa Getaway"
        assert itinerary.total_budget == "₹20,000"
        assert itinerary.days[0].meals.lunch is None
        assert itinerary.days[0].estimated_cost == "₹4,000"
        assert itinerary.days[1].meals.breakfast is None
        assert itinerary.tips == ["Stay hydrated"]

    def test_fenced_payload_with_prose(self, raw: str) -> None:
        itinerary = parse_itinerary(f"Sure!\n```json\n{raw}\n```\nHave fun.")
        assert len(itinerary.days) == 2

    def test_missing_day_numbers_are_filled(self) -> None:
        payload = {"title": "t", "days": [{"activities": []}, {"activities": []}]}
        itinerary = parse_itinerary(dumps(payload).decode())
        assert [day.day for day in itinerary.days] == [1, 2]

    def test_inconsistent_numbers_are_renumbered(self) -> None:
        payload = {"title": "t", "days": [{"day": 3}, {"day": 1}]}
        itinerary = parse_itinerary(dumps(payload).decode())
        assert [day.day for day in itinerary.days] == [1, 2]

    def test_missing_optional_fields_default(self) -> None:
        itinerary = parse_itinerary('{"title": "t", "days": []}')
        assert itinerary.tips == []
        assert itinerary.overview == ""

    @pytest.mark.parametrize("text", ["", "   ", None])
    def test_empty_text(self, text: str | None) -> None:
        with pytest.raises(ItineraryParseError, match="Empty response"):
            parse_itinerary(text)

    @pytest.mark.parametrize(
        "text",
        [
            "I cannot help with that.",
            "{not json}",
            "[1, 2, 3]",
            '{"days": []}',
            '{"title": "t"}',
            '{"title": "t", "days": "none"}',
        ],
    )
    def test_unusable_text(self, text: str) -> None:
        with pytest.raises(ItineraryParseError):
            parse_itinerary(text)

    def test_invalid_day_shape(self) -> None:
        with pytest.raises(ItineraryParseError):
            parse_itinerary('{"title": "t", "days": [{"day": "first"}]}')


class TestParseRefinement:
    """Tests for refinement replies: a response string plus a nested itinerary."""

    def test_fenced_reply(self) -> None:
        raw = dumps({"response": " Added a spa day. ", "itinerary": PAYLOAD}).decode()

        response, itinerary = parse_refinement(f"```json\n{raw}\n```")

        assert response == "Added a spa day."
        assert itinerary == parse_itinerary(dumps(PAYLOAD).decode())

    def test_nested_days_are_renumbered(self) -> None:
        nested = {"title": "t", "days": [{"day": 3}, {}]}
        raw = dumps({"response": "ok", "itinerary": nested}).decode()

        _, itinerary = parse_refinement(raw)

        assert [day.day for day in itinerary.days] == [1, 2]

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "no json here",
            dumps({"itinerary": PAYLOAD}).decode(),
            dumps({"response": "  ", "itinerary": PAYLOAD}).decode(),
            dumps({"response": "ok", "itinerary": [PAYLOAD]}).decode(),
            dumps({"response": "ok", "itinerary": {"title": "t"}}).decode(),
        ],
    )
    def test_unusable_reply(self, text: str) -> None:
        with pytest.raises(ItineraryParseError):
            parse_refinement(text)
