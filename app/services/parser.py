# app/services/parser.py

"""
Completion response parsing.

Models are asked for raw JSON but often wrap it in a markdown fence or
surround it with prose. ``extract_json`` strips both before decoding.
"""

from logging import getLogger
from re import IGNORECASE
from re import compile as re_compile
from typing import Any

from orjson import JSONDecodeError, loads
from pydantic import ValidationError

from app.configs import file_logger
from app.errors import ItineraryParseError
from app.schemas.itinerary import Itinerary
from app.services.editor import renumber_days

logger = file_logger(getLogger(__name__))

FENCE_PATTERN = re_compile(r"```(?:json)?\s*([\s\S]*?)\s*```", IGNORECASE)


def extract_json(text: str) -> str:
    """
    Isolate the JSON object inside a completion.

    Args:
        text: Raw completion text.

    Returns:
        The contents of the first fenced block, if any, trimmed to the span
        between the first ``{`` and the last ``}``.
    """
    match = FENCE_PATTERN.search(text)
    candidate = match.group(1) if match else text

    start, end = candidate.find("{"), candidate.rfind("}")
    if start != -1 and end > start:
        return candidate[start : end + 1]
    return candidate.strip()


def _decode(payload: str) -> dict[str, Any]:
    try:
        data = loads(payload)
    except JSONDecodeError as e:
        msg = f"Invalid itinerary format from AI: {e}"
        raise ItineraryParseError(detail=msg) from e

    if not isinstance(data, dict):
        msg = "Invalid itinerary format from AI: expected a JSON object"
        raise ItineraryParseError(detail=msg)
    return data


def itinerary_from_data(data: dict[str, Any]) -> Itinerary:
    """
    Validate a decoded itinerary object.

    Days without a number get their position; the result is always
    renumbered so that ``days[i].day == i + 1``.

    Raises:
        ItineraryParseError: If the object lacks a title or a list of days,
            or fails validation.
    """
    days = data.get("days")
    if not data.get("title") or not isinstance(days, list):
        raise ItineraryParseError()

    for index, day in enumerate(days):
        if isinstance(day, dict) and day.get("day") is None:
            day["day"] = index + 1

    try:
        itinerary = Itinerary.model_validate(data)
    except ValidationError as e:
        logger.warning(f"Completion failed itinerary validation: {e.error_count()} error(s)")
        msg = f"Invalid itinerary format from AI: {e.errors()[0]['msg']}"
        raise ItineraryParseError(detail=msg) from e

    if not itinerary.is_numbered:
        itinerary = itinerary.model_copy(update={"days": renumber_days(itinerary.days)})
    return itinerary


def parse_itinerary(text: str | None) -> Itinerary:
    """
    Turn a completion into an itinerary document.

    Raises:
        ItineraryParseError: If the text holds no JSON object, or the object
            is not a valid itinerary.
    """
    if not text or not text.strip():
        raise ItineraryParseError(detail="Empty response from AI")
    return itinerary_from_data(_decode(extract_json(text)))


def parse_refinement(text: str | None) -> tuple[str, Itinerary]:
    """
    Turn a refinement completion into the assistant reply and the new document.

    The completion must be an object with a non-empty ``response`` string and
    an ``itinerary`` object.

    Returns:
        ``(response, itinerary)``.

    Raises:
        ItineraryParseError: If either part is missing or the itinerary is invalid.
    """
    if not text or not text.strip():
        raise ItineraryParseError(detail="Empty response from AI")

    data = _decode(extract_json(text))
    response, nested = data.get("response"), data.get("itinerary")
    if not isinstance(response, str) or not response.strip() or not isinstance(nested, dict):
        raise ItineraryParseError(detail="Invalid refinement format from AI")
    return response.strip(), itinerary_from_data(nested)
