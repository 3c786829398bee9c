# app/services/refinement.py

"""
Conversational refinement of an existing itinerary.

The traveller asks for a change in plain words ("make it more relaxed",
"add a museum") and the completion service returns a short reply plus the
rewritten document. Without a completion client, or when the completion
fails, a small keyword-based rewrite of the first day stands in so the
caller always gets a reply and a usable document.
"""

from collections.abc import Callable
from logging import getLogger
from re import IGNORECASE, Pattern
from re import compile as re_compile

from app.clients.ai_client import AiClient
from app.configs.settings import ITINERARY_REFINEMENT_ERROR, file_logger, settings
from app.errors import BaseAppError
from app.schemas.itinerary import Itinerary, RefinementResult, TravelPreferences
from app.services import editor
from app.services.parser import parse_refinement
from app.services.prompt import REFINEMENT_SYSTEM_INSTRUCTION, build_refinement_prompt

logger = file_logger(getLogger(__name__))

DEFAULT_RESPONSE = "I've made some adjustments to your itinerary based on your request."
DEFAULT_CHANGE_SUMMARY = "• Made general improvements to your itinerary based on your request"

VEGETARIAN_DINNER = "Green Garden Vegetarian Restaurant - Highly rated plant-based cuisine"
FREE_TIME = "Afternoon: Free time for relaxation or personal exploration"
STREET_FOOD_LUNCH = "Local street food market - Authentic and budget-friendly dining"

type Rewrite = Callable[[Itinerary], tuple[Itinerary, str, str] | None]


def _vegetarian(itinerary: Itinerary) -> tuple[Itinerary, str, str] | None:
    first = itinerary.days[0]
    if not first.meals.dinner:
        return None
    meals = first.meals.model_copy(update={"dinner": VEGETARIAN_DINNER})
    return (
        editor.edit_day(itinerary, 0, "meals", meals),
        "I've updated your dinner recommendation to include a great vegetarian restaurant option.",
        "• Changed Day 1 dinner to Green Garden Vegetarian Restaurant\n"
        "• Updated to plant-based cuisine option",
    )


def _relaxed(itinerary: Itinerary) -> tuple[Itinerary, str, str] | None:
    activities = itinerary.days[0].activities
    if len(activities) <= 2:
        return None
    return (
        editor.edit_day(itinerary, 0, "activities", [*activities[:2], FREE_TIME]),
        "I've made your itinerary more relaxed by reducing the number of scheduled "
        "activities and adding free time.",
        f"• Reduced Day 1 activities from {len(activities)} to 2\n"
        "• Added free time for relaxation in the afternoon",
    )


def _museum(itinerary: Itinerary) -> tuple[Itinerary, str, str] | None:
    visit = (
        f"Afternoon: Visit the local art museum or cultural centre in {itinerary.destination}"
    )
    if len(itinerary.days[0].activities) > 1:
        refined = editor.update_activity(itinerary, 0, 1, visit)
    else:
        refined = editor.add_activity(itinerary, 0, visit)
    return (
        refined,
        "I've added a museum visit to your itinerary to match your interest in art and culture.",
        "• Updated Day 1 afternoon activity to a museum visit\n"
        f"• Added cultural centre option in {itinerary.destination}",
    )


def _budget(itinerary: Itinerary) -> tuple[Itinerary, str, str] | None:
    meals = itinerary.days[0].meals.model_copy(update={"lunch": STREET_FOOD_LUNCH})
    return (
        editor.edit_day(itinerary, 0, "meals", meals),
        "I've updated your recommendations to include more budget-friendly options "
        "while maintaining quality.",
        "• Changed Day 1 lunch to local street food market\n"
        "• Updated to budget-friendly dining option",
    )


# First matching keyword group wins.
REWRITES: list[tuple[Pattern[str], Rewrite]] = [
    (re_compile(r"\b(vegetarian|vegan)\b", IGNORECASE), _vegetarian),
    (re_compile(r"\b(relax\w*|slower)\b", IGNORECASE), _relaxed),
    (re_compile(r"\b(museums?|art|arts)\b", IGNORECASE), _museum),
    (re_compile(r"\b(budget|cheaper)\b", IGNORECASE), _budget),
]


def mock_refinement(itinerary: Itinerary, message: str) -> tuple[Itinerary, str, str]:
    """
    Rewrite the first day according to a keyword in ``message``.

    Deterministic and side-effect free. When no keyword matches, or the
    matching rewrite does not apply (no dinner to replace, too few
    activities to trim), the document is returned unchanged with a generic
    reply.

    Returns:
        ``(itinerary, response, change_summary)``.
    """
    if itinerary.days:
        for pattern, rewrite in REWRITES:
            if pattern.search(message):
                if (result := rewrite(itinerary)) is not None:
                    return result
                break
    return itinerary, DEFAULT_RESPONSE, DEFAULT_CHANGE_SUMMARY


def _mock(itinerary: Itinerary, message: str, error: str | None) -> RefinementResult:
    refined, response, summary = mock_refinement(itinerary, message)
    return RefinementResult(
        success=error is None,
        response=response,
        data=refined,
        change_summary=summary,
        error=error,
        is_demo=True,
    )


async def refine_itinerary(
    itinerary: Itinerary,
    preferences: TravelPreferences,
    message: str,
    ai_client: AiClient | None,
) -> RefinementResult:
    """
    Apply a conversational change request to an itinerary.

    Never raises: the result always carries a reply and a usable document.

    Args:
        itinerary: The document to refine.
        preferences: Preferences the document was generated from.
        message: What the traveller wants changed.
        ai_client: Completion client, or None when no credential is configured.

    Returns:
        - ``success=True, is_demo=False`` for a parsed completion.
        - ``success=True, is_demo=True`` when no completion client is configured.
        - ``success=False, is_demo=True`` with ``error`` set when the
          completion or its parsing failed.
    """
    if ai_client is None:
        logger.info("No completion client configured, using keyword refinement")
        return _mock(itinerary, message, None)

    logger.info(f"Refining {len(itinerary.days)}-day itinerary for {itinerary.destination}")
    try:
        completion = await ai_client.complete(
            prompt=build_refinement_prompt(itinerary, preferences, message),
            system_instruction=REFINEMENT_SYSTEM_INSTRUCTION,
            temperature=settings.AI_TEMPERATURE,
        )
        response, refined = parse_refinement(completion)
    except BaseAppError as e:
        logger.warning(f"Itinerary refinement degraded to keyword rewrite: {e.detail}")
        return _mock(itinerary, message, e.detail)
    except Exception:
        logger.exception("Unexpected failure while refining itinerary")
        return _mock(itinerary, message, ITINERARY_REFINEMENT_ERROR)

    return RefinementResult(success=True, response=response, data=refined, is_demo=False)
