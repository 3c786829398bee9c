# app/services/itinerary.py

from logging import getLogger

from app.clients.ai_client import AiClient
from app.configs.settings import ITINERARY_GENERATION_ERROR, file_logger, settings
from app.errors import BaseAppError
from app.schemas.itinerary import GenerationResult, TravelPreferences
from app.services.demo import generate_demo_itinerary
from app.services.parser import parse_itinerary
from app.services.prompt import SYSTEM_INSTRUCTION, build_prompt

logger = file_logger(getLogger(__name__))


def _demo(preferences: TravelPreferences, error: str | None) -> GenerationResult:
    return GenerationResult(
        success=error is None,
        data=generate_demo_itinerary(preferences),
        error=error,
        is_demo=True,
    )


async def generate_itinerary(
    preferences: TravelPreferences,
    ai_client: AiClient | None,
) -> GenerationResult:
    """
    Generate an itinerary, degrading to the demo generator on any failure.

    Never raises: the result always carries a usable itinerary.

    Args:
        preferences: Validated trip preferences.
        ai_client: Completion client, or None when no credential is configured.

    Returns:
        - ``success=True, is_demo=False`` for a parsed completion.
        - ``success=True, is_demo=True`` when no completion client is configured.
        - ``success=False, is_demo=True`` with ``error`` set when the
          completion or its parsing failed.
    """
    if ai_client is None:
        logger.info("No completion client configured, returning demo itinerary")
        return _demo(preferences, None)

    logger.info(
        f"Generating {preferences.duration_days}-day itinerary "
        f"from {preferences.origin} to {preferences.destination}",
    )
    try:
        completion = await ai_client.complete(
            prompt=build_prompt(preferences),
            system_instruction=SYSTEM_INSTRUCTION,
            temperature=settings.AI_TEMPERATURE,
        )
        itinerary = parse_itinerary(completion)
    except BaseAppError as e:
        logger.warning(f"Itinerary generation degraded to demo: {e.detail}")
        return _demo(preferences, e.detail)
    except Exception:
        logger.exception("Unexpected failure while generating itinerary")
        return _demo(preferences, ITINERARY_GENERATION_ERROR)

    return GenerationResult(success=True, data=itinerary, is_demo=False)
