# app/services/prompt.py

"""Prompt rendering for itinerary generation and refinement."""

from orjson import OPT_INDENT_2, dumps

from app.schemas.itinerary import Itinerary, TravelPersona, TravelPreferences

SYSTEM_INSTRUCTION = (
    "You are a professional travel planner specialising in Indian and international "
    "destinations. You MUST respond ONLY with valid JSON in the exact format requested. "
    "Use Indian English spelling and terminology throughout. Do not include any "
    "explanatory text, markdown formatting, or code blocks. Return only the raw JSON object."
)

REFINEMENT_SYSTEM_INSTRUCTION = (
    "You are a professional travel planning assistant refining an existing itinerary. "
    "You MUST respond ONLY with valid JSON in the exact format requested. Do not include "
    "any explanatory text, markdown formatting, or code blocks. Return only the raw JSON object."
)

PERSONA_LABELS = {
    "time_preference": "Time Preference",
    "social_style": "Social Style",
    "activity_level": "Activity Level",
    "cultural_interest": "Cultural Interest",
    "food_adventure": "Food Adventure",
    "planning_style": "Planning Style",
}


def json_example(preferences: TravelPreferences) -> str:
    """
    JSON shape the completion must follow.

    Args:
        preferences: Trip preferences used to pre-fill destination, duration and date.

    Returns:
        A JSON example matching the itinerary document.
    """
    return f"""{{
  "title": "Trip title",
  "destination": "{preferences.destination}",
  "duration": "{preferences.duration_days} days",
  "totalBudget": "Estimated total budget range",
  "overview": "Brief trip overview (2-3 sentences)",
  "days": [
    {{
      "day": 1,
      "date": "{preferences.start_date.isoformat()}",
      "activities": ["Morning activity", "Afternoon activity", "Evening activity"],
      "meals": {{
        "breakfast": "Recommended breakfast spot",
        "lunch": "Recommended lunch spot",
        "dinner": "Recommended dinner spot"
      }},
      "accommodation": "Recommended place to stay",
      "estimatedCost": "₹X-Y per person",
      "notes": "Any special notes for this day"
    }}
  ],
  "tips": ["Travel tip 1", "Travel tip 2", "Travel tip 3"]
}}"""


def persona_section(persona: TravelPersona | None) -> str:
    """
    Render the answered persona questions as a prompt block.

    Returns:
        An empty string when there is no persona or every answer is blank,
        otherwise a ``Travel Persona:`` block with one line per answer.
    """
    if persona is None or persona.is_empty:
        return ""

    lines = [
        f"- {label}: {value}"
        for field, label in PERSONA_LABELS.items()
        if (value := getattr(persona, field))
    ]
    if not lines:
        return ""
    return "\n\nTravel Persona:\n" + "\n".join(lines)


def _interests(preferences: TravelPreferences) -> str:
    interests = preferences.effective_interests
    return ", ".join(interests) if interests else "general sightseeing"


def build_prompt(preferences: TravelPreferences) -> str:
    """
    Render trip preferences into the generation prompt.

    The output is deterministic for a given set of preferences. Interests
    picked in the persona quiz take precedence over the form's interests.

    Args:
        preferences: Validated trip preferences.

    Returns:
        The user prompt, ending with the JSON example.
    """
    p = preferences
    duration = p.duration_days
    start, end = p.start_date.isoformat(), p.end_date.isoformat()
    travelers = f"{p.travelers} traveller{'s' if p.travelers > 1 else ''}"
    notes = f"\n- Additional notes: {p.additional_notes}" if p.additional_notes else ""

    return f"""Create a detailed {duration}-day travel itinerary for {p.destination} \
from {start} to {end}, travelling from {p.origin}.

Travel Details:
- Travelling from: {p.origin}
- Destination: {p.destination}
- {travelers}
- Budget: {p.budget}
- Accommodation preference: {p.accommodation_type}
- Holiday pace: {p.vacation_pace}
- Interests: {_interests(p)}{notes}{persona_section(p.travel_persona)}

Please provide a comprehensive itinerary including transportation from {p.origin} \
to {p.destination}. \
Include exactly {duration} entries in "days", one per day, numbered from 1. \
The itinerary should match the {p.vacation_pace} pace preference \
and stay within a {p.budget} budget. \
Use Indian English spelling and terminology throughout. \
Provide the response in the following JSON format:
{json_example(p)}"""


def build_refinement_prompt(
    itinerary: Itinerary,
    preferences: TravelPreferences,
    message: str,
) -> str:
    """
    Render a refinement request: the current plan, the traveller's profile and their ask.

    Args:
        itinerary: The document being refined.
        preferences: Preferences the document was generated from.
        message: What the traveller wants changed.

    Returns:
        The user prompt, asking for ``{"response": ..., "itinerary": {...}}``.
    """
    p = preferences
    current = dumps(itinerary.to_document(), option=OPT_INDENT_2).decode()

    return f"""You are helping to refine an existing travel itinerary. \
The traveller has a specific request to modify their trip.

Current Itinerary:
{current}

Traveller Preferences:
- Origin: {p.origin}
- Destination: {p.destination}
- Budget: {p.budget}
- Travellers: {p.travelers}
- Interests: {_interests(p)}
- Accommodation: {p.accommodation_type}
- Pace: {p.vacation_pace}{persona_section(p.travel_persona)}

Traveller Request: "{message}"

Modify the itinerary to satisfy the request while keeping its overall structure intact. \
Keep the same number of days unless the request asks otherwise. Provide:
1. A brief, friendly response explaining what you changed
2. The updated itinerary in exactly the same JSON format

Respond with a JSON object in this format:
{{
  "response": "Brief explanation of changes made",
  "itinerary": {{
    "title": "Updated title if needed",
    "destination": "{itinerary.destination}",
    "duration": "{itinerary.duration}",
    "totalBudget": "Updated budget if needed",
    "overview": "Updated overview if needed",
    "days": [...updated days...],
    "tips": [...updated tips...]
  }}
}}

Make sure all recommendations match the {p.budget} budget level and {p.vacation_pace} pace. \
Use Indian English spelling and terminology throughout."""
