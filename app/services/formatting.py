# app/services/formatting.py

"""Plain-text rendering of itinerary documents for copy/paste and messaging."""

from app.schemas.itinerary import Day, Itinerary


def _labelled(label: str, value: str | None) -> list[str]:
    return [f"{label}: {value}"] if value else []


def format_day_text(day: Day) -> str:
    """
    Render one day as plain text.

    Empty meal slots and empty optional fields are left out rather than
    printed as blank lines.
    """
    header = f"Day {day.day} - {day.date}" if day.date else f"Day {day.day}"
    lines = [header, *day.activities]

    meals = [
        *_labelled("Breakfast", day.meals.breakfast),
        *_labelled("Lunch", day.meals.lunch),
        *_labelled("Dinner", day.meals.dinner),
    ]
    if meals:
        lines += ["", "Meals:", *meals]

    details = [
        *_labelled("Accommodation", day.accommodation),
        *_labelled("Estimated Cost", day.estimated_cost),
        *_labelled("Notes", day.notes),
    ]
    if details:
        lines += ["", *details]

    return "\n".join(lines)


def format_itinerary_text(itinerary: Itinerary) -> str:
    """Render the whole document: header, overview, every day, then tips."""
    sections = [itinerary.title]

    summary = [
        *_labelled("Destination", itinerary.destination),
        *_labelled("Duration", itinerary.duration),
        *_labelled("Total Budget", itinerary.total_budget),
    ]
    if summary:
        sections.append("\n".join(summary))
    if itinerary.overview:
        sections.append(itinerary.overview)

    sections.extend(format_day_text(day) for day in itinerary.days)

    if itinerary.tips:
        sections.append("\n".join(["Travel Tips:", *(f"- {tip}" for tip in itinerary.tips)]))

    return "\n\n".join(sections) + "\n"
