# app/services/editor.py

"""
Pure editing operations over the itinerary document.

Every function takes a document (or a day) and returns a new one; inputs
are never mutated. Untouched days, lists and strings are carried over by
reference, so callers can rely on identity to detect which parts changed.

Index arguments are preconditions, not user input: an out-of-range or
negative index raises ``EditorIndexError`` immediately.
"""

from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel

from app.configs.settings import DEFAULT_ACTIVITY, DEFAULT_TIP
from app.errors.editor import EditorIndexError
from app.schemas.itinerary import Day, Itinerary


def _check_index(what: str, index: int, size: int) -> None:
    if not 0 <= index < size:
        raise EditorIndexError(what, index, size)


def _field_name(model: type[BaseModel], field: str) -> str:
    """Resolve a field name or its camelCase alias to the attribute name."""
    if field in model.model_fields:
        return field
    for name, info in model.model_fields.items():
        if info.alias == field:
            return name
    msg = f"{model.__name__} has no field {field!r}"
    raise KeyError(msg)


# --- Field editor ---


def update_field(itinerary: Itinerary, field: str, value: Any) -> Itinerary:  # noqa: ANN401
    """
    Replace one top-level field of the document.

    No validation is performed; the caller supplies a value of the right
    type. All other fields keep referencing the original objects.

    Args:
        itinerary: Document to copy.
        field: Attribute name or its alias (``total_budget`` or ``totalBudget``).
        value: New value.

    Returns:
        A new document differing only in ``field``.

    Raises:
        KeyError: If the document has no such field.
    """
    return itinerary.model_copy(update={_field_name(Itinerary, field): value})


def update_day_field(day: Day, field: str, value: Any) -> Day:  # noqa: ANN401
    """Replace one field of a single day."""
    return day.model_copy(update={_field_name(Day, field): value})


def update_day(itinerary: Itinerary, day_index: int, day: Day) -> Itinerary:
    """Replace the day at ``day_index``; every other day object is reused."""
    _check_index("day", day_index, len(itinerary.days))
    days = list(itinerary.days)
    days[day_index] = day
    return itinerary.model_copy(update={"days": days})


def edit_day(
    itinerary: Itinerary,
    day_index: int,
    field: str,
    value: Any,  # noqa: ANN401
) -> Itinerary:
    """Replace one field of the day at ``day_index``."""
    _check_index("day", day_index, len(itinerary.days))
    day = update_day_field(itinerary.days[day_index], field, value)
    return update_day(itinerary, day_index, day)


# --- Day list editor ---


def _edit_activities(
    itinerary: Itinerary,
    day_index: int,
    activities: list[str],
) -> Itinerary:
    return edit_day(itinerary, day_index, "activities", activities)


def add_activity(
    itinerary: Itinerary,
    day_index: int,
    placeholder: str = DEFAULT_ACTIVITY,
) -> Itinerary:
    """Append a placeholder activity to a day."""
    _check_index("day", day_index, len(itinerary.days))
    activities = [*itinerary.days[day_index].activities, placeholder]
    return _edit_activities(itinerary, day_index, activities)


def remove_activity(itinerary: Itinerary, day_index: int, activity_index: int) -> Itinerary:
    """Delete an activity; later activities shift down by one."""
    _check_index("day", day_index, len(itinerary.days))
    current = itinerary.days[day_index].activities
    _check_index("activity", activity_index, len(current))
    activities = [a for i, a in enumerate(current) if i != activity_index]
    return _edit_activities(itinerary, day_index, activities)


def update_activity(
    itinerary: Itinerary,
    day_index: int,
    activity_index: int,
    value: str,
) -> Itinerary:
    """Replace the activity at a position."""
    _check_index("day", day_index, len(itinerary.days))
    current = itinerary.days[day_index].activities
    _check_index("activity", activity_index, len(current))
    activities = list(current)
    activities[activity_index] = value
    return _edit_activities(itinerary, day_index, activities)


def add_tip(itinerary: Itinerary, placeholder: str = DEFAULT_TIP) -> Itinerary:
    """Append a placeholder tip."""
    return itinerary.model_copy(update={"tips": [*itinerary.tips, placeholder]})


def remove_tip(itinerary: Itinerary, tip_index: int) -> Itinerary:
    """Delete a tip; later tips shift down by one."""
    _check_index("tip", tip_index, len(itinerary.tips))
    tips = [t for i, t in enumerate(itinerary.tips) if i != tip_index]
    return itinerary.model_copy(update={"tips": tips})


def update_tip(itinerary: Itinerary, tip_index: int, value: str) -> Itinerary:
    """Replace the tip at a position."""
    _check_index("tip", tip_index, len(itinerary.tips))
    tips = list(itinerary.tips)
    tips[tip_index] = value
    return itinerary.model_copy(update={"tips": tips})


def renumber_days(days: Sequence[Day]) -> list[Day]:
    """
    Set every day's number to its 1-based position.

    Days already carrying the right number are returned as-is.
    """
    return [
        day if day.day == index + 1 else day.model_copy(update={"day": index + 1})
        for index, day in enumerate(days)
    ]


def reorder_days(itinerary: Itinerary, from_index: int, to_index: int) -> Itinerary:
    """
    Move a day to a new position and renumber.

    This is a splice, not a swap: the day at ``from_index`` is removed and
    reinserted at ``to_index``, shifting every day in between by one. The
    renumbering pass always runs, even when the day stays in place, so a
    document with inconsistent numbers comes back consistent.

    Args:
        itinerary: Document to copy.
        from_index: Current position of the day to move.
        to_index: Position the day should occupy afterwards.

    Returns:
        A new document with reordered, renumbered days.
    """
    size = len(itinerary.days)
    _check_index("day", from_index, size)
    _check_index("day", to_index, size)

    days = list(itinerary.days)
    if from_index != to_index:
        moved = days.pop(from_index)
        days.insert(to_index, moved)

    return itinerary.model_copy(update={"days": renumber_days(days)})
