"""
Stored itinerary schemas.

A stored itinerary is one row of the ``itineraries`` table: the document
fields flattened into columns (``total_budget`` in snake_case, ``days`` as
the camelCase JSON of each day) plus ownership, trip dates and the
preferences the plan was generated from.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.itinerary import Day, Itinerary, TravelPreferences


class StoredItinerary(BaseModel):
    """Itinerary row as returned by the document store."""

    model_config = ConfigDict(extra="ignore")

    id: str
    user_id: str
    title: str
    destination: str = ""
    origin: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    duration: str = ""
    total_budget: str = ""
    overview: str = ""
    days: list[dict[str, Any]] = Field(default_factory=list)
    tips: list[str] = Field(default_factory=list)
    preferences: dict[str, Any] | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_itinerary(self) -> Itinerary:
        """Return the editable document view of this row."""
        return Itinerary(
            title=self.title,
            destination=self.destination,
            duration=self.duration,
            total_budget=self.total_budget,
            overview=self.overview,
            days=[Day.model_validate(day) for day in self.days],
            tips=list(self.tips),
        )


class ItineraryCreate(BaseModel):
    """Request body for saving a generated itinerary."""

    itinerary: Itinerary
    preferences: TravelPreferences | None = None


class ItineraryUpdate(BaseModel):
    """Partial update of an itinerary row (all fields optional)."""

    model_config = ConfigDict(populate_by_name=True)

    title: str | None = None
    destination: str | None = None
    duration: str | None = None
    total_budget: str | None = Field(default=None, alias="totalBudget")
    overview: str | None = None
    days: list[Day] | None = None
    tips: list[str] | None = None

    def to_fields(self) -> dict[str, Any]:
        """Column values for the fields that were actually sent."""
        fields = self.model_dump(mode="json", exclude_unset=True, exclude={"days"})
        if "days" in self.model_fields_set and self.days is not None:
            fields["days"] = [day.to_document() for day in self.days]
        return fields


def document_fields(itinerary: Itinerary) -> dict[str, Any]:
    """
    Flatten a document into itinerary row columns.

    Args:
        itinerary: The document to persist.

    Returns:
        Column values for title, destination, duration, total_budget,
        overview, days and tips.
    """
    return {
        "title": itinerary.title,
        "destination": itinerary.destination,
        "duration": itinerary.duration,
        "total_budget": itinerary.total_budget,
        "overview": itinerary.overview,
        "days": [day.to_document() for day in itinerary.days],
        "tips": list(itinerary.tips),
    }
