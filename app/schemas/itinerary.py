# app/schemas/itinerary.py

"""
Itinerary document model and trip preference schemas.

The itinerary is a plain JSON document: trip metadata, an ordered list of
day records and an ordered list of tips. Field names on the wire are
camelCase (``totalBudget``, ``estimatedCost``) to match what the frontend
and the completion service exchange; Python code uses snake_case.

Models are frozen. Edits go through ``app.services.editor``, which returns
new models built with ``model_copy`` so untouched fields keep referencing
the same objects.
"""

from datetime import date
from typing import Any, Literal, Self

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from app.configs.settings import (
    MAX_INTERESTS_COUNT,
    MAX_NOTES_LENGTH,
    MAX_TRAVELERS,
    MAX_TRIP_DURATION,
    MIN_TRIP_DURATION,
)

BudgetTier = Literal["budget", "mid-range", "luxury"]
AccommodationType = Literal["any", "hotel", "hostel", "airbnb", "resort", "villa", "mix"]
VacationPace = Literal["relaxed", "balanced", "action-packed"]


def _text_or_none(value: Any) -> Any:  # noqa: ANN401
    """Completion output sometimes carries numbers where text is expected."""
    if isinstance(value, int | float) and not isinstance(value, bool):
        return str(value)
    return value


class DocumentModel(BaseModel):
    """Shared configuration for itinerary document models."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="ignore",
    )

    def to_document(self) -> dict[str, Any]:
        """Serialize with camelCase keys, as stored and sent to clients."""
        return self.model_dump(mode="json", by_alias=True)


class Meals(DocumentModel):
    """Meal recommendations. A missing slot means nothing is recommended."""

    breakfast: str | None = None
    lunch: str | None = None
    dinner: str | None = None

    @field_validator("breakfast", "lunch", "dinner", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> Any:  # noqa: ANN401
        return _text_or_none(v)


class Day(DocumentModel):
    """One day of the plan."""

    day: int = Field(..., ge=1, description="1-based position in the trip")
    date: str = Field(default="", description="ISO date, not re-validated after edits")
    activities: list[str] = Field(default_factory=list)
    meals: Meals = Field(default_factory=Meals)
    accommodation: str | None = None
    estimated_cost: str | None = Field(default=None, alias="estimatedCost")
    notes: str | None = None

    @field_validator("meals", mode="before")
    @classmethod
    def default_meals(cls, v: Any) -> Any:  # noqa: ANN401
        return {} if v is None else v

    @field_validator("activities", mode="before")
    @classmethod
    def drop_null_activities(cls, v: Any) -> Any:  # noqa: ANN401
        if v is None:
            return []
        if isinstance(v, list):
            return [str(item) for item in v if item is not None]
        return v

    @field_validator("accommodation", "estimated_cost", "notes", "date", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> Any:  # noqa: ANN401
        return _text_or_none(v)


class Itinerary(DocumentModel):
    """
    A complete trip plan.

    Invariant: ``days[i].day == i + 1``. The parser and the demo generator
    produce documents that satisfy it and every structural edit renumbers.

    Example:
        >>> Itinerary(title="Paris Trip", days=[Day(day=1, date="2025-05-01")])
    """

    title: str
    destination: str = ""
    duration: str = ""
    total_budget: str = Field(default="", alias="totalBudget")
    overview: str = ""
    days: list[Day] = Field(default_factory=list)
    tips: list[str] = Field(default_factory=list)

    @field_validator("destination", "duration", "total_budget", "overview", mode="before")
    @classmethod
    def blank_if_missing(cls, v: Any) -> Any:  # noqa: ANN401
        return "" if v is None else _text_or_none(v)

    @field_validator("tips", mode="before")
    @classmethod
    def drop_null_tips(cls, v: Any) -> Any:  # noqa: ANN401
        if v is None:
            return []
        if isinstance(v, list):
            return [str(item) for item in v if item is not None]
        return v

    @property
    def is_numbered(self) -> bool:
        """Whether every day carries its 1-based position."""
        return all(day.day == index + 1 for index, day in enumerate(self.days))


class TravelPersona(BaseModel):
    """
    Travel style answers from the persona quiz.

    Every answer is optional; an empty string means the question was skipped.
    """

    model_config = ConfigDict(populate_by_name=True)

    time_preference: str = Field(default="", alias="timePreference", examples=["early-bird"])
    social_style: str = Field(default="", alias="socialStyle", examples=["intimate"])
    activity_level: str = Field(default="", alias="activityLevel", examples=["moderate"])
    cultural_interest: str = Field(default="", alias="culturalInterest", examples=["high"])
    food_adventure: str = Field(default="", alias="foodAdventure", examples=["adventurous"])
    planning_style: str = Field(default="", alias="planningStyle", examples=["flexible"])
    interests: list[str] = Field(default_factory=list, max_length=MAX_INTERESTS_COUNT)

    @field_validator(
        "time_preference",
        "social_style",
        "activity_level",
        "cultural_interest",
        "food_adventure",
        "planning_style",
        mode="before",
    )
    @classmethod
    def blank_if_missing(cls, v: Any) -> Any:  # noqa: ANN401
        return "" if v is None else v

    @field_validator("interests", mode="before")
    @classmethod
    def clean_interests(cls, v: Any) -> Any:  # noqa: ANN401
        if v is None:
            return []
        if isinstance(v, list):
            return [str(item).strip() for item in v if item and str(item).strip()]
        return v

    @property
    def is_empty(self) -> bool:
        """Whether no question was answered."""
        return not any(self.model_dump().values())


class TravelPreferences(BaseModel):
    """
    Trip preferences collected by the travel form.

    Validation Rules:
        - origin and destination must not be blank
        - endDate must be after startDate
        - duration (endDate - startDate) at most 30 days
    """

    model_config = ConfigDict(populate_by_name=True)

    origin: str = Field(..., min_length=1, max_length=100, examples=["Mumbai"])
    destination: str = Field(..., min_length=1, max_length=100, examples=["Goa"])
    start_date: date = Field(..., alias="startDate", examples=["2025-12-20"])
    end_date: date = Field(..., alias="endDate", examples=["2025-12-25"])
    budget: BudgetTier = "mid-range"
    interests: list[str] = Field(
        default_factory=list,
        max_length=MAX_INTERESTS_COUNT,
        examples=[["beaches", "food", "culture"]],
    )
    travelers: int = Field(default=1, ge=1, le=MAX_TRAVELERS)
    accommodation_type: AccommodationType = Field(default="any", alias="accommodationType")
    vacation_pace: VacationPace = Field(default="balanced", alias="vacationPace")
    additional_notes: str | None = Field(
        default=None,
        alias="additionalNotes",
        max_length=MAX_NOTES_LENGTH,
    )
    travel_persona: TravelPersona | None = Field(default=None, alias="travelPersona")

    @field_validator("origin", "destination")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            msg = "This field is required"
            raise ValueError(msg)
        return v.strip()

    @field_validator("interests")
    @classmethod
    def clean_interests(cls, v: list[str]) -> list[str]:
        return [interest.strip() for interest in v if interest and interest.strip()]

    @model_validator(mode="after")
    def validate_dates(self) -> Self:
        """Reject date ranges that cannot produce a plan."""
        if self.end_date <= self.start_date:
            msg = "End date must be after start date"
            raise ValueError(msg)

        if not MIN_TRIP_DURATION <= self.duration_days <= MAX_TRIP_DURATION:
            msg = f"Trip duration cannot exceed {MAX_TRIP_DURATION} days"
            raise ValueError(msg)

        return self

    @property
    def duration_days(self) -> int:
        """Number of planned days."""
        return (self.end_date - self.start_date).days

    @property
    def effective_interests(self) -> list[str]:
        """Persona interests when the quiz picked any, else the form interests."""
        if self.travel_persona and self.travel_persona.interests:
            return list(self.travel_persona.interests)
        return list(self.interests)


class GenerateRequest(BaseModel):
    """Request body for itinerary generation."""

    preferences: TravelPreferences


class GenerationResult(BaseModel):
    """
    Outcome of a generation attempt.

    ``data`` is always a usable itinerary. ``is_demo`` marks a locally
    synthesized placeholder; ``error`` explains why generation degraded.
    """

    model_config = ConfigDict(populate_by_name=True)

    success: bool
    data: Itinerary
    error: str | None = None
    is_demo: bool = Field(default=False, alias="isDemo")


class RefineRequest(BaseModel):
    """Request body for conversational refinement of an itinerary."""

    itinerary: Itinerary
    preferences: TravelPreferences
    message: str = Field(..., min_length=1, max_length=MAX_NOTES_LENGTH)

    @field_validator("message")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            msg = "Message must not be blank"
            raise ValueError(msg)
        return v.strip()


class RefinementResult(BaseModel):
    """
    Outcome of a refinement attempt.

    ``response`` is the assistant's explanation of the change. When the
    completion service is missing or fails, ``data`` comes from a local
    keyword-based rewrite and ``is_demo`` is set.
    """

    model_config = ConfigDict(populate_by_name=True)

    success: bool
    response: str
    data: Itinerary
    change_summary: str | None = Field(default=None, alias="changeSummary")
    error: str | None = None
    is_demo: bool = Field(default=False, alias="isDemo")
