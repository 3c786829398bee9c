"""Stored travel persona schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.schemas.itinerary import TravelPersona


class StoredPersona(BaseModel):
    """
    Persona row as returned by the document store.

    Columns are snake_case; each user has at most one row.
    """

    model_config = ConfigDict(extra="ignore")

    id: str
    user_id: str
    time_preference: str = ""
    social_style: str = ""
    activity_level: str = ""
    cultural_interest: str = ""
    food_adventure: str = ""
    planning_style: str = ""
    interests: list[str] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

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
    def blank_if_null(cls, v: Any) -> Any:  # noqa: ANN401
        return "" if v is None else v

    @field_validator("interests", mode="before")
    @classmethod
    def empty_if_null(cls, v: Any) -> Any:  # noqa: ANN401
        return [] if v is None else v

    def to_persona(self) -> TravelPersona:
        """Return the quiz answers held by this row."""
        return TravelPersona.model_validate(self.model_dump(include=persona_columns()))


def persona_columns() -> set[str]:
    """Names of the persona answer columns."""
    return set(TravelPersona.model_fields)


def persona_fields(persona: TravelPersona) -> dict[str, Any]:
    """Flatten persona answers into row columns."""
    return persona.model_dump()
