"""Schemas for shared itineraries and their comments."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from app.configs.settings import MAX_COMMENT_LENGTH
from app.schemas.storage import StoredItinerary

ShareMode = Literal["view", "collaborate"]


class SharedItinerary(BaseModel):
    """Share row as returned by the document store."""

    model_config = ConfigDict(extra="ignore")

    share_id: str
    user_id: str
    itinerary_id: str
    title: str = ""
    share_mode: ShareMode = "view"
    is_public: bool = False
    expires_at: datetime | None = None
    view_count: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None


class SharedItineraryView(SharedItinerary):
    """A share together with the itinerary it points at."""

    itinerary: StoredItinerary | None = None


class ShareCreate(BaseModel):
    """Request body for creating a share link."""

    itinerary_id: str = Field(..., min_length=1)
    title: str = ""
    share_mode: ShareMode = "view"
    is_public: bool = False
    expires_at: datetime | None = None


class ShareUpdate(BaseModel):
    """Partial update of a share (all fields optional)."""

    title: str | None = None
    share_mode: ShareMode | None = None
    is_public: bool | None = None
    expires_at: datetime | None = None


class CommentCreate(BaseModel):
    """Request body for posting a comment on a collaborative share."""

    user_email: EmailStr
    content: str = Field(..., min_length=1, max_length=MAX_COMMENT_LENGTH)
    day_index: int | None = Field(
        default=None,
        ge=0,
        description="Zero-based day the comment refers to; null for a general comment",
    )


class Comment(BaseModel):
    """Comment row as returned by the document store."""

    model_config = ConfigDict(extra="ignore")

    id: str
    share_id: str
    user_email: str
    user_id: str | None = None
    content: str
    day_index: int | None = None
    is_resolved: bool = False
    created_at: datetime | None = None
