"""Post ranking and hot score schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt


class HotScoreRequest(BaseModel):
    """Inputs for computing a hot score outside the vote path."""

    upvotes: NonNegativeInt
    downvotes: NonNegativeInt
    created_at: datetime = Field(..., description="ISO 8601 creation timestamp")


class HotScoreResponse(BaseModel):
    """Computed hot score."""

    hot_score: float


class AnonymousIdResponse(BaseModel):
    """Freshly issued anonymous fingerprint."""

    anonymous_id: str


class PostOut(BaseModel):
    """Post summary used by ranked listings."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    author_user_id: int | None
    upvotes: int
    downvotes: int
    score: int
    hot_score: float
    created_at: datetime
