"""User karma schemas."""

from __future__ import annotations

from pydantic import BaseModel


class KarmaOut(BaseModel):
    """Live karma breakdown plus the cached running total."""

    user_id: int
    post_karma: int
    comment_karma: int
    total_karma: int
    cached_karma: int
