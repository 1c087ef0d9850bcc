"""Vote-related Pydantic schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from forum_votes.models import TargetKind
from forum_votes.services.identity import AnonymousVoter, RegisteredVoter
from forum_votes.services.ledger import VoteAction


class VoteCast(BaseModel):
    """Request body for casting a vote on a post or comment."""

    value: Literal[-1, 1] = Field(..., description="1 for upvote, -1 for downvote")
    anonymous_id: str | None = Field(
        None,
        max_length=128,
        description="Client fingerprint; when set the vote is cast anonymously",
    )


class VoteRequest(BaseModel):
    """Validated vote command handed to the core."""

    model_config = ConfigDict(frozen=True)

    target_kind: TargetKind
    target_id: int
    value: Literal[-1, 1]
    identity: RegisteredVoter | AnonymousVoter


class VoteResult(BaseModel):
    """Outcome of a vote: the ledger action and the target's new counters."""

    vote_id: int
    action: VoteAction
    value: int = Field(..., description="Vote value now stored; 0 after a toggle-off")
    upvotes: int
    downvotes: int
    score: int


class VoteOut(BaseModel):
    """Stored vote as returned by lookups."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    target_kind: TargetKind
    target_id: int
    value: int
    voter_kind: str
    created_at: datetime
    updated_at: datetime


class MyVoteOut(BaseModel):
    """Caller's current vote on a target."""

    value: Literal[-1, 0, 1]
