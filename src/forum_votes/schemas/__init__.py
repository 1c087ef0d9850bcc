"""Pydantic schemas for API requests and responses."""

from .post import AnonymousIdResponse, HotScoreRequest, HotScoreResponse, PostOut
from .user import KarmaOut
from .vote import MyVoteOut, VoteCast, VoteOut, VoteRequest, VoteResult

__all__ = [
    "AnonymousIdResponse",
    "HotScoreRequest",
    "HotScoreResponse",
    "KarmaOut",
    "MyVoteOut",
    "PostOut",
    "VoteCast",
    "VoteOut",
    "VoteRequest",
    "VoteResult",
]
