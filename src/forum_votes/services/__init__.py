"""Business logic services for the forum voting core."""

from .hot_score import hot_score
from .identity import AnonymousVoter, RegisteredVoter, resolve_identity

__all__ = [
    "AnonymousVoter",
    "RegisteredVoter",
    "hot_score",
    "resolve_identity",
]
