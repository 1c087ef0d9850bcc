"""SQLAlchemy models for the forum voting core."""

from .post import Comment, Post
from .user import User
from .vote import TargetKind, Vote, VoterKind

__all__ = [
    "Comment", "Post",
    "User",
    "TargetKind", "Vote", "VoterKind",
]
