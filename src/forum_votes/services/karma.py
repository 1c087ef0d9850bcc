"""Live karma breakdown derived from authored content."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from forum_votes.models import Comment, Post

__all__ = ["KarmaBreakdown", "get_karma"]


@dataclass(frozen=True, slots=True)
class KarmaBreakdown:
    """Sum of scores over a user's posts and comments."""

    post_karma: int
    comment_karma: int

    @property
    def total_karma(self) -> int:
        return self.post_karma + self.comment_karma


def get_karma(db: Session, user_id: int) -> KarmaBreakdown:
    """Aggregate the current scores of everything a user has authored.

    Read-only and independent of the cached ``User.karma`` total, so the two
    may disagree (e.g. after content is deleted). Users with no content, or
    unknown ids, get zeros.
    """
    post_karma = db.execute(
        select(func.coalesce(func.sum(Post.score), 0)).where(Post.author_user_id == user_id)
    ).scalar_one()
    comment_karma = db.execute(
        select(func.coalesce(func.sum(Comment.score), 0)).where(Comment.author_user_id == user_id)
    ).scalar_one()
    return KarmaBreakdown(post_karma=int(post_karma), comment_karma=int(comment_karma))
