"""Data access helpers for vote targets and their authors."""
from __future__ import annotations

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from forum_votes.models import Comment, Post, TargetKind, User

__all__ = ["TargetRepository", "VoteTarget"]

VoteTarget = Post | Comment

_MODELS: dict[TargetKind, type[Post] | type[Comment]] = {
    TargetKind.POST: Post,
    TargetKind.COMMENT: Comment,
}


class TargetRepository:
    """Thin wrapper around database access for posts, comments and author karma."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    @staticmethod
    def model_for(kind: TargetKind) -> type[Post] | type[Comment]:
        """Return the ORM class backing a target kind."""
        return _MODELS[TargetKind(kind)]

    def find_target(self, target_id: int, kind: TargetKind) -> VoteTarget | None:
        """Return the post or comment with the given id, or ``None``."""
        return self.session.get(self.model_for(kind), target_id)

    def increment_counters(
        self,
        kind: TargetKind,
        target_id: int,
        *,
        upvotes: int,
        downvotes: int,
    ) -> tuple[int, int, int]:
        """Atomically shift a target's counters and return the new values.

        The update is expressed as ``col = col + delta`` so concurrent voters
        from different identities never overwrite each other.

        Returns:
            ``(upvotes, downvotes, score)`` as stored after the update.
        """
        model = self.model_for(kind)
        self.session.execute(
            update(model)
            .where(model.id == target_id)
            .values(
                upvotes=model.upvotes + upvotes,
                downvotes=model.downvotes + downvotes,
                score=model.score + (upvotes - downvotes),
            )
        )
        row = self.session.execute(
            select(model.upvotes, model.downvotes, model.score).where(model.id == target_id)
        ).one()
        return row.upvotes, row.downvotes, row.score

    def set_hot_score(self, post_id: int, value: float) -> None:
        """Persist a recomputed hot score for a post."""
        self.session.execute(
            update(Post)
            .where(Post.id == post_id)
            .values(hot_score=value)
        )

    def increment_karma(self, user_id: int, delta: int) -> None:
        """Atomically shift a user's cached karma total."""
        self.session.execute(
            update(User)
            .where(User.id == user_id)
            .values(karma=User.karma + delta)
        )
