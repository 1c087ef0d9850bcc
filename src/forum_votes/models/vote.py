"""Models capturing votes on posts and comments."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import TYPE_CHECKING

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    SmallInteger,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from forum_votes.db.session import Base
from forum_votes.db.time import utcnow

if TYPE_CHECKING:
    from .post import Comment, Post


class TargetKind(StrEnum):
    """Kind of content a vote is attached to."""

    POST = "post"
    COMMENT = "comment"


class VoterKind(StrEnum):
    """Identity namespace a vote was cast from."""

    USER = "user"
    ANONYMOUS = "anonymous"


class Vote(Base):
    """Single ballot cast by one identity on one post or comment.

    Registered and anonymous voters live in separate namespaces: the unique
    key is ``(target_kind, target_id, voter_kind, voter_key)`` where
    ``voter_key`` is the user id or the anonymous fingerprint. None of those
    columns is nullable, so uniqueness holds on every storage engine.
    """

    __tablename__ = "vote"
    __table_args__ = (
        UniqueConstraint(
            "target_kind",
            "target_id",
            "voter_kind",
            "voter_key",
            name="uq_vote_target_voter",
        ),
        CheckConstraint("value IN (1, -1)", name="ck_vote_value"),
        CheckConstraint("target_kind IN ('post', 'comment')", name="ck_vote_target_kind"),
        CheckConstraint("voter_kind IN ('user', 'anonymous')", name="ck_vote_voter_kind"),
        CheckConstraint(
            "(target_kind = 'post' AND post_id IS NOT NULL AND comment_id IS NULL)"
            " OR (target_kind = 'comment' AND comment_id IS NOT NULL AND post_id IS NULL)",
            name="ck_vote_single_target",
        ),
        CheckConstraint(
            "(voter_kind = 'user' AND voter_user_id IS NOT NULL AND anonymous_id IS NULL)"
            " OR (voter_kind = 'anonymous' AND anonymous_id IS NOT NULL AND voter_user_id IS NULL)",
            name="ck_vote_single_voter",
        ),
        Index("ix_vote_post_id", "post_id"),
        Index("ix_vote_comment_id", "comment_id"),
        Index("ix_vote_voter_user_id", "voter_user_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    target_kind: Mapped[str] = mapped_column(String(16), nullable=False)
    target_id: Mapped[int] = mapped_column(Integer, nullable=False)
    post_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("post.id", ondelete="CASCADE"),
        nullable=True,
    )
    comment_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("comment.id", ondelete="CASCADE"),
        nullable=True,
    )

    voter_kind: Mapped[str] = mapped_column(String(16), nullable=False)
    voter_key: Mapped[str] = mapped_column(String(128), nullable=False)
    voter_user_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("forum_user.id", ondelete="CASCADE"),
        nullable=True,
    )
    anonymous_id: Mapped[str | None] = mapped_column(String(128), nullable=True)

    # 1 = upvote, -1 = downvote. "No vote" is represented by the row's absence.
    value: Mapped[int] = mapped_column(SmallInteger, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    post: Mapped[Post | None] = relationship("Post", back_populates="votes")
    comment: Mapped[Comment | None] = relationship("Comment", back_populates="votes")
