"""SQLAlchemy models for posts and comments."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from forum_votes.db.session import Base
from forum_votes.db.time import utcnow

if TYPE_CHECKING:
    from .vote import Vote


class Post(Base):
    """Top-level content entity that can receive votes and is ranked by hot score."""

    __tablename__ = "post"
    __table_args__ = (
        CheckConstraint("upvotes >= 0", name="ck_post_upvotes_non_negative"),
        CheckConstraint("downvotes >= 0", name="ck_post_downvotes_non_negative"),
        Index("ix_post_hot_score", "hot_score", "created_at"),
        Index("ix_post_author_user_id", "author_user_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # Null for content posted anonymously.
    author_user_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("forum_user.id", ondelete="SET NULL"),
        nullable=True,
    )
    anonymous_id: Mapped[str | None] = mapped_column(String(128), nullable=True)

    title: Mapped[str] = mapped_column(String(500), nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False, default="")

    upvotes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    downvotes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    score: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    hot_score: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    comments: Mapped[list[Comment]] = relationship(
        "Comment",
        back_populates="post",
        cascade="all, delete-orphan",
    )
    votes: Mapped[list[Vote]] = relationship(
        "Vote",
        back_populates="post",
        cascade="all, delete-orphan",
    )


class Comment(Base):
    """Reply attached to a post, optionally threaded under another comment."""

    __tablename__ = "comment"
    __table_args__ = (
        CheckConstraint("upvotes >= 0", name="ck_comment_upvotes_non_negative"),
        CheckConstraint("downvotes >= 0", name="ck_comment_downvotes_non_negative"),
        Index("ix_comment_post_id", "post_id"),
        Index("ix_comment_author_user_id", "author_user_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("post.id", ondelete="CASCADE"),
        nullable=False,
    )
    parent_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("comment.id", ondelete="CASCADE"),
        nullable=True,
    )
    author_user_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("forum_user.id", ondelete="SET NULL"),
        nullable=True,
    )
    anonymous_id: Mapped[str | None] = mapped_column(String(128), nullable=True)

    body: Mapped[str] = mapped_column(Text, nullable=False)

    upvotes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    downvotes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    score: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    post: Mapped[Post] = relationship("Post", back_populates="comments")
    votes: Mapped[list[Vote]] = relationship(
        "Vote",
        back_populates="comment",
        cascade="all, delete-orphan",
    )
