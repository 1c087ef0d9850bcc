"""Service-level helpers for creating and ranking content."""
from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.orm import Session

from forum_votes.core.errors import TargetNotFound
from forum_votes.db.time import utcnow
from forum_votes.models import Comment, Post, TargetKind
from forum_votes.services.hot_score import hot_score

__all__ = ["create_comment", "create_post", "list_hot_posts"]


def create_post(
    db: Session,
    *,
    title: str,
    body: str = "",
    author_user_id: int | None = None,
    anonymous_id: str | None = None,
    created_at: datetime | None = None,
) -> Post:
    """Insert a post stamped with its initial hot score and flush it.

    The caller owns the transaction; nothing is committed here.
    """
    created_at = created_at or utcnow()
    post = Post(
        title=title,
        body=body,
        author_user_id=author_user_id,
        anonymous_id=anonymous_id,
        upvotes=0,
        downvotes=0,
        score=0,
        hot_score=hot_score(0, 0, created_at),
        created_at=created_at,
    )
    db.add(post)
    db.flush()
    return post


def create_comment(
    db: Session,
    *,
    post_id: int,
    body: str,
    parent_id: int | None = None,
    author_user_id: int | None = None,
    anonymous_id: str | None = None,
) -> Comment:
    """Insert a comment on an existing post and flush it.

    Raises:
        TargetNotFound: If the post does not exist.
    """
    if db.get(Post, post_id) is None:
        raise TargetNotFound(TargetKind.POST.value, post_id)
    comment = Comment(
        post_id=post_id,
        parent_id=parent_id,
        body=body,
        author_user_id=author_user_id,
        anonymous_id=anonymous_id,
        upvotes=0,
        downvotes=0,
        score=0,
    )
    db.add(comment)
    db.flush()
    return comment


def list_hot_posts(db: Session, limit: int) -> Sequence[Post]:
    """Return posts ordered by the stored hot score, newest first on ties."""
    return db.execute(
        select(Post).order_by(Post.hot_score.desc(), Post.created_at.desc()).limit(limit)
    ).scalars().all()
