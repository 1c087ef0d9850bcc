"""User karma endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from forum_votes.api.v1.dependencies import SessionDep
from forum_votes.models import User
from forum_votes.schemas.user import KarmaOut
from forum_votes.services.karma import get_karma

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/{user_id}/karma", response_model=KarmaOut)
def read_user_karma(user_id: int, db: SessionDep) -> KarmaOut:
    """Return the live post/comment karma breakdown and the cached total.

    Unknown ids have authored nothing, so every figure is zero.
    """
    karma = get_karma(db, user_id)
    user = db.get(User, user_id)
    return KarmaOut(
        user_id=user_id,
        post_karma=karma.post_karma,
        comment_karma=karma.comment_karma,
        total_karma=karma.total_karma,
        cached_karma=user.karma if user is not None else 0,
    )
