"""Post ranking endpoints."""

from fastapi import APIRouter, Query

from forum_votes.api.v1.dependencies import SessionDep
from forum_votes.core.settings import settings
from forum_votes.schemas.post import (
    AnonymousIdResponse,
    HotScoreRequest,
    HotScoreResponse,
    PostOut,
)
from forum_votes.services.hot_score import hot_score
from forum_votes.services.identity import new_anonymous_id
from forum_votes.services.post_service import list_hot_posts

router = APIRouter(prefix="/posts", tags=["posts"])


@router.post("/hot-score", response_model=HotScoreResponse)
def calculate_hot_score(payload: HotScoreRequest) -> HotScoreResponse:
    """Compute the hot score for the given vote counts and creation time."""
    return HotScoreResponse(
        hot_score=hot_score(payload.upvotes, payload.downvotes, payload.created_at)
    )


@router.get("/anonymous-id", response_model=AnonymousIdResponse)
def issue_anonymous_id() -> AnonymousIdResponse:
    """Issue a new anonymous fingerprint for a client that has none."""
    return AnonymousIdResponse(anonymous_id=new_anonymous_id())


@router.get("/hot", response_model=list[PostOut])
def get_hot_posts(
    db: SessionDep,
    limit: int = Query(settings.hot_list_default_limit, ge=1, le=settings.hot_list_max_limit),
) -> list[PostOut]:
    """Return posts ranked by their stored hot score."""
    return [PostOut.model_validate(post) for post in list_hot_posts(db, limit)]
