"""Vote-related endpoints."""

from typing import Annotated

from fastapi import APIRouter, Query, status

from forum_votes.api.v1.dependencies import OptionalUserIdDep, SessionDep
from forum_votes.models import TargetKind
from forum_votes.schemas.vote import MyVoteOut, VoteCast, VoteOut, VoteRequest, VoteResult
from forum_votes.services.identity import resolve_identity
from forum_votes.services.ledger import VoteLedger
from forum_votes.services.vote_service import cast_vote, get_vote

router = APIRouter(prefix="/votes", tags=["votes"])


def _cast(
    kind: TargetKind,
    target_id: int,
    vote_data: VoteCast,
    user_id: int | None,
    db: SessionDep,
) -> VoteResult:
    request = VoteRequest(
        target_kind=kind,
        target_id=target_id,
        value=vote_data.value,
        identity=resolve_identity(user_id, vote_data.anonymous_id),
    )
    return cast_vote(db, request)


@router.post("/posts/{post_id}", status_code=status.HTTP_201_CREATED, response_model=VoteResult)
def cast_post_vote(
    post_id: int,
    vote_data: VoteCast,
    user_id: OptionalUserIdDep,
    db: SessionDep,
) -> VoteResult:
    """Cast, flip or withdraw a vote on a post."""
    return _cast(TargetKind.POST, post_id, vote_data, user_id, db)


@router.post(
    "/comments/{comment_id}",
    status_code=status.HTTP_201_CREATED,
    response_model=VoteResult,
)
def cast_comment_vote(
    comment_id: int,
    vote_data: VoteCast,
    user_id: OptionalUserIdDep,
    db: SessionDep,
) -> VoteResult:
    """Cast, flip or withdraw a vote on a comment."""
    return _cast(TargetKind.COMMENT, comment_id, vote_data, user_id, db)


@router.get("/{target_kind}/{target_id}/mine", response_model=MyVoteOut)
def get_my_vote(
    target_kind: TargetKind,
    target_id: int,
    user_id: OptionalUserIdDep,
    db: SessionDep,
    anonymous_id: Annotated[str | None, Query(max_length=128)] = None,
) -> MyVoteOut:
    """Get the caller's current vote on a post or comment (0 when none)."""
    identity = resolve_identity(user_id, anonymous_id)
    return MyVoteOut(value=VoteLedger(db).current_value(target_kind, target_id, identity))


@router.get("/{vote_id}", response_model=VoteOut)
def read_vote(vote_id: int, db: SessionDep) -> VoteOut:
    """Return a stored vote by id."""
    return VoteOut.model_validate(get_vote(db, vote_id))
