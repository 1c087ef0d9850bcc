"""Vote casting: ledger transition plus aggregate updates in one transaction."""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from forum_votes.core.errors import ConcurrentModification, InternalError, TargetNotFound
from forum_votes.core.settings import settings
from forum_votes.models import Vote
from forum_votes.repositories.target_repo import TargetRepository
from forum_votes.schemas.vote import VoteRequest, VoteResult
from forum_votes.services.aggregates import AggregateUpdater
from forum_votes.services.ledger import VoteLedger

__all__ = ["cast_vote", "get_vote"]

logger = logging.getLogger(__name__)


def _cast_once(db: Session, request: VoteRequest) -> VoteResult:
    repo = TargetRepository(db)
    target = repo.find_target(request.target_id, request.target_kind)
    if target is None:
        raise TargetNotFound(request.target_kind.value, request.target_id)

    ledger = VoteLedger(db)
    existing = ledger.find(request.target_kind, request.target_id, request.identity, lock=True)
    transition = ledger.decide(existing, request.value)
    vote = ledger.apply(
        transition,
        kind=request.target_kind,
        target_id=request.target_id,
        identity=request.identity,
        existing=existing,
    )
    counters = AggregateUpdater(repo).apply(request.target_kind, target, transition)

    logger.debug(
        "Vote %s on %s %s: %d -> %d",
        transition.action.value,
        request.target_kind.value,
        request.target_id,
        transition.previous,
        transition.current,
    )
    return VoteResult(
        vote_id=vote.id,
        action=transition.action,
        value=transition.current,
        upvotes=counters.upvotes,
        downvotes=counters.downvotes,
        score=counters.score,
    )


def cast_vote(db: Session, request: VoteRequest) -> VoteResult:
    """Record a vote and update the target's counters and its author's karma.

    The ledger mutation, counter increments, hot score and karma writes
    commit together or not at all. The stored vote is read with a row lock
    and only rewritten while it still holds the value that was read. If
    another request from the same identity wins (a first insert, a flip or
    a toggle-off), the attempt is rolled back and re-run so it observes the
    winner's committed row; repeated collisions become ``InternalError``.

    Args:
        db: Session owning the transaction. Committed on success, rolled
            back on any failure.
        request: Validated vote command.

    Returns:
        The ledger action taken and the target's counters after the vote.

    Raises:
        TargetNotFound: If the post or comment does not exist.
        InternalError: On storage failures or repeated conflicts.
    """
    attempts = settings.vote_max_attempts
    for attempt in range(1, attempts + 1):
        try:
            result = _cast_once(db, request)
            db.commit()
            return result
        except ConcurrentModification as exc:
            db.rollback()
            if attempt >= attempts:
                logger.warning(
                    "Vote on %s %s still conflicting after %d attempts",
                    request.target_kind.value,
                    request.target_id,
                    attempts,
                )
                raise InternalError("Vote could not be recorded, please retry") from exc
            logger.info(
                "Retrying vote on %s %s after a concurrent change",
                request.target_kind.value,
                request.target_id,
            )
        except TargetNotFound:
            db.rollback()
            raise
        except SQLAlchemyError as exc:
            db.rollback()
            logger.error("Storage failure while casting vote: %s", exc, exc_info=True)
            raise InternalError() from exc
    raise InternalError()  # pragma: no cover - loop always returns or raises


def get_vote(db: Session, vote_id: int) -> Vote:
    """Return a stored vote by id, raising ``VoteNotFound`` when missing."""
    return VoteLedger(db).get(vote_id)
