"""Denormalized counters and author karma kept in step with the vote ledger."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from forum_votes.models import Post, TargetKind
from forum_votes.repositories.target_repo import TargetRepository, VoteTarget
from forum_votes.services.hot_score import hot_score
from forum_votes.services.ledger import Transition

__all__ = ["AggregateUpdater", "CounterDelta", "Counters"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CounterDelta:
    """Change to a target's counters and its author's karma."""

    upvotes: int
    downvotes: int

    @property
    def score(self) -> int:
        return self.upvotes - self.downvotes

    @property
    def karma(self) -> int:
        return self.score

    @classmethod
    def for_transition(cls, transition: Transition) -> CounterDelta:
        """Derive the delta from the vote value before and after a transition.

        A flip from -1 to +1 yields ``(+1, -1)``, a score change of +2; a
        toggle-off of an upvote yields ``(-1, 0)``.
        """
        before, after = transition.previous, transition.current
        return cls(
            upvotes=int(after == 1) - int(before == 1),
            downvotes=int(after == -1) - int(before == -1),
        )


@dataclass(frozen=True, slots=True)
class Counters:
    """Target counters as stored after an update."""

    upvotes: int
    downvotes: int
    score: int


class AggregateUpdater:
    """Applies counter, hot score and karma changes in the caller's transaction."""

    def __init__(self, repo: TargetRepository) -> None:
        self.repo = repo

    def apply(self, kind: TargetKind, target: VoteTarget, transition: Transition) -> Counters:
        """Shift the target's counters for a ledger transition.

        Posts get their hot score recomputed from the updated counters and
        their own ``created_at``. The author's cached karma moves by the
        score delta; content without an author is skipped entirely.
        """
        delta = CounterDelta.for_transition(transition)
        upvotes, downvotes, score = self.repo.increment_counters(
            kind,
            target.id,
            upvotes=delta.upvotes,
            downvotes=delta.downvotes,
        )

        if isinstance(target, Post):
            self.repo.set_hot_score(target.id, hot_score(upvotes, downvotes, target.created_at))

        if target.author_user_id is not None and delta.karma:
            self.repo.increment_karma(target.author_user_id, delta.karma)
            logger.debug(
                "Karma %+d for user %s via %s %s",
                delta.karma,
                target.author_user_id,
                TargetKind(kind).value,
                target.id,
            )

        return Counters(upvotes=upvotes, downvotes=downvotes, score=score)
