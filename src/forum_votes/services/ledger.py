"""Vote ledger: at most one vote per (target, identity) and its state machine.

Per pair the ledger is in one of three states, encoded as the stored vote
value: ``0`` (no vote), ``1`` (upvoted) or ``-1`` (downvoted). An incoming
vote moves it as follows::

    current  incoming  next  action
    0        +1/-1     v     created
    v        v         0     deleted   (toggle-off)
    v        -v        -v    updated   (flip)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from forum_votes.core.errors import ConcurrentModification, VoteNotFound
from forum_votes.models import TargetKind, Vote
from forum_votes.services.identity import AnonymousVoter, RegisteredVoter, VoterIdentity

__all__ = ["Transition", "VoteAction", "VoteLedger"]

logger = logging.getLogger(__name__)

VALID_VALUES = (1, -1)


class VoteAction(StrEnum):
    """Ledger mutation performed for a vote request."""

    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"


@dataclass(frozen=True, slots=True)
class Transition:
    """Outcome of comparing an incoming vote with the stored one."""

    action: VoteAction
    previous: int
    current: int


class VoteLedger:
    """Stores and mutates vote rows inside the caller's transaction."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def find(
        self,
        kind: TargetKind,
        target_id: int,
        identity: VoterIdentity,
        *,
        lock: bool = False,
    ) -> Vote | None:
        """Return the identity's vote on the target using its namespace key.

        With ``lock`` the row is read ``FOR UPDATE`` (where the backend
        supports it) and any copy already in the session is overwritten with
        the stored values.
        """
        statement = select(Vote).where(
            Vote.target_kind == TargetKind(kind).value,
            Vote.target_id == target_id,
            Vote.voter_kind == identity.kind.value,
            Vote.voter_key == identity.key,
        )
        if lock:
            statement = statement.with_for_update().execution_options(populate_existing=True)
        return self.session.execute(statement).scalar_one_or_none()

    def current_value(self, kind: TargetKind, target_id: int, identity: VoterIdentity) -> int:
        """Return the identity's stored vote value, ``0`` when it has none."""
        vote = self.find(kind, target_id, identity)
        return vote.value if vote is not None else 0

    def get(self, vote_id: int) -> Vote:
        """Return a stored vote by id.

        Raises:
            VoteNotFound: If no vote has that id.
        """
        vote = self.session.get(Vote, vote_id)
        if vote is None:
            raise VoteNotFound()
        return vote

    @staticmethod
    def decide(existing: Vote | None, value: int) -> Transition:
        """Pick the transition for an incoming ``value`` given the stored vote."""
        if value not in VALID_VALUES:
            raise ValueError(f"Vote value must be 1 or -1, got {value!r}")
        if existing is None:
            return Transition(VoteAction.CREATED, previous=0, current=value)
        if existing.value == value:
            return Transition(VoteAction.DELETED, previous=existing.value, current=0)
        return Transition(VoteAction.UPDATED, previous=existing.value, current=value)

    def apply(
        self,
        transition: Transition,
        *,
        kind: TargetKind,
        target_id: int,
        identity: VoterIdentity,
        existing: Vote | None,
    ) -> Vote:
        """Write the row mutation for a transition inside the open transaction.

        Updates and deletes only match the row while it still holds
        ``transition.previous``, so a decision made from a stale read never
        lands on top of another request's committed change.

        Returns:
            The created, updated or deleted vote row. A deleted row is
            detached but keeps its attribute values so callers can still
            report its id.

        Raises:
            ConcurrentModification: If another request from the same identity
                inserted, changed or removed the vote first.
            ValueError: If an update or delete is requested without the
                stored vote.
        """
        if transition.action is VoteAction.CREATED:
            return self._create(kind, target_id, identity, transition.current)
        if existing is None:
            raise ValueError(f"Cannot apply {transition.action.value} without a stored vote")

        guard = (Vote.id == existing.id, Vote.value == transition.previous)
        if transition.action is VoteAction.DELETED:
            statement = delete(Vote).where(*guard)
        else:
            statement = update(Vote).where(*guard).values(value=transition.current)
        result = self.session.execute(
            statement, execution_options={"synchronize_session": False}
        )
        if result.rowcount != 1:
            logger.info(
                "Vote %s on %s %s lost a race: stored value changed",
                existing.id,
                TargetKind(kind).value,
                target_id,
            )
            raise ConcurrentModification()

        if transition.action is VoteAction.DELETED:
            self.session.expunge(existing)
        else:
            self.session.expire(existing, ["value", "updated_at"])
        return existing

    def _create(
        self,
        kind: TargetKind,
        target_id: int,
        identity: VoterIdentity,
        value: int,
    ) -> Vote:
        kind = TargetKind(kind)
        vote = Vote(
            target_kind=kind.value,
            target_id=target_id,
            post_id=target_id if kind is TargetKind.POST else None,
            comment_id=target_id if kind is TargetKind.COMMENT else None,
            voter_kind=identity.kind.value,
            voter_key=identity.key,
            voter_user_id=identity.user_id if isinstance(identity, RegisteredVoter) else None,
            anonymous_id=identity.fingerprint if isinstance(identity, AnonymousVoter) else None,
            value=value,
        )
        self.session.add(vote)
        try:
            self.session.flush()
        except IntegrityError as exc:
            logger.info(
                "Vote insert collided for %s %s by %s voter",
                kind.value,
                target_id,
                identity.kind.value,
            )
            raise ConcurrentModification() from exc
        return vote
