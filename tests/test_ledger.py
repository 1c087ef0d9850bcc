"""Tests for the vote state machine and the counter deltas it implies."""

import pytest

from forum_votes.models import TargetKind, Vote
from forum_votes.services.aggregates import CounterDelta
from forum_votes.services.identity import AnonymousVoter
from forum_votes.services.ledger import Transition, VoteAction, VoteLedger


def _stored(value: int) -> Vote:
    return Vote(value=value)


@pytest.mark.parametrize(
    ("stored", "incoming", "expected"),
    [
        (None, 1, Transition(VoteAction.CREATED, 0, 1)),
        (None, -1, Transition(VoteAction.CREATED, 0, -1)),
        (1, 1, Transition(VoteAction.DELETED, 1, 0)),
        (1, -1, Transition(VoteAction.UPDATED, 1, -1)),
        (-1, -1, Transition(VoteAction.DELETED, -1, 0)),
        (-1, 1, Transition(VoteAction.UPDATED, -1, 1)),
    ],
)
def test_decide_covers_every_transition(stored, incoming, expected) -> None:
    existing = _stored(stored) if stored is not None else None
    assert VoteLedger.decide(existing, incoming) == expected


@pytest.mark.parametrize("value", [0, 2, -2])
def test_decide_rejects_values_outside_plus_minus_one(value: int) -> None:
    with pytest.raises(ValueError):
        VoteLedger.decide(None, value)


@pytest.mark.parametrize(
    ("transition", "upvotes", "downvotes", "score"),
    [
        (Transition(VoteAction.CREATED, 0, 1), 1, 0, 1),
        (Transition(VoteAction.CREATED, 0, -1), 0, 1, -1),
        (Transition(VoteAction.DELETED, 1, 0), -1, 0, -1),
        (Transition(VoteAction.DELETED, -1, 0), 0, -1, 1),
        (Transition(VoteAction.UPDATED, -1, 1), 1, -1, 2),
        (Transition(VoteAction.UPDATED, 1, -1), -1, 1, -2),
    ],
)
def test_counter_delta_matches_transition(transition, upvotes, downvotes, score) -> None:
    delta = CounterDelta.for_transition(transition)
    assert (delta.upvotes, delta.downvotes, delta.score) == (upvotes, downvotes, score)
    assert delta.karma == score


@pytest.mark.parametrize("action", [VoteAction.UPDATED, VoteAction.DELETED])
def test_apply_requires_stored_vote_for_update_and_delete(db_session, action) -> None:
    transition = Transition(action, previous=1, current=-1 if action is VoteAction.UPDATED else 0)
    with pytest.raises(ValueError):
        VoteLedger(db_session).apply(
            transition,
            kind=TargetKind.POST,
            target_id=1,
            identity=AnonymousVoter("fp"),
            existing=None,
        )
