"""Tests for the counter rebuild maintenance script."""

from datetime import UTC, datetime

import pytest

from forum_votes.models import TargetKind
from forum_votes.schemas.vote import VoteRequest
from forum_votes.scripts.rebuild_scores import rebuild_scores
from forum_votes.services.hot_score import hot_score
from forum_votes.services.identity import AnonymousVoter
from forum_votes.services.vote_service import cast_vote


def test_rebuild_restores_counters_from_ledger(db_session, make_post, author, comment) -> None:
    created = datetime(2024, 5, 1, tzinfo=UTC)
    post = make_post(author, created_at=created)
    for fingerprint, value in (("a", 1), ("b", 1), ("c", -1)):
        cast_vote(
            db_session,
            VoteRequest(
                target_kind=TargetKind.POST,
                target_id=post.id,
                value=value,
                identity=AnonymousVoter(fingerprint),
            ),
        )

    post.upvotes, post.downvotes, post.score = 40, 0, 40
    comment.downvotes, comment.score = 3, -3
    db_session.commit()

    assert rebuild_scores(db_session) == 2

    db_session.refresh(post)
    db_session.refresh(comment)
    assert (post.upvotes, post.downvotes, post.score) == (2, 1, 1)
    assert post.hot_score == pytest.approx(hot_score(2, 1, created))
    assert (comment.upvotes, comment.downvotes, comment.score) == (0, 0, 0)


def test_rebuild_is_noop_when_consistent(db_session, post) -> None:
    assert rebuild_scores(db_session) == 0
