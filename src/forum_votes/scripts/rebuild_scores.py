"""Recompute post and comment counters from the vote ledger.

Counters are maintained incrementally while voting. This script repairs any
drift (for example after manual data fixes) by recounting votes per target
and refreshing post hot scores. User karma is left untouched.
"""
from __future__ import annotations

import argparse
import logging
import sys

from sqlalchemy import case, func, select
from sqlalchemy.orm import Session

from forum_votes.core.logging_config import configure_logging
from forum_votes.db.session import SessionLocal
from forum_votes.models import Comment, Post, TargetKind, Vote
from forum_votes.services.hot_score import hot_score

logger = logging.getLogger(__name__)


def _tallies(db: Session, kind: TargetKind) -> dict[int, tuple[int, int]]:
    rows = db.execute(
        select(
            Vote.target_id,
            func.sum(case((Vote.value == 1, 1), else_=0)),
            func.sum(case((Vote.value == -1, 1), else_=0)),
        )
        .where(Vote.target_kind == kind.value)
        .group_by(Vote.target_id)
    ).all()
    return {target_id: (int(up or 0), int(down or 0)) for target_id, up, down in rows}


def rebuild_scores(db: Session) -> int:
    """Reset every target's counters to the ledger tally.

    Returns:
        Number of targets whose stored counters changed.
    """
    changed = 0
    for kind, model in ((TargetKind.POST, Post), (TargetKind.COMMENT, Comment)):
        tallies = _tallies(db, kind)
        for target in db.execute(select(model)).scalars():
            upvotes, downvotes = tallies.get(target.id, (0, 0))
            if (target.upvotes, target.downvotes, target.score) != (
                upvotes,
                downvotes,
                upvotes - downvotes,
            ):
                logger.info(
                    "%s %s: (%d, %d) -> (%d, %d)",
                    kind.value,
                    target.id,
                    target.upvotes,
                    target.downvotes,
                    upvotes,
                    downvotes,
                )
                target.upvotes = upvotes
                target.downvotes = downvotes
                target.score = upvotes - downvotes
                changed += 1
            if isinstance(target, Post):
                target.hot_score = hot_score(upvotes, downvotes, target.created_at)
    db.commit()
    return changed


def main() -> None:
    parser = argparse.ArgumentParser(description="Recompute vote counters from the ledger")
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    args = parser.parse_args()

    configure_logging(args.log_level)
    db = SessionLocal()
    try:
        changed = rebuild_scores(db)
    except Exception as exc:
        db.rollback()
        logger.error("Rebuild failed: %s", exc, exc_info=True)
        sys.exit(1)
    finally:
        db.close()
    logger.info("Rebuilt counters, %d target(s) corrected", changed)


if __name__ == "__main__":
    main()
