"""Time-decayed ranking score for posts."""

from __future__ import annotations

import math
from datetime import UTC, datetime

__all__ = ["HOT_SCORE_DECAY_SECONDS", "HOT_SCORE_EPOCH", "hot_score"]

HOT_SCORE_EPOCH = datetime(2024, 1, 1, tzinfo=UTC)

# Seconds of age worth one order of magnitude of net votes.
HOT_SCORE_DECAY_SECONDS = 45000


def _as_utc(moment: datetime) -> datetime:
    # Some engines (SQLite) hand back naive datetimes; they are stored as UTC.
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment


def hot_score(upvotes: int, downvotes: int, created_at: datetime) -> float:
    """Return the ranking value for content with the given votes and age.

    The vote term is ``sign(score) * log10(max(|score|, 1))`` so every
    tenfold increase in net votes adds one point, and the time term grows
    by one point per ``HOT_SCORE_DECAY_SECONDS`` after ``HOT_SCORE_EPOCH``.
    A post with a net score of zero ranks purely by recency. Timestamps
    before the epoch give a negative time term.
    """
    score = upvotes - downvotes
    order = math.log10(max(abs(score), 1))
    if score > 0:
        sign = 1
    elif score < 0:
        sign = -1
    else:
        sign = 0
    seconds = (_as_utc(created_at) - HOT_SCORE_EPOCH).total_seconds()
    return sign * order + seconds / HOT_SCORE_DECAY_SECONDS
