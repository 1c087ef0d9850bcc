"""Error taxonomy for the voting core.

Every failure the core raises derives from :class:`VoteError`. Each class
carries a stable, user-presentable message and the HTTP status the API
layer maps it to.
"""

from __future__ import annotations


class VoteError(Exception):
    """Base class for voting failures."""

    status_code: int = 500
    default_message: str = "Vote could not be processed"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class TargetNotFound(VoteError):
    """The voted-on post or comment does not exist."""

    status_code = 404
    default_message = "Target not found"

    def __init__(self, kind: str, target_id: int) -> None:
        self.kind = kind
        self.target_id = target_id
        super().__init__(f"{kind.capitalize()} not found")


class IdentityRequired(VoteError):
    """Neither an authenticated user nor an anonymous fingerprint was supplied."""

    status_code = 400
    default_message = "An authenticated user or anonymous id is required to vote"


class VoteNotFound(VoteError):
    """A stored vote was requested by id but does not exist."""

    status_code = 404
    default_message = "Vote not found"


class ConcurrentModification(VoteError):
    """Another request from the same identity created the vote first.

    Raised when the ledger insert violates the per-identity uniqueness
    constraint. Recovered inside ``cast_vote``; never reaches the caller.
    """

    status_code = 409
    default_message = "Vote was modified concurrently"


class InternalError(VoteError):
    """Storage failure or an unrecoverable repeated conflict."""

    status_code = 500
    default_message = "Internal error while processing vote"
