"""Voter identity resolution.

A vote is attributed to exactly one identity: a registered user or an
anonymous client fingerprint. An explicitly supplied fingerprint wins over
the session user so that signed-in members can still vote anonymously.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import TypeAlias

from forum_votes.core.errors import IdentityRequired
from forum_votes.models.vote import VoterKind

__all__ = [
    "AnonymousVoter",
    "RegisteredVoter",
    "VoterIdentity",
    "new_anonymous_id",
    "resolve_identity",
]


@dataclass(frozen=True, slots=True)
class RegisteredVoter:
    """Identity backed by an authenticated user account."""

    user_id: int

    @property
    def kind(self) -> VoterKind:
        return VoterKind.USER

    @property
    def key(self) -> str:
        return str(self.user_id)


@dataclass(frozen=True, slots=True)
class AnonymousVoter:
    """Identity backed by an opaque client-supplied fingerprint."""

    fingerprint: str

    def __post_init__(self) -> None:
        if not self.fingerprint:
            raise ValueError("Anonymous fingerprint must be non-empty")

    @property
    def kind(self) -> VoterKind:
        return VoterKind.ANONYMOUS

    @property
    def key(self) -> str:
        return self.fingerprint


VoterIdentity: TypeAlias = RegisteredVoter | AnonymousVoter


def resolve_identity(user_id: int | None, anonymous_id: str | None) -> VoterIdentity:
    """Pick the acting identity for a vote request.

    Args:
        user_id: Authenticated user id from the session, if any.
        anonymous_id: Client fingerprint, if any. Empty or whitespace-only
            strings count as absent; any other value is used verbatim.

    Returns:
        ``AnonymousVoter`` when a fingerprint is present, otherwise
        ``RegisteredVoter`` for the session user.

    Raises:
        IdentityRequired: If neither is available.
    """
    if anonymous_id and not anonymous_id.isspace():
        return AnonymousVoter(anonymous_id)
    if user_id is not None:
        return RegisteredVoter(user_id)
    raise IdentityRequired()


def new_anonymous_id() -> str:
    """Return a fresh random fingerprint for clients that have none yet."""
    return str(uuid.uuid4())
