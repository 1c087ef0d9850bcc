"""SQLAlchemy models for registered forum users."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from forum_votes.db.session import Base
from forum_votes.db.time import utcnow


class User(Base):
    """Registered participant who can author content and cast votes."""

    __tablename__ = "forum_user"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)

    # Running total maintained incrementally by vote processing. The live
    # post/comment breakdown is derived separately by the karma accessor.
    karma: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
