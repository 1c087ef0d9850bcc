"""Engine and session wiring for the vote store."""

from __future__ import annotations

from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from forum_votes.core.settings import settings


class Base(DeclarativeBase):
    """Declarative base for posts, comments, users and votes."""


# Model modules register their tables on Base.metadata at import time.
import forum_votes.models  # noqa: E402,F401


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # Vote rows rely on ON DELETE CASCADE, which SQLite ignores unless enabled.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def make_engine(url: str, **kwargs: Any) -> Engine:
    """Create an engine for ``url`` with SQLite foreign key enforcement.

    Extra keyword arguments are passed to ``create_engine`` unchanged.
    """
    if url.startswith("sqlite"):
        connect_args = kwargs.setdefault("connect_args", {})
        connect_args.setdefault("check_same_thread", False)
    else:
        kwargs.setdefault("pool_pre_ping", True)
    kwargs.setdefault("echo", settings.sql_debug)

    created = create_engine(url, **kwargs)
    if created.dialect.name == "sqlite":
        event.listen(created, "connect", _enable_sqlite_foreign_keys)
    return created


def make_session_factory(bind: Engine) -> sessionmaker[Session]:
    """Return a session factory; votes flush explicitly, so autoflush is off."""
    return sessionmaker(bind=bind, autocommit=False, autoflush=False)


engine = make_engine(settings.effective_database_url)

SessionLocal = make_session_factory(engine)


def get_db() -> Generator[Session, None, None]:
    """Yield a database session for dependency injection."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables(bind: Engine | None = None) -> None:
    """Create every table on ``bind`` (the application engine by default)."""
    Base.metadata.create_all(bind=bind or engine)


def drop_tables(bind: Engine | None = None) -> None:
    """Drop every table on ``bind`` (the application engine by default)."""
    Base.metadata.drop_all(bind=bind or engine)
