from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from datetime import datetime
from itertools import count

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

from forum_votes.api.v1.dependencies import create_access_token
from forum_votes.db.session import Base, create_tables, drop_tables, make_engine, make_session_factory
from forum_votes.db.session import get_db as app_get_session
from forum_votes.main import app as fastapi_app
from forum_votes.models import Comment, Post, User
from forum_votes.services.post_service import create_comment, create_post

TEST_DB_URL = "sqlite://"

_USERNAME_COUNTER = count(1)


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = make_engine(TEST_DB_URL, poolclass=StaticPool)
    create_tables(engine)
    try:
        yield engine
    finally:
        drop_tables(engine)
        engine.dispose()


@pytest.fixture()
def file_engine(tmp_path) -> Generator[Engine, None, None]:
    """Engine over a file database so separate sessions use separate connections."""
    engine = make_engine(f"sqlite:///{tmp_path / 'votes.db'}")
    create_tables(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = make_session_factory(engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()

        # Vote processing commits, so each test cleans up after itself.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    """Return a factory that persists users with unique names."""

    def _make_user(username: str | None = None, karma: int = 0) -> User:
        user = User(username=username or f"user{next(_USERNAME_COUNTER)}", karma=karma)
        db_session.add(user)
        db_session.commit()
        return user

    return _make_user


@pytest.fixture()
def make_post(db_session: Session) -> Callable[..., Post]:
    """Return a factory that persists posts, optionally with preset counters."""

    def _make_post(
        author: User | None = None,
        *,
        upvotes: int = 0,
        downvotes: int = 0,
        created_at: datetime | None = None,
        title: str = "Is it just me?",
    ) -> Post:
        post = create_post(
            db_session,
            title=title,
            author_user_id=author.id if author else None,
            anonymous_id=None if author else "author-fingerprint",
            created_at=created_at,
        )
        post.upvotes = upvotes
        post.downvotes = downvotes
        post.score = upvotes - downvotes
        db_session.commit()
        return post

    return _make_post


@pytest.fixture()
def author(make_user: Callable[..., User]) -> User:
    """User who authors the content being voted on."""
    return make_user("author")


@pytest.fixture()
def voter(make_user: Callable[..., User]) -> User:
    """Registered user who casts votes."""
    return make_user("voter")


@pytest.fixture()
def post(make_post: Callable[..., Post], author: User) -> Post:
    """Fresh post by ``author`` with no votes."""
    return make_post(author)


@pytest.fixture()
def anonymous_post(make_post: Callable[..., Post]) -> Post:
    """Fresh post with no author account."""
    return make_post(None)


@pytest.fixture()
def comment(db_session: Session, post: Post, author: User) -> Comment:
    """Fresh comment by ``author`` on ``post``."""
    created = create_comment(db_session, post_id=post.id, body="Same here", author_user_id=author.id)
    db_session.commit()
    return created


@pytest.fixture()
def voter_headers(voter: User) -> dict[str, str]:
    """Authorization headers for ``voter``."""
    return {"Authorization": f"Bearer {create_access_token(voter.id)}"}
