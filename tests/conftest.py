# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from noddit.core.security import create_access_token
from noddit.db.session import Base
from noddit.db.session import get_db as app_get_session
from noddit.main import app as fastapi_app
from noddit.models import Follower, Post, PostVote, Subnoddit, User

TEST_DB_URL = "sqlite://"


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()

        # Ensure each test sees a clean database even if commits occurred.
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


def _make_user(db_session: Session, username: str) -> User:
    user = User(username=username)
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture()
def user_one(db_session: Session) -> User:
    """Primary acting user."""
    return _make_user(db_session, "user_one")


@pytest.fixture()
def user_two(db_session: Session) -> User:
    """Second author; followed by ``user_one`` when ``following`` is used."""
    return _make_user(db_session, "user_two")


@pytest.fixture()
def user_three(db_session: Session) -> User:
    """Extra voter used to build distinct vote totals."""
    return _make_user(db_session, "user_three")


def _make_subnoddit(db_session: Session, name: str) -> Subnoddit:
    subnoddit = Subnoddit(name=name, description=f"All about {name}")
    db_session.add(subnoddit)
    db_session.commit()
    db_session.refresh(subnoddit)
    return subnoddit


@pytest.fixture()
def subnoddit_one(db_session: Session) -> Subnoddit:
    return _make_subnoddit(db_session, "python")


@pytest.fixture()
def subnoddit_two(db_session: Session) -> Subnoddit:
    return _make_subnoddit(db_session, "databases")


@pytest.fixture()
def posts(
    db_session: Session,
    user_one: User,
    user_two: User,
    subnoddit_one: Subnoddit,
    subnoddit_two: Subnoddit,
) -> list[Post]:
    """Six posts: three per author, split over both subnoddits."""
    layout = [
        (user_one, subnoddit_one),
        (user_one, subnoddit_one),
        (user_one, subnoddit_two),
        (user_two, subnoddit_one),
        (user_two, subnoddit_one),
        (user_two, subnoddit_two),
    ]
    created = []
    for index, (author, subnoddit) in enumerate(layout, start=1):
        post = Post(
            title=f"Post {index}",
            text=f"Body of post {index}",
            user=author,
            subnoddit=subnoddit,
        )
        db_session.add(post)
        created.append(post)
    db_session.commit()
    for post in created:
        db_session.refresh(post)
    return created


@pytest.fixture()
def following(db_session: Session, user_one: User, user_two: User) -> Follower:
    """``user_one`` follows ``user_two``."""
    edge = Follower(follower_id=user_one.id, followed_id=user_two.id)
    db_session.add(edge)
    db_session.commit()
    return edge


@pytest.fixture()
def cast_vote(db_session: Session) -> Callable[[User, Post, int], PostVote]:
    """Return a helper that stores a vote row directly, bypassing the service."""

    def _cast(user: User, post: Post, direction: int) -> PostVote:
        vote = PostVote(user_id=user.id, post_id=post.id, direction=direction)
        db_session.add(vote)
        db_session.commit()
        return vote

    return _cast


@pytest.fixture()
def auth_token(user_one: User) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    token = create_access_token(user_one.id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def other_auth_token(user_two: User) -> dict[str, str]:
    """Return authorization headers for the secondary test user."""
    token = create_access_token(user_two.id)
    return {"Authorization": f"Bearer {token}"}
