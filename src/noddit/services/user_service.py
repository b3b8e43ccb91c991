"""CRUD-style helpers for managing users and follower edges."""
from __future__ import annotations

import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from noddit.models.follower import Follower
from noddit.models.user import User
from noddit.schemas.user import UserCreate, UserResponse
from noddit.services.exceptions import ConflictError, NotFoundError

__all__ = [
    "get_user",
    "get_user_by_username",
    "create_user",
    "follow_user",
    "unfollow_user",
    "get_followed_ids",
    "to_user_response",
]

logger = logging.getLogger(__name__)


def get_user(db: Session, user_id: int) -> User | None:
    """Return a single user by primary key."""
    return db.get(User, user_id)


def get_user_by_username(db: Session, username: str) -> User | None:
    """Return a single user by username."""
    return db.query(User).filter(User.username == username).first()


def create_user(db: Session, user: UserCreate) -> User:
    """Persist a new user; usernames are unique."""
    if get_user_by_username(db, user.username) is not None:
        raise ConflictError("Username already taken")
    db_user = User(username=user.username)
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    logger.info("Created user %s (%s)", db_user.id, db_user.username)
    return db_user


def _require_pair(db: Session, follower_id: int, followed_id: int) -> None:
    if get_user(db, follower_id) is None or get_user(db, followed_id) is None:
        raise NotFoundError("User not found")
    if follower_id == followed_id:
        raise ConflictError("You cannot follow yourself")


def follow_user(db: Session, follower_id: int, followed_id: int) -> bool:
    """Make ``follower_id`` follow ``followed_id``.

    Returns:
        True if a new edge was inserted, False if it already existed.
    """
    _require_pair(db, follower_id, followed_id)
    if db.get(Follower, (follower_id, followed_id)) is not None:
        return False
    db.add(Follower(follower_id=follower_id, followed_id=followed_id))
    db.commit()
    logger.info("User %s now follows user %s", follower_id, followed_id)
    return True


def unfollow_user(db: Session, follower_id: int, followed_id: int) -> bool:
    """Remove a follower edge; returns False if there was none."""
    _require_pair(db, follower_id, followed_id)
    edge = db.get(Follower, (follower_id, followed_id))
    if edge is None:
        return False
    db.delete(edge)
    db.commit()
    logger.info("User %s unfollowed user %s", follower_id, followed_id)
    return True


def get_followed_ids(db: Session, user_id: int) -> list[int]:
    """Return the ids of every user that ``user_id`` follows."""
    rows = db.execute(
        select(Follower.followed_id).where(Follower.follower_id == user_id)
    ).scalars()
    return list(rows)


def to_user_response(db: Session, user: User) -> UserResponse:
    """Convert a User ORM instance to an API schema with follow counts."""
    following = db.execute(
        select(func.count()).select_from(Follower).where(Follower.follower_id == user.id)
    ).scalar_one()
    followers = db.execute(
        select(func.count()).select_from(Follower).where(Follower.followed_id == user.id)
    ).scalar_one()
    return UserResponse(
        id=user.id,
        username=user.username,
        following_count=following,
        followers_count=followers,
    )
