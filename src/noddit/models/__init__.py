# src/noddit/models/__init__.py
"""SQLAlchemy models for the Noddit application."""

from .follower import Follower
from .post import Post
from .subnoddit import Subnoddit
from .user import User
from .vote import PostVote

__all__ = [
    "Follower",
    "Post",
    "PostVote",
    "Subnoddit",
    "User",
]
