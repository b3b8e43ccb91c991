# src/noddit/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .common import MessageResponse
from .post import (
    NewsFeedFilter,
    PostCreate,
    PostEnvelope,
    PostFilter,
    PostListResponse,
    PostResponse,
    PostUpdate,
)
from .subnoddit import SubnodditCreate, SubnodditResponse
from .user import UserCreate, UserResponse
from .vote import VoteCreate

__all__ = [
    "MessageResponse",
    "NewsFeedFilter", "PostCreate", "PostEnvelope", "PostFilter",
    "PostListResponse", "PostResponse", "PostUpdate",
    "SubnodditCreate", "SubnodditResponse",
    "UserCreate", "UserResponse",
    "VoteCreate",
]
