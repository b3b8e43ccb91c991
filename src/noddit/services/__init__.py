# src/noddit/services/__init__.py
"""Business logic services for the Noddit application."""

from .exceptions import (
    ConflictError,
    InternalServerError,
    NotFoundError,
    ServiceError,
    UnauthorizedError,
)
from .post_service import PostService

__all__ = [
    "PostService",
    "ServiceError",
    "NotFoundError",
    "UnauthorizedError",
    "ConflictError",
    "InternalServerError",
]
