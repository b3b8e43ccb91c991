# src/noddit/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    posts_router,
    subnoddits_router,
    users_router,
)

__all__ = [
    "posts_router",
    "subnoddits_router",
    "users_router",
]
