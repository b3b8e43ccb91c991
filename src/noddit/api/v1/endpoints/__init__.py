# src/noddit/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .posts import router as posts_router
from .subnoddits import router as subnoddits_router
from .users import router as users_router

__all__ = [
    "posts_router",
    "subnoddits_router",
    "users_router",
]
