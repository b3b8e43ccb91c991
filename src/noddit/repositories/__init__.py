"""Query helpers that sit between services and the ORM."""

from .post_repo import PostRepository

__all__ = ["PostRepository"]
