"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from noddit.core.security import decode_user_id
from noddit.db.session import get_db
from noddit.services.post_service import PostService

# HTTP Bearer scheme for JWT authentication
bearer_scheme = HTTPBearer()

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_current_user_id(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(bearer_scheme)],
) -> int:
    """Return the acting user's id from the bearer token.

    Existence of the user is checked by the services that need it.

    Raises:
        HTTPException: If the token is invalid or carries no usable subject.
    """
    user_id = decode_user_id(credentials.credentials)
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        )
    return user_id


def get_post_service(db: SessionDep) -> PostService:
    """Build a post service bound to the request's session."""
    return PostService(db)


# Type aliases for injected dependencies
CurrentUserIdDep = Annotated[int, Depends(get_current_user_id)]
PostServiceDep = Annotated[PostService, Depends(get_post_service)]
