# src/noddit/api/v1/endpoints/users.py
"""User and follower endpoints for the Noddit API."""

from fastapi import APIRouter, status

from noddit.schemas.common import MessageResponse
from noddit.schemas.user import UserCreate, UserResponse
from noddit.services import user_service
from noddit.services.exceptions import NotFoundError

from ..dependencies import CurrentUserIdDep, SessionDep

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(user_data: UserCreate, db: SessionDep) -> UserResponse:
    """Register a username."""
    user = user_service.create_user(db, user_data)
    return user_service.to_user_response(db, user)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: int, db: SessionDep) -> UserResponse:
    """Get a user with follower counts."""
    user = user_service.get_user(db, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user_service.to_user_response(db, user)


@router.post("/{user_id}/follow", response_model=MessageResponse)
async def follow(user_id: int, current_user_id: CurrentUserIdDep, db: SessionDep) -> MessageResponse:
    """Follow another user so their posts show up in the caller's feed."""
    created = user_service.follow_user(db, current_user_id, user_id)
    if created:
        return MessageResponse(message="User followed")
    return MessageResponse(message="Already following user")


@router.delete("/{user_id}/follow", response_model=MessageResponse)
async def unfollow(user_id: int, current_user_id: CurrentUserIdDep, db: SessionDep) -> MessageResponse:
    """Stop following a user."""
    removed = user_service.unfollow_user(db, current_user_id, user_id)
    if removed:
        return MessageResponse(message="User unfollowed")
    return MessageResponse(message="Not following user")
