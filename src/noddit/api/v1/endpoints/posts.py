# src/noddit/api/v1/endpoints/posts.py
"""Post-related endpoints for the Noddit API."""

from typing import Literal

from fastapi import APIRouter, Query, status

from noddit.core.settings import settings
from noddit.schemas.common import MessageResponse
from noddit.schemas.post import (
    NewsFeedFilter,
    PostCreate,
    PostEnvelope,
    PostFilter,
    PostListResponse,
    PostUpdate,
)
from noddit.schemas.vote import VoteCreate

from ..dependencies import CurrentUserIdDep, PostServiceDep

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get("/", response_model=PostListResponse)
async def list_posts(
    service: PostServiceDep,
    username: str | None = Query(None, description="Only posts by this author"),
    subnoddit_id: int | None = Query(None, alias="subnodditId", description="Only posts in this subnoddit"),
    limit: int = Query(settings.default_page_limit, ge=1, le=settings.max_page_limit),
    offset: int = Query(0, ge=0),
    by_votes: Literal["ASC", "DESC"] | None = Query(None, alias="byVotes", description="Rank by vote sum"),
) -> PostListResponse:
    """List posts with optional author or subnoddit filter.

    ``username`` and ``subnodditId`` cannot be combined.
    """
    filters = PostFilter(
        username=username,
        subnoddit_id=subnoddit_id,
        limit=limit,
        offset=offset,
        by_votes=by_votes,
    )
    return service.find_many(filters)


@router.get("/feed", response_model=PostListResponse)
async def news_feed(
    current_user_id: CurrentUserIdDep,
    service: PostServiceDep,
    subnoddit_id: int | None = Query(None, alias="subnodditId"),
    limit: int = Query(settings.default_page_limit, ge=1, le=settings.max_page_limit),
    offset: int = Query(0, ge=0),
    by_votes: Literal["ASC", "DESC"] | None = Query(None, alias="byVotes"),
) -> PostListResponse:
    """List posts written by the users the caller follows."""
    filters = NewsFeedFilter(
        subnoddit_id=subnoddit_id,
        limit=limit,
        offset=offset,
        by_votes=by_votes,
    )
    return service.news_feed(current_user_id, filters)


@router.get("/{post_id}", response_model=PostEnvelope)
async def get_post(post_id: int, service: PostServiceDep) -> PostEnvelope:
    """Get a specific post by ID, including its vote sum."""
    return service.find_one(post_id)


@router.post("/", response_model=PostEnvelope, status_code=status.HTTP_201_CREATED)
async def create_post(
    post_data: PostCreate,
    current_user_id: CurrentUserIdDep,
    service: PostServiceDep,
) -> PostEnvelope:
    """Create a new post owned by the caller."""
    return service.create(current_user_id, post_data)


@router.patch("/{post_id}", response_model=PostEnvelope)
async def update_post(
    post_id: int,
    post_data: PostUpdate,
    current_user_id: CurrentUserIdDep,
    service: PostServiceDep,
) -> PostEnvelope:
    """Update fields of a post; only its author may do so."""
    return service.update(current_user_id, post_id, post_data)


@router.delete("/{post_id}", response_model=MessageResponse)
async def delete_post(
    post_id: int,
    current_user_id: CurrentUserIdDep,
    service: PostServiceDep,
) -> MessageResponse:
    """Delete a post; only its author may do so."""
    return service.delete(current_user_id, post_id)


@router.post("/{post_id}/vote", response_model=MessageResponse)
async def vote_post(
    post_id: int,
    vote_data: VoteCreate,
    current_user_id: CurrentUserIdDep,
    service: PostServiceDep,
) -> MessageResponse:
    """Upvote, downvote, or reset the caller's vote by repeating it."""
    return service.vote(current_user_id, post_id, vote_data)
