# src/noddit/schemas/post.py
"""Post-related Pydantic schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from noddit.models.post import TITLE_MAX_LENGTH

from .subnoddit import SubnodditSummary
from .user import UserSummary

VoteOrder = Literal["ASC", "DESC"]


class PostCreate(BaseModel):
    """Schema for creating a new post."""

    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LENGTH)
    text: str | None = Field(None, max_length=40000, description="Markdown body")
    attachment: str | None = Field(None, max_length=2048, description="Link or media reference")
    subnoddit_id: int = Field(..., alias="subnodditId", description="Target subnoddit")

    model_config = ConfigDict(populate_by_name=True)


class PostUpdate(BaseModel):
    """Schema for partially updating a post; unset fields are left untouched."""

    title: str | None = Field(None, min_length=1, max_length=TITLE_MAX_LENGTH)
    text: str | None = Field(None, max_length=40000)
    attachment: str | None = Field(None, max_length=2048)
    subnoddit_id: int | None = Field(None, alias="subnodditId")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("title", "subnoddit_id")
    @classmethod
    def _reject_explicit_null(cls, value: object) -> object:
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


class NewsFeedFilter(BaseModel):
    """Filters accepted by the news feed."""

    subnoddit_id: int | None = Field(None, alias="subnodditId")
    limit: int | None = Field(None, ge=1)
    offset: int = Field(0, ge=0)
    by_votes: VoteOrder | None = Field(None, alias="byVotes")

    model_config = ConfigDict(populate_by_name=True)


class PostFilter(NewsFeedFilter):
    """Filters accepted by the post listing.

    ``username`` and ``subnoddit_id`` are mutually exclusive; the service
    rejects a filter carrying both.
    """

    username: str | None = None


class PostResponse(BaseModel):
    """Schema for post information returned by the API."""

    id: int
    title: str
    text: str | None
    attachment: str | None
    votes: int
    user: UserSummary
    subnoddit: SubnodditSummary
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PostEnvelope(BaseModel):
    """Single-post result shape."""

    post: PostResponse


class PostListResponse(BaseModel):
    """Paginated listing; ``posts_count`` counts every match, not just the page."""

    posts: list[PostResponse]
    posts_count: int = Field(..., alias="postsCount")

    model_config = ConfigDict(populate_by_name=True)
