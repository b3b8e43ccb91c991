"""User-related Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field


class UserCreate(BaseModel):
    """Schema for registering a username."""

    username: str = Field(
        ...,
        min_length=3,
        max_length=32,
        pattern=r"^[A-Za-z0-9_]+$",
        description="Unique handle made of letters, digits and underscores",
    )


class UserSummary(BaseModel):
    """Compact author information embedded in post payloads."""

    id: int
    username: str

    model_config = ConfigDict(from_attributes=True)


class UserResponse(UserSummary):
    """Schema for user information returned by the API."""

    following_count: int = 0
    followers_count: int = 0
