# src/noddit/schemas/vote.py
"""Vote-related Pydantic schemas."""

from typing import Literal

from pydantic import BaseModel, Field


class VoteCreate(BaseModel):
    """Schema for casting a vote on a post."""

    direction: Literal[-1, 1] = Field(..., description="1 for upvote, -1 for downvote")
