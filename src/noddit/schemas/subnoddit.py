# src/noddit/schemas/subnoddit.py
"""Subnoddit-related Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field


class SubnodditCreate(BaseModel):
    """Schema for creating a new subnoddit."""

    name: str = Field(..., min_length=3, max_length=64, pattern=r"^[A-Za-z0-9_]+$")
    description: str | None = Field(None, max_length=2000)


class SubnodditSummary(BaseModel):
    """Compact community information embedded in post payloads."""

    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class SubnodditResponse(SubnodditSummary):
    """Schema for subnoddit information returned by the API."""

    description: str | None
