"""Student group Pydantic models."""
from typing import Any

from pydantic import BaseModel, Field


class GroupCreate(BaseModel):
    """Model for creating a group."""

    name: str = Field(..., min_length=1, max_length=100)
    description: str = ""


class GroupUpdate(BaseModel):
    """Model for updating group metadata."""

    name: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = None


class Group(BaseModel):
    id: str = Field(..., alias="_id")
    name: str
    description: str = ""
    students: list[dict[str, Any] | str] = Field(default_factory=list)
    createdAt: str | None = None

    class Config:
        populate_by_name = True
