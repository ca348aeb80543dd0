"""
Folder Schemas.
"""

from typing import Literal

from pydantic import Field

from planner.backend.schemas.base import ApiDateTime, CamelModel

FolderType = Literal["notes", "diet"]


class FolderCreate(CamelModel):
    """Schema for creating a folder."""

    name: str = Field(..., max_length=255, examples=["Recipes"])
    type: FolderType = Field(..., description="What the folder holds")
    color: str | None = Field(default=None, max_length=50, description="Defaults to blue")
    icon: str | None = Field(default=None, max_length=50, description="Defaults to folder")


class FolderUpdate(CamelModel):
    """Schema for updating a folder. The type cannot change."""

    name: str | None = Field(default=None, max_length=255)
    color: str | None = Field(default=None, max_length=50)
    icon: str | None = Field(default=None, max_length=50)


class FolderResponse(CamelModel):
    """Schema for folder in API responses."""

    id: str
    user_id: str
    name: str
    type: FolderType
    color: str
    icon: str
    created_at: ApiDateTime
    updated_at: ApiDateTime
