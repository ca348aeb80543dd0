"""
Note Schemas.

Pydantic schemas for note and note media request/response validation.
"""

from typing import Literal

from pydantic import Field

from planner.backend.schemas.base import ApiDateTime, CamelModel


class NoteCreate(CamelModel):
    """Schema for creating a new note."""

    title: str = Field(
        ...,
        max_length=255,
        description="Note title",
        examples=["Shopping list"],
    )
    content: str | None = Field(
        default=None,
        description="Note content",
        examples=["Milk, eggs, bread"],
    )
    folder_id: str | None = Field(
        default=None,
        description="Notes folder to file the note in",
    )
    tags: list[str] = Field(
        default_factory=list,
        description="Ordered tags",
        examples=[["home", "errands"]],
    )


class NoteUpdate(CamelModel):
    """Schema for updating an existing note. Only supplied fields change."""

    title: str | None = Field(default=None, max_length=255)
    content: str | None = None
    folder_id: str | None = None
    tags: list[str] | None = None


class NoteResponse(CamelModel):
    """Schema for note in API responses."""

    id: str = Field(description="Note unique identifier")
    user_id: str
    folder_id: str | None
    title: str
    content: str | None
    tags: list[str]
    created_at: ApiDateTime
    updated_at: ApiDateTime


class NoteMediaResponse(CamelModel):
    """
    Media attachment with a freshly signed URL.

    The URL expires and is regenerated on every read.
    """

    id: str
    note_id: str
    user_id: str
    media_key: str
    media_type: Literal["image", "video"]
    filename: str
    file_size: int | None
    created_at: ApiDateTime
    url: str
