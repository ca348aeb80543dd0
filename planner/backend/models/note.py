"""
Note Models.

Notes and the media files attached to them.
"""

from sqlalchemy import JSON, BigInteger, Enum, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from planner.backend.models.base import (
    Base,
    CreatedAtMixin,
    OwnedMixin,
    TimestampMixin,
    UUIDMixin,
)

MEDIA_TYPES = ("image", "video")


class Note(UUIDMixin, OwnedMixin, TimestampMixin, Base):
    """
    Note database model.

    A titled text note with ordered tags, optionally filed in a notes folder.
    """

    __tablename__ = "notes"

    folder_id: Mapped[str | None] = mapped_column(
        ForeignKey("folders.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    content: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    tags: Mapped[list[str]] = mapped_column(
        JSON,
        default=list,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title={self.title!r})>"


class NoteMedia(UUIDMixin, OwnedMixin, CreatedAtMixin, Base):
    """
    Pointer to an image or video blob attached to a note.

    Only the storage key is persisted; signed URLs are generated per read.
    """

    __tablename__ = "note_media"

    note_id: Mapped[str] = mapped_column(
        ForeignKey("notes.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    media_key: Mapped[str] = mapped_column(
        String(1024),
        nullable=False,
    )
    media_type: Mapped[str] = mapped_column(
        Enum(*MEDIA_TYPES, name="media_type", native_enum=False),
        nullable=False,
    )
    filename: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    file_size: Mapped[int | None] = mapped_column(
        BigInteger,
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<NoteMedia(id={self.id}, note_id={self.note_id}, type={self.media_type})>"
