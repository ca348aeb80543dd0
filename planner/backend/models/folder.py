"""
Folder Model.

Named grouping container for either notes or diet entries.
"""

from sqlalchemy import Enum, String
from sqlalchemy.orm import Mapped, mapped_column

from planner.backend.models.base import Base, OwnedMixin, TimestampMixin, UUIDMixin

FOLDER_TYPES = ("notes", "diet")


class Folder(UUIDMixin, OwnedMixin, TimestampMixin, Base):
    """
    Folder database model.

    The type decides what may be filed in it: notes folders hold notes,
    diet folders hold diet entries. Deleting a folder deletes its contents.
    """

    __tablename__ = "folders"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    type: Mapped[str] = mapped_column(
        Enum(*FOLDER_TYPES, name="folder_type", native_enum=False),
        nullable=False,
        index=True,
    )
    color: Mapped[str] = mapped_column(
        String(50),
        default="blue",
        nullable=False,
    )
    icon: Mapped[str] = mapped_column(
        String(50),
        default="folder",
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Folder(id={self.id}, name={self.name!r}, type={self.type})>"
