"""
Appointment Model.
"""

from datetime import datetime

from sqlalchemy import DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from planner.backend.models.base import Base, OwnedMixin, TimestampMixin, UUIDMixin


class Appointment(UUIDMixin, OwnedMixin, TimestampMixin, Base):
    """Calendar appointment with an optional reminder."""

    __tablename__ = "appointments"
    __table_args__ = (Index("ix_appointments_user_date", "user_id", "date"),)

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    description: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    date: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
    )
    location: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
    )
    reminder_minutes: Mapped[int] = mapped_column(
        default=15,
        nullable=False,
    )
    reminder_enabled: Mapped[bool] = mapped_column(
        default=True,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Appointment(id={self.id}, title={self.title!r}, date={self.date})>"
