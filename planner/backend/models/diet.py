"""
Diet Models.

Logged meals and diet plans.
"""

from datetime import datetime

from sqlalchemy import DateTime, Enum, ForeignKey, Index, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from planner.backend.models.base import Base, OwnedMixin, TimestampMixin, UUIDMixin

MEAL_TYPES = ("breakfast", "lunch", "dinner", "snack")
DIET_GOALS = ("lose weight", "gain muscle", "maintain", "custom")


class DietEntry(UUIDMixin, OwnedMixin, TimestampMixin, Base):
    """A single logged food item, optionally filed in a diet folder."""

    __tablename__ = "diet_entries"
    __table_args__ = (Index("ix_diet_entries_user_date", "user_id", "date"),)

    folder_id: Mapped[str | None] = mapped_column(
        ForeignKey("folders.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    date: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
    )
    meal_type: Mapped[str] = mapped_column(
        Enum(*MEAL_TYPES, name="meal_type", native_enum=False),
        nullable=False,
    )
    food_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    calories: Mapped[int | None] = mapped_column(
        nullable=True,
    )
    notes: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<DietEntry(id={self.id}, food_name={self.food_name!r}, meal_type={self.meal_type})>"


class DietPlan(UUIDMixin, OwnedMixin, TimestampMixin, Base):
    """
    Diet plan with daily targets.

    At most one plan per user is active. The partial unique index makes the
    database reject a second active plan if two activations race.
    """

    __tablename__ = "diet_plans"
    __table_args__ = (
        Index(
            "uq_diet_plans_one_active_per_user",
            "user_id",
            unique=True,
            postgresql_where=text("is_active"),
            sqlite_where=text("is_active"),
        ),
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    goal: Mapped[str] = mapped_column(
        Enum(*DIET_GOALS, name="diet_goal", native_enum=False),
        nullable=False,
    )
    daily_calorie_target: Mapped[int | None] = mapped_column(
        nullable=True,
    )
    daily_protein_target: Mapped[int | None] = mapped_column(
        nullable=True,
    )
    daily_water_target: Mapped[int | None] = mapped_column(
        nullable=True,
    )
    notes: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    is_active: Mapped[bool] = mapped_column(
        default=True,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<DietPlan(id={self.id}, name={self.name!r}, is_active={self.is_active})>"
