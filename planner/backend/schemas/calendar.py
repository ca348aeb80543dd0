"""
Calendar Schemas.

Derived day, month and range views over appointments and diet entries.
"""

from typing import Literal

from pydantic import Field

from planner.backend.schemas.appointment import AppointmentResponse
from planner.backend.schemas.base import CamelModel
from planner.backend.schemas.diet import DietEntryResponse


class CalendarAppointment(AppointmentResponse):
    """Appointment tagged for a merged event stream."""

    type: Literal["appointment"] = "appointment"


class CalendarDietEntry(DietEntryResponse):
    """Diet entry tagged for a merged event stream."""

    type: Literal["diet"] = "diet"


class CalendarEventsResponse(CamelModel):
    """Both event streams for a date range."""

    appointments: list[CalendarAppointment]
    diet_entries: list[CalendarDietEntry]


class MealBuckets(CamelModel):
    """Diet entries grouped by meal. Every meal is present, possibly empty."""

    breakfast: list[DietEntryResponse] = Field(default_factory=list)
    lunch: list[DietEntryResponse] = Field(default_factory=list)
    dinner: list[DietEntryResponse] = Field(default_factory=list)
    snack: list[DietEntryResponse] = Field(default_factory=list)


class DailyStats(CamelModel):
    total_calories: int
    meal_count: int
    appointment_count: int


class DayViewResponse(CamelModel):
    """Everything that happens on one UTC calendar day."""

    date: str = Field(examples=["2024-03-15"])
    appointments: list[AppointmentResponse]
    diet_entries: MealBuckets
    daily_stats: DailyStats


class MonthDay(CamelModel):
    """Aggregate for a day of the month that has at least one event."""

    date: str
    appointment_count: int
    total_calories: int
    meal_count: int
    has_events: bool


class MonthViewResponse(CamelModel):
    """Sparse per-day aggregates for a month, ascending by date."""

    month: str = Field(examples=["2024-03"])
    days: list[MonthDay]
