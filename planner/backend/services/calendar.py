"""
Calendar Service.

Day, month and range views built on the fly from appointments and diet
entries. There is no events table; both streams are fetched for the
requested UTC bounds and merged in memory.
"""

from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from planner.backend.core.exceptions import ValidationError
from planner.backend.core.utils import day_bounds, day_key, month_bounds, parse_day
from planner.backend.models.appointment import Appointment
from planner.backend.models.diet import MEAL_TYPES, DietEntry
from planner.backend.repositories.appointment import AppointmentRepository
from planner.backend.repositories.diet import DietEntryRepository
from planner.backend.schemas.appointment import AppointmentResponse
from planner.backend.schemas.calendar import (
    CalendarAppointment,
    CalendarDietEntry,
    CalendarEventsResponse,
    DailyStats,
    DayViewResponse,
    MealBuckets,
    MonthDay,
    MonthViewResponse,
)
from planner.backend.schemas.diet import DietEntryResponse
from planner.backend.services.base import BaseService


def total_calories(entries: list[DietEntry]) -> int:
    """Sum of logged calories; entries without calories count as 0."""
    return sum(entry.calories or 0 for entry in entries)


def bucket_by_meal(entries: list[DietEntry]) -> dict[str, list[DietEntry]]:
    """Group entries by meal type. Every meal type is present."""
    buckets: dict[str, list[DietEntry]] = {meal: [] for meal in MEAL_TYPES}
    for entry in entries:
        buckets[entry.meal_type].append(entry)
    return buckets


def summarize_days(
    appointments: list[Appointment],
    entries: list[DietEntry],
) -> list[MonthDay]:
    """
    Per-day aggregates for the days that have at least one event.

    Days are UTC calendar days; the result is sorted by date.
    """
    days: dict[str, dict[str, int]] = {}

    def day(key: str) -> dict[str, int]:
        return days.setdefault(key, {"appointment_count": 0, "total_calories": 0, "meal_count": 0})

    for appointment in appointments:
        day(day_key(appointment.date))["appointment_count"] += 1

    for entry in entries:
        stats = day(day_key(entry.date))
        stats["total_calories"] += entry.calories or 0
        stats["meal_count"] += 1

    return [
        MonthDay(
            date=key,
            has_events=stats["appointment_count"] > 0 or stats["meal_count"] > 0,
            **stats,
        )
        for key, stats in sorted(days.items())
    ]


class CalendarService(BaseService):
    """Service for calendar views."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.appointments = AppointmentRepository(session)
        self.diet_entries = DietEntryRepository(session)

    async def _fetch(
        self,
        user_id: str,
        start: datetime,
        end: datetime,
    ) -> tuple[list[Appointment], list[DietEntry]]:
        appointments = await self.appointments.list_for_user(user_id, start=start, end=end)
        entries = await self.diet_entries.list_for_user(user_id, start=start, end=end)
        self._log_debug(
            "Calendar range fetched",
            start=start.isoformat(),
            end=end.isoformat(),
            appointments=len(appointments),
            diet_entries=len(entries),
        )
        return appointments, entries

    async def day_view(self, user_id: str, date: str) -> DayViewResponse:
        """
        Everything on one UTC calendar day, 00:00:00.000 to 23:59:59.999.

        Raises:
            ValidationError: If date is not a valid date
        """
        day = parse_day(date)
        appointments, entries = await self._fetch(user_id, *day_bounds(day))

        buckets = bucket_by_meal(entries)
        return DayViewResponse(
            date=day.isoformat(),
            appointments=[AppointmentResponse.model_validate(a) for a in appointments],
            diet_entries=MealBuckets(
                **{
                    meal: [DietEntryResponse.model_validate(e) for e in items]
                    for meal, items in buckets.items()
                }
            ),
            daily_stats=DailyStats(
                total_calories=total_calories(entries),
                meal_count=len(entries),
                appointment_count=len(appointments),
            ),
        )

    async def month_view(self, user_id: str, year_month: str) -> MonthViewResponse:
        """
        Sparse per-day aggregates for a YYYY-MM month.

        Raises:
            ValidationError: If year_month is not a valid month
        """
        start, end = month_bounds(year_month)
        appointments, entries = await self._fetch(user_id, start, end)
        return MonthViewResponse(month=year_month, days=summarize_days(appointments, entries))

    async def range_view(self, user_id: str, start: datetime, end: datetime) -> CalendarEventsResponse:
        """
        Both event streams between inclusive bounds, each item tagged with its type.

        Raises:
            ValidationError: If start is after end
        """
        if start > end:
            raise ValidationError(
                "startDate must not be after endDate",
                details={"startDate": start.isoformat(), "endDate": end.isoformat()},
            )

        appointments, entries = await self._fetch(user_id, start, end)
        return CalendarEventsResponse(
            appointments=[CalendarAppointment.model_validate(a) for a in appointments],
            diet_entries=[CalendarDietEntry.model_validate(e) for e in entries],
        )
