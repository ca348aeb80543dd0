"""
Calendar API Endpoints.

Read-only views combining appointments and diet entries.
"""

from fastapi import APIRouter, Query

from planner.backend.core.dependencies import AuthUser, DbSession
from planner.backend.core.utils import parse_range_bound
from planner.backend.schemas.calendar import (
    CalendarEventsResponse,
    DayViewResponse,
    MonthViewResponse,
)
from planner.backend.services.calendar import CalendarService

router = APIRouter()


@router.get(
    "/events",
    response_model=CalendarEventsResponse,
    summary="Events in a date range",
    description="Appointments and diet entries between inclusive bounds, each tagged with its type.",
)
async def get_events(
    db: DbSession,
    user: AuthUser,
    start_date: str = Query(..., alias="startDate"),
    end_date: str = Query(..., alias="endDate"),
) -> CalendarEventsResponse:
    start = parse_range_bound(start_date, "startDate")
    end = parse_range_bound(end_date, "endDate", end=True)
    return await CalendarService(db).range_view(user.id, start, end)


@router.get(
    "/day/{date}",
    response_model=DayViewResponse,
    summary="Day view",
    description="Appointments, diet entries grouped by meal, and totals for one UTC day.",
)
async def get_day(date: str, db: DbSession, user: AuthUser) -> DayViewResponse:
    return await CalendarService(db).day_view(user.id, date)


@router.get(
    "/month/{year_month}",
    response_model=MonthViewResponse,
    summary="Month view",
    description="Per-day totals for the days of a YYYY-MM month that have events.",
)
async def get_month(year_month: str, db: DbSession, user: AuthUser) -> MonthViewResponse:
    return await CalendarService(db).month_view(user.id, year_month)
