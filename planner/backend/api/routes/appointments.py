"""
Appointment API Endpoints.
"""

from fastapi import APIRouter, Query

from planner.backend.core.dependencies import AuthUser, DbSession
from planner.backend.core.utils import parse_range_bound
from planner.backend.schemas.appointment import (
    AppointmentCreate,
    AppointmentResponse,
    AppointmentUpdate,
)
from planner.backend.services.appointment import AppointmentService

router = APIRouter()


@router.get(
    "",
    response_model=list[AppointmentResponse],
    summary="List appointments",
    description=(
        "List the caller's appointments. startDate and endDate are inclusive "
        "and accept an ISO datetime or a bare YYYY-MM-DD date."
    ),
)
async def list_appointments(
    db: DbSession,
    user: AuthUser,
    start_date: str | None = Query(default=None, alias="startDate"),
    end_date: str | None = Query(default=None, alias="endDate"),
) -> list[AppointmentResponse]:
    start = parse_range_bound(start_date, "startDate") if start_date else None
    end = parse_range_bound(end_date, "endDate", end=True) if end_date else None

    appointments = await AppointmentService(db).list_appointments(user.id, start=start, end=end)
    return [AppointmentResponse.model_validate(a) for a in appointments]


@router.post(
    "",
    response_model=AppointmentResponse,
    status_code=201,
    summary="Create an appointment",
    description="Reminder defaults to 15 minutes before and is enabled unless set to false.",
)
async def create_appointment(
    data: AppointmentCreate,
    db: DbSession,
    user: AuthUser,
) -> AppointmentResponse:
    appointment = await AppointmentService(db).create(user.id, data)
    return AppointmentResponse.model_validate(appointment)


@router.get("/{appointment_id}", response_model=AppointmentResponse, summary="Get an appointment")
async def get_appointment(appointment_id: str, db: DbSession, user: AuthUser) -> AppointmentResponse:
    appointment = await AppointmentService(db).get(user.id, appointment_id)
    return AppointmentResponse.model_validate(appointment)


@router.put("/{appointment_id}", response_model=AppointmentResponse, summary="Update an appointment")
async def update_appointment(
    appointment_id: str,
    data: AppointmentUpdate,
    db: DbSession,
    user: AuthUser,
) -> AppointmentResponse:
    appointment = await AppointmentService(db).update(user.id, appointment_id, data)
    return AppointmentResponse.model_validate(appointment)


@router.delete("/{appointment_id}", status_code=204, summary="Delete an appointment")
async def delete_appointment(appointment_id: str, db: DbSession, user: AuthUser) -> None:
    await AppointmentService(db).delete(user.id, appointment_id)
