"""
Appointment Schemas.
"""

from pydantic import Field

from planner.backend.schemas.base import ApiDateTime, CamelModel


class AppointmentCreate(CamelModel):
    """Schema for creating an appointment."""

    title: str = Field(..., max_length=255, examples=["Dentist"])
    description: str | None = None
    date: ApiDateTime = Field(..., examples=["2024-03-15T09:30:00.000Z"])
    location: str | None = Field(default=None, max_length=255)
    reminder_minutes: int | None = Field(default=None, ge=0, description="Defaults to 15")
    reminder_enabled: bool | None = Field(default=None, description="Defaults to true")


class AppointmentUpdate(CamelModel):
    """Schema for updating an appointment. Only supplied fields change."""

    title: str | None = Field(default=None, max_length=255)
    description: str | None = None
    date: ApiDateTime | None = None
    location: str | None = Field(default=None, max_length=255)
    reminder_minutes: int | None = Field(default=None, ge=0)
    reminder_enabled: bool | None = None


class AppointmentResponse(CamelModel):
    """Schema for appointment in API responses."""

    id: str
    user_id: str
    title: str
    description: str | None
    date: ApiDateTime
    location: str | None
    reminder_minutes: int
    reminder_enabled: bool
    created_at: ApiDateTime
    updated_at: ApiDateTime
