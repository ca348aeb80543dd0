"""
Appointment Service.
"""

from datetime import datetime

from planner.backend.models.appointment import Appointment
from planner.backend.repositories.appointment import AppointmentRepository
from planner.backend.services.base import OwnedResourceService


class AppointmentService(OwnedResourceService[Appointment]):
    """Service for appointment business logic."""

    repository_class = AppointmentRepository
    required_fields = ("title", "date", "reminder_minutes", "reminder_enabled")
    optional_text_fields = ("description", "location")
    create_defaults = {"reminder_minutes": 15, "reminder_enabled": True}

    async def list_appointments(
        self,
        user_id: str,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[Appointment]:
        """List the user's appointments, optionally within inclusive date bounds."""
        return await self.repo.list_for_user(user_id, start=start, end=end)
