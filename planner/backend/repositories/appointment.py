"""
Appointment Repository.
"""

from datetime import datetime

from planner.backend.models.appointment import Appointment
from planner.backend.repositories.base import BaseRepository, date_range_conditions


class AppointmentRepository(BaseRepository[Appointment]):
    """Repository for Appointment model."""

    model = Appointment
    resource_name = "Appointment"

    async def list_for_user(
        self,
        user_id: str,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[Appointment]:
        """
        List the user's appointments.

        With a date range the bounds are inclusive and results are ordered
        by appointment date.
        """
        if start is None and end is None:
            return await self.list_owned(user_id)

        return await self.list_owned(
            user_id,
            *date_range_conditions(Appointment.date, start, end),
            order_by=Appointment.date,
        )
