"""
Diet Repositories.

Data access for diet entries and diet plans.
"""

from datetime import datetime

from sqlalchemy import update

from planner.backend.models.diet import DietEntry, DietPlan
from planner.backend.repositories.base import BaseRepository, date_range_conditions


class DietEntryRepository(BaseRepository[DietEntry]):
    """Repository for DietEntry model."""

    model = DietEntry
    resource_name = "Diet entry"

    async def list_for_user(
        self,
        user_id: str,
        start: datetime | None = None,
        end: datetime | None = None,
        folder_id: str | None = None,
    ) -> list[DietEntry]:
        """
        List the user's diet entries.

        Filters are combined with AND. With a date range the bounds are
        inclusive and results are ordered by entry date.
        """
        conditions = date_range_conditions(DietEntry.date, start, end)
        if folder_id:
            conditions.append(DietEntry.folder_id == folder_id)

        order_by = DietEntry.date if start is not None or end is not None else None
        return await self.list_owned(user_id, *conditions, order_by=order_by)


class DietPlanRepository(BaseRepository[DietPlan]):
    """
    Repository for DietPlan model.

    Adds the queries behind the one-active-plan rule.
    """

    model = DietPlan
    resource_name = "Diet plan"

    async def get_active(self, user_id: str) -> DietPlan | None:
        """Get the user's active plan, if any."""
        plans = await self.list_owned(user_id, DietPlan.is_active.is_(True))
        return plans[0] if plans else None

    async def deactivate_all(self, user_id: str) -> None:
        """
        Mark every plan of the user inactive.

        Runs inside the caller's transaction; plans already loaded in the
        session are synchronized.
        """
        await self.session.execute(
            update(DietPlan)
            .where(DietPlan.user_id == user_id, DietPlan.is_active.is_(True))
            .values(is_active=False)
            .execution_options(synchronize_session="fetch")
        )
