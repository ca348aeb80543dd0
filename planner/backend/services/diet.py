"""
Diet Services.

Business logic for diet entries and diet plans.
"""

from datetime import datetime
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from planner.backend.core.exceptions import NotFoundError
from planner.backend.models.diet import DietEntry, DietPlan
from planner.backend.repositories.diet import DietEntryRepository, DietPlanRepository
from planner.backend.schemas.diet import DietPlanCreate, DietPlanUpdate
from planner.backend.services.base import OwnedResourceService
from planner.backend.services.folder import FolderService


class DietEntryService(OwnedResourceService[DietEntry]):
    """
    Service for diet entry business logic.

    Entries may only be filed in the caller's own diet folders.
    """

    repository_class = DietEntryRepository
    required_fields = ("date", "meal_type", "food_name")
    optional_text_fields = ("notes", "folder_id")

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.folders = FolderService(session)

    async def list_entries(
        self,
        user_id: str,
        start: datetime | None = None,
        end: datetime | None = None,
        folder_id: str | None = None,
    ) -> list[DietEntry]:
        """List the user's diet entries matching every given filter."""
        return await self.repo.list_for_user(user_id, start=start, end=end, folder_id=folder_id)

    async def _prepare_create(self, user_id: str, values: dict[str, Any]) -> dict[str, Any]:
        if values.get("folder_id"):
            await self.folders.require_folder(user_id, values["folder_id"], "diet")
        return values

    async def _prepare_update(
        self,
        user_id: str,
        instance: DietEntry,
        values: dict[str, Any],
    ) -> dict[str, Any]:
        if values.get("folder_id"):
            await self.folders.require_folder(user_id, values["folder_id"], "diet")
        return values


class DietPlanService(OwnedResourceService[DietPlan]):
    """
    Service for diet plan business logic.

    A user has at most one active plan. Creating a plan, or updating one
    with isActive=true, first deactivates every other plan of the user.
    Both steps run in the request's transaction, and the partial unique
    index turns a racing second activation into a ConflictError.
    """

    repository_class = DietPlanRepository
    required_fields = ("name", "goal", "is_active")
    optional_text_fields = ("notes",)

    async def list_plans(self, user_id: str) -> list[DietPlan]:
        return await self.repo.list_owned(user_id)

    async def get_active(self, user_id: str) -> DietPlan:
        """
        Get the user's active plan.

        Raises:
            NotFoundError: If no plan is active
        """
        plan = await self.repo.get_active(user_id)
        if plan is None:
            raise NotFoundError("No active diet plan")
        return plan

    async def create(self, user_id: str, data: DietPlanCreate) -> DietPlan:
        values = self._normalize(data.model_dump())
        self._validate_required(values, ["name", "goal"])

        self._log_operation("Creating diet plan", user_id=user_id, goal=values["goal"])
        await self._execute_db_operation(
            "deactivate_diet_plans",
            self.repo.deactivate_all(user_id),
        )
        plan = await self._execute_db_operation(
            "create_diet_plans",
            self.repo.create(user_id, is_active=True, **values),
        )
        self._log_debug("Diet plan created", id=plan.id)
        return plan

    async def update(self, user_id: str, id: str, data: DietPlanUpdate) -> DietPlan:
        plan = await self.repo.get_owned(user_id, id)

        values = self._normalize(data.model_dump(exclude_unset=True))
        if not values:
            return plan

        self._validate_required(
            values,
            [name for name in self.required_fields if name in values],
        )

        if values.get("is_active"):
            self._log_operation("Activating diet plan", id=id, user_id=user_id)
            await self._execute_db_operation(
                "deactivate_diet_plans",
                self.repo.deactivate_all(user_id),
            )

        self._log_operation("Updating diet plan", id=id, fields=list(values.keys()))
        return await self._execute_db_operation(
            "update_diet_plans",
            self.repo.update(plan, **values),
        )
