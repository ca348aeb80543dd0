"""
Unit Tests for Diet Services.

Single-active-plan rules and folder checks for diet entries.
"""

from datetime import datetime
from unittest.mock import AsyncMock, MagicMock, call, patch

import pytest

from planner.backend.core.exceptions import NotFoundError, ValidationError
from planner.backend.schemas.diet import (
    DietEntryCreate,
    DietPlanCreate,
    DietPlanUpdate,
)
from planner.backend.services.diet import DietEntryService, DietPlanService


class TestDietPlanCreate:
    @pytest.fixture
    def service(self, mock_db_session):
        return DietPlanService(mock_db_session)

    async def test_deactivates_others_then_creates_active(self, service):
        manager = MagicMock()
        plan = MagicMock(id="p2", is_active=True)
        manager.deactivate_all = AsyncMock()
        manager.create = AsyncMock(return_value=plan)

        with patch.object(service.repo, "deactivate_all", manager.deactivate_all), \
             patch.object(service.repo, "create", manager.create):
            result = await service.create("u1", DietPlanCreate(name="Cut", goal="lose_weight"))

        assert result is plan
        assert manager.mock_calls[0] == call.deactivate_all("u1")
        create_kwargs = manager.create.await_args.kwargs
        assert create_kwargs["is_active"] is True
        assert create_kwargs["name"] == "Cut"

    async def test_blank_name_rejected(self, service):
        with patch.object(service.repo, "deactivate_all", AsyncMock()) as mock_deactivate:
            with pytest.raises(ValidationError):
                await service.create("u1", DietPlanCreate(name=" ", goal="maintain"))

        mock_deactivate.assert_not_awaited()


class TestDietPlanUpdate:
    @pytest.fixture
    def service(self, mock_db_session):
        return DietPlanService(mock_db_session)

    async def test_activation_deactivates_others(self, service):
        plan = MagicMock(id="p1")
        with patch.object(service.repo, "get_owned", AsyncMock(return_value=plan)), \
             patch.object(service.repo, "deactivate_all", AsyncMock()) as mock_deactivate, \
             patch.object(service.repo, "update", AsyncMock(return_value=plan)) as mock_update:
            await service.update("u1", "p1", DietPlanUpdate(isActive=True))

        mock_deactivate.assert_awaited_once_with("u1")
        mock_update.assert_awaited_once_with(plan, is_active=True)

    async def test_deactivation_touches_only_this_plan(self, service):
        plan = MagicMock(id="p1")
        with patch.object(service.repo, "get_owned", AsyncMock(return_value=plan)), \
             patch.object(service.repo, "deactivate_all", AsyncMock()) as mock_deactivate, \
             patch.object(service.repo, "update", AsyncMock(return_value=plan)) as mock_update:
            await service.update("u1", "p1", DietPlanUpdate(isActive=False))

        mock_deactivate.assert_not_awaited()
        mock_update.assert_awaited_once_with(plan, is_active=False)

    async def test_other_fields_leave_activity_alone(self, service):
        plan = MagicMock(id="p1")
        with patch.object(service.repo, "get_owned", AsyncMock(return_value=plan)), \
             patch.object(service.repo, "deactivate_all", AsyncMock()) as mock_deactivate, \
             patch.object(service.repo, "update", AsyncMock(return_value=plan)) as mock_update:
            await service.update("u1", "p1", DietPlanUpdate(dailyCalorieTarget=1800))

        mock_deactivate.assert_not_awaited()
        mock_update.assert_awaited_once_with(plan, daily_calorie_target=1800)


class TestDietPlanGetActive:
    async def test_missing_active_plan_is_not_found(self, mock_db_session):
        service = DietPlanService(mock_db_session)
        with patch.object(service.repo, "get_active", AsyncMock(return_value=None)):
            with pytest.raises(NotFoundError, match="No active diet plan"):
                await service.get_active("u1")


class TestDietEntryCreate:
    async def test_requires_diet_folder(self, mock_db_session):
        service = DietEntryService(mock_db_session)
        data = DietEntryCreate(
            date=datetime(2024, 3, 15, 8, 0),
            mealType="breakfast",
            foodName="Oatmeal",
            calories=300,
            folderId="f1",
        )
        with patch.object(service.repo, "create", AsyncMock(return_value=MagicMock(id="e1"))), \
             patch.object(service.folders, "require_folder", AsyncMock()) as mock_require:
            await service.create("u1", data)

        mock_require.assert_awaited_once_with("u1", "f1", "diet")

    async def test_blank_food_name_rejected(self, mock_db_session):
        service = DietEntryService(mock_db_session)
        data = DietEntryCreate(date=datetime(2024, 3, 15), mealType="snack", foodName="")

        with pytest.raises(ValidationError):
            await service.create("u1", data)
