"""
Diet Schemas.

Request/response schemas for diet entries and diet plans.
"""

from typing import Literal

from pydantic import Field

from planner.backend.schemas.base import ApiDateTime, CamelModel

MealType = Literal["breakfast", "lunch", "dinner", "snack"]
DietGoal = Literal["lose weight", "gain muscle", "maintain", "custom"]


class DietEntryCreate(CamelModel):
    """Schema for logging a diet entry."""

    date: ApiDateTime
    meal_type: MealType
    food_name: str = Field(..., max_length=255, examples=["Oatmeal"])
    calories: int | None = Field(default=None, ge=0)
    notes: str | None = None
    folder_id: str | None = Field(default=None, description="Diet folder to file the entry in")


class DietEntryUpdate(CamelModel):
    """Schema for updating a diet entry. Only supplied fields change."""

    date: ApiDateTime | None = None
    meal_type: MealType | None = None
    food_name: str | None = Field(default=None, max_length=255)
    calories: int | None = Field(default=None, ge=0)
    notes: str | None = None
    folder_id: str | None = None


class DietEntryResponse(CamelModel):
    """Schema for diet entry in API responses."""

    id: str
    user_id: str
    folder_id: str | None
    date: ApiDateTime
    meal_type: MealType
    food_name: str
    calories: int | None
    notes: str | None
    created_at: ApiDateTime
    updated_at: ApiDateTime


class DietPlanCreate(CamelModel):
    """Schema for creating a diet plan. New plans are always active."""

    name: str = Field(..., max_length=255, examples=["Summer cut"])
    goal: DietGoal
    daily_calorie_target: int | None = Field(default=None, ge=0)
    daily_protein_target: int | None = Field(default=None, ge=0)
    daily_water_target: int | None = Field(default=None, ge=0)
    notes: str | None = None


class DietPlanUpdate(CamelModel):
    """
    Schema for updating a diet plan.

    Setting isActive to true deactivates the user's other plans.
    """

    name: str | None = Field(default=None, max_length=255)
    goal: DietGoal | None = None
    daily_calorie_target: int | None = Field(default=None, ge=0)
    daily_protein_target: int | None = Field(default=None, ge=0)
    daily_water_target: int | None = Field(default=None, ge=0)
    notes: str | None = None
    is_active: bool | None = None


class DietPlanResponse(CamelModel):
    """Schema for diet plan in API responses."""

    id: str
    user_id: str
    name: str
    goal: DietGoal
    daily_calorie_target: int | None
    daily_protein_target: int | None
    daily_water_target: int | None
    notes: str | None
    is_active: bool
    created_at: ApiDateTime
    updated_at: ApiDateTime
