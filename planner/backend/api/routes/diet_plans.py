"""
Diet Plan API Endpoints.

A user has at most one active plan; creating a plan makes it the
active one.
"""

from fastapi import APIRouter

from planner.backend.core.dependencies import AuthUser, DbSession
from planner.backend.schemas.diet import DietPlanCreate, DietPlanResponse, DietPlanUpdate
from planner.backend.services.diet import DietPlanService

router = APIRouter()


@router.get("", response_model=list[DietPlanResponse], summary="List diet plans")
async def list_diet_plans(db: DbSession, user: AuthUser) -> list[DietPlanResponse]:
    plans = await DietPlanService(db).list_plans(user.id)
    return [DietPlanResponse.model_validate(plan) for plan in plans]


@router.get(
    "/active",
    response_model=DietPlanResponse,
    summary="Get the active diet plan",
    description="Returns 404 when no plan is active.",
)
async def get_active_diet_plan(db: DbSession, user: AuthUser) -> DietPlanResponse:
    plan = await DietPlanService(db).get_active(user.id)
    return DietPlanResponse.model_validate(plan)


@router.get("/{plan_id}", response_model=DietPlanResponse, summary="Get a diet plan")
async def get_diet_plan(plan_id: str, db: DbSession, user: AuthUser) -> DietPlanResponse:
    plan = await DietPlanService(db).get(user.id, plan_id)
    return DietPlanResponse.model_validate(plan)


@router.post(
    "",
    response_model=DietPlanResponse,
    status_code=201,
    summary="Create a diet plan",
    description="The new plan becomes active and every other plan is deactivated.",
)
async def create_diet_plan(data: DietPlanCreate, db: DbSession, user: AuthUser) -> DietPlanResponse:
    plan = await DietPlanService(db).create(user.id, data)
    return DietPlanResponse.model_validate(plan)


@router.put(
    "/{plan_id}",
    response_model=DietPlanResponse,
    summary="Update a diet plan",
    description="Setting isActive to true deactivates the caller's other plans.",
)
async def update_diet_plan(
    plan_id: str,
    data: DietPlanUpdate,
    db: DbSession,
    user: AuthUser,
) -> DietPlanResponse:
    plan = await DietPlanService(db).update(user.id, plan_id, data)
    return DietPlanResponse.model_validate(plan)


@router.delete("/{plan_id}", status_code=204, summary="Delete a diet plan")
async def delete_diet_plan(plan_id: str, db: DbSession, user: AuthUser) -> None:
    await DietPlanService(db).delete(user.id, plan_id)
