"""
API Router.

Aggregates all resource routers under the API prefix.
"""

from fastapi import APIRouter

from planner.backend.api.routes import (
    appointments,
    calendar,
    diet,
    diet_plans,
    folders,
    media,
    notes,
)

router = APIRouter()

router.include_router(folders.router, prefix="/folders", tags=["folders"])
router.include_router(notes.router, prefix="/notes", tags=["notes"])
router.include_router(media.router, tags=["media"])
router.include_router(appointments.router, prefix="/appointments", tags=["appointments"])
router.include_router(diet.router, prefix="/diet", tags=["diet"])
router.include_router(diet_plans.router, prefix="/diet-plans", tags=["diet-plans"])
router.include_router(calendar.router, prefix="/calendar", tags=["calendar"])
