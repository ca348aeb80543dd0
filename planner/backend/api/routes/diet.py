"""
Diet Entry API Endpoints.
"""

from fastapi import APIRouter, Query

from planner.backend.core.dependencies import AuthUser, DbSession
from planner.backend.core.utils import parse_range_bound
from planner.backend.schemas.diet import DietEntryCreate, DietEntryResponse, DietEntryUpdate
from planner.backend.services.diet import DietEntryService

router = APIRouter()


@router.get(
    "",
    response_model=list[DietEntryResponse],
    summary="List diet entries",
    description="Filters are combined: inclusive startDate/endDate and folderId.",
)
async def list_diet_entries(
    db: DbSession,
    user: AuthUser,
    start_date: str | None = Query(default=None, alias="startDate"),
    end_date: str | None = Query(default=None, alias="endDate"),
    folder_id: str | None = Query(default=None, alias="folderId"),
) -> list[DietEntryResponse]:
    start = parse_range_bound(start_date, "startDate") if start_date else None
    end = parse_range_bound(end_date, "endDate", end=True) if end_date else None

    entries = await DietEntryService(db).list_entries(
        user.id, start=start, end=end, folder_id=folder_id
    )
    return [DietEntryResponse.model_validate(entry) for entry in entries]


@router.post("", response_model=DietEntryResponse, status_code=201, summary="Log a diet entry")
async def create_diet_entry(data: DietEntryCreate, db: DbSession, user: AuthUser) -> DietEntryResponse:
    entry = await DietEntryService(db).create(user.id, data)
    return DietEntryResponse.model_validate(entry)


@router.get("/{entry_id}", response_model=DietEntryResponse, summary="Get a diet entry")
async def get_diet_entry(entry_id: str, db: DbSession, user: AuthUser) -> DietEntryResponse:
    entry = await DietEntryService(db).get(user.id, entry_id)
    return DietEntryResponse.model_validate(entry)


@router.put("/{entry_id}", response_model=DietEntryResponse, summary="Update a diet entry")
async def update_diet_entry(
    entry_id: str,
    data: DietEntryUpdate,
    db: DbSession,
    user: AuthUser,
) -> DietEntryResponse:
    entry = await DietEntryService(db).update(user.id, entry_id, data)
    return DietEntryResponse.model_validate(entry)


@router.delete("/{entry_id}", status_code=204, summary="Delete a diet entry")
async def delete_diet_entry(entry_id: str, db: DbSession, user: AuthUser) -> None:
    await DietEntryService(db).delete(user.id, entry_id)
