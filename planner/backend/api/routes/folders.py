"""
Folder API Endpoints.
"""

from fastapi import APIRouter, Query

from planner.backend.core.dependencies import AuthUser, DbSession
from planner.backend.schemas.folder import (
    FolderCreate,
    FolderResponse,
    FolderType,
    FolderUpdate,
)
from planner.backend.services.folder import FolderService

router = APIRouter()


@router.get(
    "",
    response_model=list[FolderResponse],
    summary="List folders",
)
async def list_folders(
    db: DbSession,
    user: AuthUser,
    type: FolderType | None = Query(default=None, description="Only folders of this type"),
) -> list[FolderResponse]:
    """List the caller's folders."""
    folders = await FolderService(db).list_folders(user.id, type=type)
    return [FolderResponse.model_validate(folder) for folder in folders]


@router.post(
    "",
    response_model=FolderResponse,
    status_code=201,
    summary="Create a folder",
    description="Create a notes or diet folder. Color defaults to blue, icon to folder.",
)
async def create_folder(data: FolderCreate, db: DbSession, user: AuthUser) -> FolderResponse:
    folder = await FolderService(db).create(user.id, data)
    return FolderResponse.model_validate(folder)


@router.get("/{folder_id}", response_model=FolderResponse, summary="Get a folder")
async def get_folder(folder_id: str, db: DbSession, user: AuthUser) -> FolderResponse:
    folder = await FolderService(db).get(user.id, folder_id)
    return FolderResponse.model_validate(folder)


@router.put(
    "/{folder_id}",
    response_model=FolderResponse,
    summary="Update a folder",
    description="Change a folder's name, color or icon. Only provided fields are updated.",
)
async def update_folder(
    folder_id: str,
    data: FolderUpdate,
    db: DbSession,
    user: AuthUser,
) -> FolderResponse:
    folder = await FolderService(db).update(user.id, folder_id, data)
    return FolderResponse.model_validate(folder)


@router.delete(
    "/{folder_id}",
    status_code=204,
    summary="Delete a folder",
    description="Delete a folder together with every note or diet entry filed in it.",
)
async def delete_folder(folder_id: str, db: DbSession, user: AuthUser) -> None:
    await FolderService(db).delete(user.id, folder_id)
