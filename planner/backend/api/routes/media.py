"""
Media API Endpoints.

Upload, list and delete note attachments, plus the signed-link
download route used by local blob storage.
"""

from fastapi import APIRouter, File, Query, UploadFile
from fastapi.responses import FileResponse

from planner.backend.core.dependencies import AuthUser, DbSession, Storage
from planner.backend.core.exceptions import NotFoundError
from planner.backend.schemas.note import NoteMediaResponse
from planner.backend.services.media import MediaService
from planner.backend.storage import LocalBlobStorage

router = APIRouter()

# Mounted only when local blob serving is enabled; needs no session
blob_router = APIRouter()


@router.post(
    "/notes/{note_id}/media",
    response_model=NoteMediaResponse,
    status_code=201,
    summary="Upload media",
    description="Attach an image or video (multipart field 'file') to a note.",
)
async def upload_media(
    note_id: str,
    db: DbSession,
    user: AuthUser,
    storage: Storage,
    file: UploadFile = File(...),
) -> NoteMediaResponse:
    service = MediaService(db, storage)
    try:
        return await service.upload(user.id, note_id, file, file.content_type, file.filename)
    finally:
        await file.close()


@router.get(
    "/notes/{note_id}/media",
    response_model=list[NoteMediaResponse],
    summary="List media",
    description="List a note's media. URLs are signed on every request and expire.",
)
async def list_media(
    note_id: str,
    db: DbSession,
    user: AuthUser,
    storage: Storage,
) -> list[NoteMediaResponse]:
    return await MediaService(db, storage).list_for_note(user.id, note_id)


@router.delete(
    "/media/{media_id}",
    status_code=204,
    summary="Delete media",
    description="Delete the stored file, then its row.",
)
async def delete_media(
    media_id: str,
    db: DbSession,
    user: AuthUser,
    storage: Storage,
) -> None:
    await MediaService(db, storage).delete(user.id, media_id)


@blob_router.get(
    "/media/blob",
    response_class=FileResponse,
    summary="Download media",
    description="Serve a stored file for a signed link.",
)
async def download_blob(storage: Storage, token: str = Query(...)) -> FileResponse:
    if not isinstance(storage, LocalBlobStorage):
        raise NotFoundError("File not found")

    path = storage.resolve_signed_token(token)
    if not path.is_file():
        raise NotFoundError("File not found")

    return FileResponse(path)
