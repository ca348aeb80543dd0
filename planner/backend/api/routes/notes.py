"""
Notes API Endpoints.

REST API endpoints for note management.
"""

from fastapi import APIRouter, Query

from planner.backend.core.dependencies import AuthUser, DbSession
from planner.backend.schemas.note import NoteCreate, NoteResponse, NoteUpdate
from planner.backend.services.note import NoteService

router = APIRouter()


@router.get(
    "",
    response_model=list[NoteResponse],
    summary="List notes",
    description="List the caller's notes, optionally only those in one folder.",
)
async def list_notes(
    db: DbSession,
    user: AuthUser,
    folder_id: str | None = Query(default=None, alias="folderId"),
) -> list[NoteResponse]:
    """List notes."""
    notes = await NoteService(db).list_notes(user.id, folder_id=folder_id)
    return [NoteResponse.model_validate(note) for note in notes]


@router.post(
    "",
    response_model=NoteResponse,
    status_code=201,
    summary="Create a note",
    description="Create a new note with a title and optional content, folder and tags.",
)
async def create_note(data: NoteCreate, db: DbSession, user: AuthUser) -> NoteResponse:
    """Create a new note."""
    note = await NoteService(db).create(user.id, data)
    return NoteResponse.model_validate(note)


@router.get(
    "/{note_id}",
    response_model=NoteResponse,
    summary="Get a note",
)
async def get_note(note_id: str, db: DbSession, user: AuthUser) -> NoteResponse:
    """Get a note by ID."""
    note = await NoteService(db).get(user.id, note_id)
    return NoteResponse.model_validate(note)


@router.put(
    "/{note_id}",
    response_model=NoteResponse,
    summary="Update a note",
    description="Update an existing note. Only provided fields are updated.",
)
async def update_note(
    note_id: str,
    data: NoteUpdate,
    db: DbSession,
    user: AuthUser,
) -> NoteResponse:
    """Update a note."""
    note = await NoteService(db).update(user.id, note_id, data)
    return NoteResponse.model_validate(note)


@router.delete(
    "/{note_id}",
    status_code=204,
    summary="Delete a note",
    description="Permanently delete a note and its media rows.",
)
async def delete_note(note_id: str, db: DbSession, user: AuthUser) -> None:
    """Delete a note."""
    await NoteService(db).delete(user.id, note_id)
