"""
Note Service.

Business logic layer for notes. Orchestrates repositories,
handles validation, and implements business rules.
"""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from planner.backend.models.note import Note
from planner.backend.repositories.note import NoteRepository
from planner.backend.services.base import OwnedResourceService
from planner.backend.services.folder import FolderService


class NoteService(OwnedResourceService[Note]):
    """
    Service for note business logic.

    Notes may only be filed in the caller's own notes folders.
    """

    repository_class = NoteRepository
    required_fields = ("title",)
    optional_text_fields = ("content", "folder_id")
    create_defaults = {"tags": []}

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.folders = FolderService(session)

    async def list_notes(self, user_id: str, folder_id: str | None = None) -> list[Note]:
        """
        List the user's notes.

        Args:
            user_id: Caller
            folder_id: Only notes in this folder

        Returns:
            Notes in creation order
        """
        return await self.repo.list_for_user(user_id, folder_id=folder_id)

    async def _prepare_create(self, user_id: str, values: dict[str, Any]) -> dict[str, Any]:
        if values.get("folder_id"):
            await self.folders.require_folder(user_id, values["folder_id"], "notes")
        return values

    async def _prepare_update(
        self,
        user_id: str,
        instance: Note,
        values: dict[str, Any],
    ) -> dict[str, Any]:
        if "tags" in values and values["tags"] is None:
            values["tags"] = []
        if values.get("folder_id"):
            await self.folders.require_folder(user_id, values["folder_id"], "notes")
        return values
