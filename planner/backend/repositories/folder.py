"""
Folder Repository.
"""

from planner.backend.models.folder import Folder
from planner.backend.repositories.base import BaseRepository


class FolderRepository(BaseRepository[Folder]):
    """Repository for Folder model."""

    model = Folder
    resource_name = "Folder"

    async def list_for_user(self, user_id: str, type: str | None = None) -> list[Folder]:
        """List the user's folders, optionally only those of one type."""
        conditions = [Folder.type == type] if type else []
        return await self.list_owned(user_id, *conditions)
