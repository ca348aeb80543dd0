"""
Folder Service.

Folders group notes or diet entries. Other services call
require_folder() before filing a record in a folder.
"""

from planner.backend.core.exceptions import ValidationError
from planner.backend.models.folder import Folder
from planner.backend.repositories.folder import FolderRepository
from planner.backend.services.base import OwnedResourceService


class FolderService(OwnedResourceService[Folder]):
    """Service for folder business logic."""

    repository_class = FolderRepository
    required_fields = ("name", "type", "color", "icon")
    optional_text_fields = ("color", "icon")
    create_defaults = {"color": "blue", "icon": "folder"}

    async def list_folders(self, user_id: str, type: str | None = None) -> list[Folder]:
        """List the user's folders, optionally filtered by type."""
        return await self.repo.list_for_user(user_id, type=type)

    async def require_folder(self, user_id: str, folder_id: str, type: str) -> Folder:
        """
        Check that a folder can hold a record of the given kind.

        Raises:
            NotFoundError: If the folder is missing or owned by another user
            ValidationError: If the folder holds a different kind of record
        """
        folder = await self.repo.get_owned(user_id, folder_id)
        if folder.type != type:
            raise ValidationError(
                f"Folder does not hold {type} records",
                details={"folderId": folder_id, "folderType": folder.type},
            )
        return folder
