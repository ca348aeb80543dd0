"""
Note Repository.

Data access layer for notes and their media rows.
"""

from planner.backend.models.note import Note, NoteMedia
from planner.backend.repositories.base import BaseRepository


class NoteRepository(BaseRepository[Note]):
    """
    Repository for Note model.

    Inherits ownership-scoped CRUD operations from BaseRepository
    and adds note-specific queries.
    """

    model = Note
    resource_name = "Note"

    async def list_for_user(self, user_id: str, folder_id: str | None = None) -> list[Note]:
        """
        List the user's notes.

        Args:
            user_id: Owner of the notes
            folder_id: Only return notes filed in this folder

        Returns:
            Notes in creation order
        """
        conditions = [Note.folder_id == folder_id] if folder_id else []
        return await self.list_owned(user_id, *conditions)


class NoteMediaRepository(BaseRepository[NoteMedia]):
    """Repository for NoteMedia model."""

    model = NoteMedia
    resource_name = "Media"

    async def list_for_note(self, user_id: str, note_id: str) -> list[NoteMedia]:
        """List media attached to a note, oldest first."""
        return await self.list_owned(user_id, NoteMedia.note_id == note_id)
