"""
Notes Screen.

Folder sidebar, note list, and the new-folder / new-note forms.
"""

from dataclasses import dataclass, field
from typing import Any

from planner.backend.core.logging import get_logger, log_with_source
from planner.client.api import REQUEST_ERRORS, PlannerClient
from planner.client.screens.notices import Notice

logger = get_logger(__name__)

SOURCE = "mobile"


@dataclass
class NotesState:
    folders: list[dict[str, Any]] = field(default_factory=list)
    notes: list[dict[str, Any]] = field(default_factory=list)
    media: dict[str, list[dict[str, Any]]] = field(default_factory=dict)
    selected_folder_id: str | None = None
    loading: bool = True
    show_new_folder_modal: bool = False
    show_new_note_modal: bool = False
    new_folder_name: str = ""
    new_note_title: str = ""
    new_note_content: str = ""
    notice: Notice | None = None


class NotesScreen:
    """
    Controller for the notes screen.

    Folder loading is best effort: a failure is logged and the screen
    keeps working with the folders it has.
    """

    def __init__(self, client: PlannerClient) -> None:
        self.client = client
        self.state = NotesState()

    async def load(self) -> None:
        await self.load_folders()
        await self.load_notes()

    async def load_folders(self) -> None:
        log_with_source(logger, SOURCE, "debug", "Loading note folders")
        try:
            self.state.folders = await self.client.list_folders(type="notes")
        except REQUEST_ERRORS as e:
            log_with_source(logger, SOURCE, "warning", "Failed to load folders", error=str(e))

    async def load_notes(self) -> None:
        folder_id = self.state.selected_folder_id
        log_with_source(logger, SOURCE, "debug", "Loading notes", folder_id=folder_id)
        try:
            self.state.notes = await self.client.list_notes(folder_id=folder_id)
        except REQUEST_ERRORS as e:
            log_with_source(logger, SOURCE, "error", "Failed to load notes", error=str(e))
            self.state.notice = Notice.error("Failed to load notes. Please try again.")
        finally:
            self.state.loading = False

    async def select_folder(self, folder_id: str | None) -> None:
        """Show one folder's notes, or every note when folder_id is None."""
        self.state.selected_folder_id = folder_id
        await self.load_notes()

    def open_new_folder_modal(self) -> None:
        self.state.show_new_folder_modal = True

    def cancel_new_folder(self) -> None:
        self.state.show_new_folder_modal = False
        self.state.new_folder_name = ""

    def open_new_note_modal(self) -> None:
        self.state.show_new_note_modal = True

    def cancel_new_note(self) -> None:
        self.state.show_new_note_modal = False
        self.state.new_note_title = ""
        self.state.new_note_content = ""

    async def create_folder(self) -> dict[str, Any] | None:
        """Create a notes folder from the form. Returns the folder, or None on failure."""
        name = self.state.new_folder_name.strip()
        if not name:
            self.state.notice = Notice.error("Please enter a folder name")
            return None

        try:
            folder = await self.client.create_folder(name=name, type="notes")
        except REQUEST_ERRORS as e:
            log_with_source(logger, SOURCE, "error", "Failed to create folder", error=str(e))
            self.state.notice = Notice.error("Failed to create folder. Please try again.")
            return None

        self.state.folders = [*self.state.folders, folder]
        self.state.new_folder_name = ""
        self.state.show_new_folder_modal = False
        self.state.notice = Notice.success("Folder created successfully!")
        return folder

    async def create_note(self) -> dict[str, Any] | None:
        """
        Create a note from the form in the selected folder.

        The new note goes to the top of the list.
        """
        title = self.state.new_note_title.strip()
        if not title:
            self.state.notice = Notice.error("Please enter a note title")
            return None

        try:
            note = await self.client.create_note(
                title=title,
                content=self.state.new_note_content or None,
                folder_id=self.state.selected_folder_id,
            )
        except REQUEST_ERRORS as e:
            log_with_source(logger, SOURCE, "error", "Failed to create note", error=str(e))
            self.state.notice = Notice.error("Failed to create note. Please try again.")
            return None

        self.state.notes = [note, *self.state.notes]
        self.state.new_note_title = ""
        self.state.new_note_content = ""
        self.state.show_new_note_modal = False
        self.state.notice = Notice.success("Note created successfully!")
        return note

    async def delete_note(self, note_id: str) -> bool:
        try:
            await self.client.delete_note(note_id)
        except REQUEST_ERRORS as e:
            log_with_source(logger, SOURCE, "error", "Failed to delete note", error=str(e))
            self.state.notice = Notice.error("Failed to delete note. Please try again.")
            return False

        self.state.notes = [note for note in self.state.notes if note["id"] != note_id]
        self.state.media.pop(note_id, None)
        return True

    async def load_media(self, note_id: str) -> None:
        try:
            self.state.media[note_id] = await self.client.list_media(note_id)
        except REQUEST_ERRORS as e:
            log_with_source(logger, SOURCE, "error", "Failed to load media", error=str(e))
            self.state.notice = Notice.error("Failed to load media. Please try again.")

    async def upload_media(
        self,
        note_id: str,
        filename: str,
        data: bytes,
        content_type: str,
    ) -> dict[str, Any] | None:
        try:
            media = await self.client.upload_media(note_id, filename, data, content_type)
        except REQUEST_ERRORS as e:
            log_with_source(logger, SOURCE, "error", "Failed to upload media", error=str(e))
            self.state.notice = Notice.error(_upload_failure_message(e))
            return None

        self.state.media[note_id] = [*self.state.media.get(note_id, []), media]
        self.state.notice = Notice.success("Media uploaded successfully!")
        return media

    async def delete_media(self, note_id: str, media_id: str) -> bool:
        try:
            await self.client.delete_media(media_id)
        except REQUEST_ERRORS as e:
            log_with_source(logger, SOURCE, "error", "Failed to delete media", error=str(e))
            self.state.notice = Notice.error("Failed to delete media. Please try again.")
            return False

        self.state.media[note_id] = [
            item for item in self.state.media.get(note_id, []) if item["id"] != media_id
        ]
        return True


def _upload_failure_message(error: Exception) -> str:
    code = getattr(error, "code", None)
    if code == "MEDIA_INVALID_TYPE":
        return "Only images and videos can be attached."
    if code == "MEDIA_TOO_LARGE":
        return "That file is too large to upload."
    return "Failed to upload media. Please try again."
