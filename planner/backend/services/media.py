"""
Media Service.

Attaches images and videos to notes. Blobs go to blob storage; the
database keeps only a pointer row. Signed URLs are generated on every
read and never stored.
"""

import time
from pathlib import PurePosixPath
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from planner.backend.core.exceptions import (
    ConflictError,
    DatabaseError,
    ExternalServiceError,
    InvalidMediaTypeError,
    PayloadTooLargeError,
)
from planner.backend.models.note import NoteMedia
from planner.backend.repositories.note import NoteMediaRepository, NoteRepository
from planner.backend.schemas.note import NoteMediaResponse
from planner.backend.services.base import BaseService
from planner.backend.storage import BlobStorage, StorageError

READ_CHUNK_SIZE = 1024 * 1024


def classify_media_type(mime_type: str | None) -> str:
    """
    Map a MIME type to a media type.

    Raises:
        InvalidMediaTypeError: If the file is neither an image nor a video
    """
    if mime_type and mime_type.startswith("image/"):
        return "image"
    if mime_type and mime_type.startswith("video/"):
        return "video"
    raise InvalidMediaTypeError()


def build_media_key(user_id: str, note_id: str, filename: str, timestamp_ms: int | None = None) -> str:
    """Storage key namespaced by owner and note, made unique by upload time."""
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    return f"media/{user_id}/{note_id}/{timestamp_ms}-{filename}"


def safe_filename(filename: str | None) -> str:
    """Strip any directory components a client sent with the filename."""
    name = PurePosixPath((filename or "").replace("\\", "/")).name
    return name or "upload"


async def read_limited(source: Any, max_bytes: int) -> bytes:
    """
    Read an upload fully, failing as soon as it passes max_bytes.

    The source only needs an async read(size) method, like UploadFile.

    Raises:
        PayloadTooLargeError: If the upload is larger than max_bytes
    """
    chunks: list[bytes] = []
    total = 0
    while True:
        chunk = await source.read(READ_CHUNK_SIZE)
        if not chunk:
            break
        total += len(chunk)
        if total > max_bytes:
            raise PayloadTooLargeError(f"File too large. Maximum size is {max_bytes} bytes.")
        chunks.append(chunk)
    return b"".join(chunks)


class MediaService(BaseService):
    """
    Service for note media.

    Upload order is: note ownership, file type, size, blob upload, row
    insert. A rejected upload leaves neither a blob nor a row behind.
    Delete removes the blob first and keeps the row if storage fails.
    """

    def __init__(
        self,
        session: AsyncSession,
        storage: BlobStorage,
        max_upload_bytes: int | None = None,
    ) -> None:
        super().__init__(session)
        self.storage = storage
        self.notes = NoteRepository(session)
        self.repo = NoteMediaRepository(session)
        if max_upload_bytes is None:
            from planner.backend.core.config import get_app_config

            max_upload_bytes = get_app_config().storage.max_upload_bytes
        self.max_upload_bytes = max_upload_bytes

    async def upload(
        self,
        user_id: str,
        note_id: str,
        content: Any,
        mime_type: str | None,
        filename: str | None,
    ) -> NoteMediaResponse:
        """
        Attach a file to one of the user's notes.

        Args:
            user_id: Caller
            note_id: Note to attach to
            content: File bytes or a chunked reader
            mime_type: Declared content type of the file
            filename: Client-side file name

        Returns:
            The stored media row with a signed URL

        Raises:
            NotFoundError: If the note is missing or owned by another user
            InvalidMediaTypeError: If the file is not an image or video
            PayloadTooLargeError: If the file exceeds the upload cap
            ExternalServiceError: If blob storage rejects the upload
            DatabaseError: If the row could not be stored; the blob is removed
        """
        await self.notes.get_owned(user_id, note_id)
        media_type = classify_media_type(mime_type)

        if isinstance(content, bytes):
            if len(content) > self.max_upload_bytes:
                raise PayloadTooLargeError(
                    f"File too large. Maximum size is {self.max_upload_bytes} bytes."
                )
            data = content
        else:
            data = await read_limited(content, self.max_upload_bytes)

        name = safe_filename(filename)
        key = build_media_key(user_id, note_id, name)

        self._log_operation(
            "Uploading media",
            note_id=note_id,
            media_type=media_type,
            size=len(data),
        )
        try:
            stored_key = await self.storage.upload(key, data)
        except StorageError as e:
            raise ExternalServiceError("Failed to store file") from e

        try:
            media = await self._execute_db_operation(
                "create_note_media",
                self.repo.create(
                    user_id,
                    note_id=note_id,
                    media_key=stored_key,
                    media_type=media_type,
                    filename=name,
                    file_size=len(data),
                ),
            )
        except (ConflictError, DatabaseError):
            await self._discard_blob(stored_key)
            raise
        return await self._with_url(media)

    async def list_for_note(self, user_id: str, note_id: str) -> list[NoteMediaResponse]:
        """
        List a note's media, each with a freshly signed URL.

        Raises:
            NotFoundError: If the note is missing or owned by another user
        """
        await self.notes.get_owned(user_id, note_id)
        media = await self.repo.list_for_note(user_id, note_id)
        return [await self._with_url(item) for item in media]

    async def delete(self, user_id: str, media_id: str) -> None:
        """
        Delete a media file and its row.

        Raises:
            NotFoundError: If the media is missing or owned by another user
            ExternalServiceError: If storage could not delete the blob
        """
        media = await self.repo.get_owned(user_id, media_id)

        self._log_operation("Deleting media", id=media_id, note_id=media.note_id)
        try:
            await self.storage.delete(media.media_key)
        except StorageError as e:
            self._logger.error(
                "Blob delete failed, keeping media row",
                extra={"id": media_id, "key": media.media_key},
            )
            raise ExternalServiceError("Failed to delete file") from e

        await self._execute_db_operation(
            "delete_note_media",
            self.repo.delete(media),
        )

    async def _discard_blob(self, key: str) -> None:
        try:
            await self.storage.delete(key)
        except StorageError:
            self._logger.warning("Failed to remove orphaned blob", extra={"key": key})

    async def _with_url(self, media: NoteMedia) -> NoteMediaResponse:
        try:
            url = await self.storage.signed_url(media.media_key)
        except StorageError as e:
            raise ExternalServiceError("Failed to sign media URL") from e

        return NoteMediaResponse(
            id=media.id,
            note_id=media.note_id,
            user_id=media.user_id,
            media_key=media.media_key,
            media_type=media.media_type,
            filename=media.filename,
            file_size=media.file_size,
            created_at=media.created_at,
            url=url,
        )
