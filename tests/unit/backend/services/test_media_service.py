"""
Unit Tests for Media Service.

Upload validation order, key layout, and the blob-first delete.
"""

import io
from datetime import datetime
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from sqlalchemy.exc import SQLAlchemyError

from planner.backend.core.exceptions import (
    DatabaseError,
    ExternalServiceError,
    InvalidMediaTypeError,
    NotFoundError,
    PayloadTooLargeError,
)
from planner.backend.services.media import (
    MediaService,
    build_media_key,
    classify_media_type,
    read_limited,
    safe_filename,
)
from planner.backend.storage import StorageError


class _AsyncReader:
    """Minimal async file-like object, shaped like UploadFile."""

    def __init__(self, data: bytes) -> None:
        self._buffer = io.BytesIO(data)

    async def read(self, size: int = -1) -> bytes:
        return self._buffer.read(size)


class TestClassifyMediaType:
    @pytest.mark.parametrize(
        ("mime", "expected"),
        [("image/png", "image"), ("image/jpeg", "image"), ("video/mp4", "video")],
    )
    def test_accepted(self, mime, expected):
        assert classify_media_type(mime) == expected

    @pytest.mark.parametrize("mime", ["application/pdf", "text/plain", "", None])
    def test_rejected(self, mime):
        with pytest.raises(InvalidMediaTypeError):
            classify_media_type(mime)


class TestBuildMediaKey:
    def test_layout(self):
        key = build_media_key("u1", "n1", "cat.png", timestamp_ms=1700000000000)
        assert key == "media/u1/n1/1700000000000-cat.png"

    def test_defaults_to_current_time(self):
        key = build_media_key("u1", "n1", "cat.png")
        timestamp = key.split("/")[-1].split("-")[0]
        assert timestamp.isdigit()
        assert len(timestamp) == 13


class TestSafeFilename:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("cat.png", "cat.png"),
            ("../../etc/passwd", "passwd"),
            ("C:\\Users\\me\\photo.jpg", "photo.jpg"),
            ("", "upload"),
            (None, "upload"),
        ],
    )
    def test_strips_directories(self, raw, expected):
        assert safe_filename(raw) == expected


class TestReadLimited:
    async def test_reads_everything_under_limit(self):
        assert await read_limited(_AsyncReader(b"x" * 100), 100) == b"x" * 100

    async def test_rejects_over_limit(self):
        with pytest.raises(PayloadTooLargeError):
            await read_limited(_AsyncReader(b"x" * 101), 100)


class TestMediaServiceUpload:
    @pytest.fixture
    def service(self, mock_db_session, mock_storage):
        service = MediaService(mock_db_session, mock_storage, max_upload_bytes=1024)
        service.notes.get_owned = AsyncMock(return_value=MagicMock(id="n1"))
        service.repo.create = AsyncMock(
            side_effect=lambda user_id, **kw: MagicMock(
                id="m1", user_id=user_id, created_at=datetime(2024, 3, 15), **kw
            )
        )
        return service

    async def test_stores_blob_and_row(self, service, mock_storage):
        result = await service.upload("u1", "n1", b"png-bytes", "image/png", "cat.png")

        key = mock_storage.upload.await_args.args[0]
        assert key.startswith("media/u1/n1/")
        assert key.endswith("-cat.png")
        assert result.media_type == "image"
        assert result.file_size == len(b"png-bytes")
        assert result.url.startswith("https://blobs.test/media/u1/n1/")

    async def test_accepts_chunked_reader(self, service, mock_storage):
        result = await service.upload("u1", "n1", _AsyncReader(b"v" * 512), "video/mp4", "clip.mp4")

        assert mock_storage.upload.await_args.args[1] == b"v" * 512
        assert result.media_type == "video"

    async def test_foreign_note_checked_first(self, service, mock_storage):
        service.notes.get_owned = AsyncMock(side_effect=NotFoundError("Note not found"))

        with pytest.raises(NotFoundError):
            await service.upload("u2", "n1", b"data", "application/pdf", "doc.pdf")

        mock_storage.upload.assert_not_awaited()

    async def test_invalid_type_stores_nothing(self, service, mock_storage):
        with pytest.raises(InvalidMediaTypeError):
            await service.upload("u1", "n1", b"%PDF", "application/pdf", "doc.pdf")

        mock_storage.upload.assert_not_awaited()
        service.repo.create.assert_not_awaited()

    async def test_too_large_stores_nothing(self, service, mock_storage):
        with pytest.raises(PayloadTooLargeError):
            await service.upload("u1", "n1", b"x" * 1025, "image/png", "big.png")

        mock_storage.upload.assert_not_awaited()
        service.repo.create.assert_not_awaited()

    async def test_storage_failure_leaves_no_row(self, service, mock_storage):
        mock_storage.upload.side_effect = StorageError("bucket offline")

        with pytest.raises(ExternalServiceError):
            await service.upload("u1", "n1", b"data", "image/png", "cat.png")

        service.repo.create.assert_not_awaited()

    async def test_row_failure_removes_blob(self, service, mock_storage):
        service.repo.create = AsyncMock(side_effect=SQLAlchemyError("connection lost"))

        with pytest.raises(DatabaseError):
            await service.upload("u1", "n1", b"data", "image/png", "cat.png")

        stored_key = mock_storage.upload.await_args.args[0]
        mock_storage.delete.assert_awaited_once_with(stored_key)

    async def test_row_failure_survives_cleanup_error(self, service, mock_storage):
        service.repo.create = AsyncMock(side_effect=SQLAlchemyError("connection lost"))
        mock_storage.delete.side_effect = StorageError("bucket offline")

        with pytest.raises(DatabaseError):
            await service.upload("u1", "n1", b"data", "image/png", "cat.png")

        mock_storage.delete.assert_awaited_once()


class TestMediaServiceDelete:
    @pytest.fixture
    def media(self):
        return MagicMock(id="m1", note_id="n1", media_key="media/u1/n1/1-cat.png")

    async def test_deletes_blob_then_row(self, mock_db_session, mock_storage, media):
        service = MediaService(mock_db_session, mock_storage, max_upload_bytes=1024)
        with patch.object(service.repo, "get_owned", AsyncMock(return_value=media)), \
             patch.object(service.repo, "delete", AsyncMock()) as mock_delete:
            await service.delete("u1", "m1")

        mock_storage.delete.assert_awaited_once_with("media/u1/n1/1-cat.png")
        mock_delete.assert_awaited_once_with(media)

    async def test_storage_failure_keeps_row(self, mock_db_session, mock_storage, media):
        mock_storage.delete.side_effect = StorageError("permission denied")
        service = MediaService(mock_db_session, mock_storage, max_upload_bytes=1024)
        with patch.object(service.repo, "get_owned", AsyncMock(return_value=media)), \
             patch.object(service.repo, "delete", AsyncMock()) as mock_delete:
            with pytest.raises(ExternalServiceError):
                await service.delete("u1", "m1")

        mock_delete.assert_not_awaited()


class TestMediaServiceConfig:
    def test_upload_cap_defaults_to_config(self, mock_db_session, mock_storage):
        service = MediaService(mock_db_session, mock_storage)
        assert service.max_upload_bytes == 50 * 1024 * 1024
