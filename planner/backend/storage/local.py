"""
Local Disk Blob Storage.

Stores blobs as files under a root directory. Signed URLs point at
GET {api_prefix}/media/blob and carry a short-lived JWT naming the key,
so the link works without a session until it expires.
"""

from datetime import timedelta
from pathlib import Path
from urllib.parse import urlencode

from jose import JWTError, jwt

from planner.backend.core.concurrency import run_blocking
from planner.backend.core.exceptions import AuthenticationError, ValidationError
from planner.backend.core.logging import get_logger
from planner.backend.core.utils import utc_now
from planner.backend.storage.base import BlobStorage, StorageError

logger = get_logger(__name__)

MEDIA_TOKEN_TYPE = "media"
SIGNING_ALGORITHM = "HS256"


class LocalBlobStorage(BlobStorage):
    """Blob storage backed by the local filesystem."""

    def __init__(
        self,
        root: Path,
        signing_secret: str,
        public_base_url: str,
        api_prefix: str = "/api",
        default_expires_in: int = 3600,
    ) -> None:
        self.root = Path(root).resolve()
        self._signing_secret = signing_secret
        self.public_base_url = public_base_url.rstrip("/")
        self.api_prefix = api_prefix.rstrip("/")
        self.default_expires_in = default_expires_in

    def path_for(self, key: str) -> Path:
        """
        Map a storage key to a file path inside the root.

        Raises:
            ValidationError: If the key escapes the storage root
        """
        path = (self.root / key).resolve()
        if self.root not in path.parents:
            raise ValidationError("Invalid storage key", details={"key": key})
        return path

    async def upload(self, key: str, data: bytes) -> str:
        path = self.path_for(key)
        try:
            await run_blocking(_write_file, path, data)
        except OSError as e:
            logger.error("Blob upload failed", extra={"key": key, "error": str(e)})
            raise StorageError(f"Failed to store {key}") from e

        logger.debug("Blob stored", extra={"key": key, "size": len(data)})
        return key

    async def signed_url(self, key: str, expires_in: int | None = None) -> str:
        expires = utc_now() + timedelta(seconds=expires_in or self.default_expires_in)
        token = jwt.encode(
            {"key": key, "type": MEDIA_TOKEN_TYPE, "exp": expires},
            self._signing_secret,
            algorithm=SIGNING_ALGORITHM,
        )
        return f"{self.public_base_url}{self.api_prefix}/media/blob?{urlencode({'token': token})}"

    async def delete(self, key: str) -> None:
        path = self.path_for(key)
        try:
            await run_blocking(path.unlink, missing_ok=True)
        except OSError as e:
            logger.error("Blob delete failed", extra={"key": key, "error": str(e)})
            raise StorageError(f"Failed to delete {key}") from e

        logger.debug("Blob deleted", extra={"key": key})

    def resolve_signed_token(self, token: str) -> Path:
        """
        Validate a signed URL token and return the blob's file path.

        Raises:
            AuthenticationError: If the token is invalid or expired
        """
        try:
            payload = jwt.decode(token, self._signing_secret, algorithms=[SIGNING_ALGORITHM])
        except JWTError as e:
            logger.warning("Signed URL rejected", extra={"error": str(e)})
            raise AuthenticationError("Invalid or expired link")

        if payload.get("type") != MEDIA_TOKEN_TYPE or not payload.get("key"):
            raise AuthenticationError("Invalid or expired link")

        return self.path_for(payload["key"])


def _write_file(path: Path, data: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
