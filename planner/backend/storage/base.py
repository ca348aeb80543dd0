"""
Blob Storage Interface.

Contract for the storage collaborator used by the media service:
upload a binary under a key, produce a time-limited signed URL for it,
and delete it.
"""

from abc import ABC, abstractmethod


class StorageError(Exception):
    """Raised when the storage backend cannot complete an operation."""


class BlobStorage(ABC):
    """Abstract blob store."""

    @abstractmethod
    async def upload(self, key: str, data: bytes) -> str:
        """
        Store data under key.

        Returns:
            The key the blob was stored under (backends may normalize it)

        Raises:
            StorageError: If the write fails
        """

    @abstractmethod
    async def signed_url(self, key: str, expires_in: int | None = None) -> str:
        """Return a URL granting temporary read access to the blob."""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """
        Remove the blob. Deleting a key that no longer exists succeeds.

        Raises:
            StorageError: If the blob exists but could not be removed
        """
