"""
Blob Storage.

Binary media lives outside the database; rows only keep the storage key.

Usage:
    from planner.backend.storage import get_blob_storage

    storage = get_blob_storage()
    key = await storage.upload("media/u1/n1/1700000000000-cat.png", data)
    url = await storage.signed_url(key)
"""

from functools import lru_cache

from planner.backend.storage.base import BlobStorage, StorageError
from planner.backend.storage.local import LocalBlobStorage

__all__ = [
    "BlobStorage",
    "LocalBlobStorage",
    "StorageError",
    "get_blob_storage",
]


@lru_cache
def get_blob_storage() -> BlobStorage:
    """Build the configured blob storage backend (cached)."""
    from planner.backend.core.config import find_project_root, get_app_config, get_settings

    app_config = get_app_config()
    storage_config = app_config.storage

    if storage_config.backend != "local":
        raise ValueError(f"Unsupported storage backend: {storage_config.backend!r}")

    return LocalBlobStorage(
        root=find_project_root() / storage_config.root_path,
        signing_secret=get_settings().storage_signing_secret,
        public_base_url=storage_config.public_base_url,
        api_prefix=app_config.application.api_prefix,
        default_expires_in=storage_config.signed_url_expire_seconds,
    )
