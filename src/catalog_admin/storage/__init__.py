"""Blob storage: the asset store client and its backends."""

from catalog_admin.storage.assets import AssetStore, CleanupObserver, CleanupOutcome
from catalog_admin.storage.base import (
    BlobNotFoundError,
    BlobPermissionError,
    BlobStore,
    BlobStoreError,
)
from catalog_admin.storage.memory import InMemoryBlobStore

__all__ = [
    "AssetStore",
    "CleanupObserver",
    "CleanupOutcome",
    "BlobStore",
    "BlobStoreError",
    "BlobNotFoundError",
    "BlobPermissionError",
    "InMemoryBlobStore",
]
