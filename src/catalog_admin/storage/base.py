"""Blob backend interface shared by the GCS and in-memory stores."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


class BlobStoreError(Exception):
    """Exception raised for blob storage errors."""


class BlobNotFoundError(BlobStoreError):
    """Raised when an object or bucket does not exist."""


class BlobPermissionError(BlobStoreError):
    """Raised when permission is denied for a storage operation."""


@runtime_checkable
class BlobStore(Protocol):
    """Minimal async object store used by the asset client."""

    async def put_object(self, key: str, data: bytes, content_type: str) -> str:
        """Store ``data`` under ``key`` and return a displayable URL."""
        ...

    async def delete_object(self, key: str) -> None:
        """Delete ``key``; raises BlobNotFoundError if it does not exist."""
        ...
