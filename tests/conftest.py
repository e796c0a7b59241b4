"""Shared fixtures: in-memory backends that record call order and fail on demand."""

from __future__ import annotations

from typing import Any

import pytest

from catalog_admin.documents.memory import InMemoryDocumentStore
from catalog_admin.exceptions import DocumentStoreError
from catalog_admin.models.assets import UploadFile
from catalog_admin.storage.assets import AssetStore
from catalog_admin.storage.base import BlobPermissionError, BlobStoreError
from catalog_admin.storage.memory import InMemoryBlobStore


class RecordingBlobStore(InMemoryBlobStore):
    """Blob store that appends ("put"/"delete", key) to a shared event log."""

    def __init__(self, events: list[tuple[str, str]]):
        super().__init__()
        self.events = events
        self.fail_puts: set[str] = set()
        self.deny_deletes: set[str] = set()

    async def put_object(self, key: str, data: bytes, content_type: str) -> str:
        self.events.append(("put", key))
        if any(key.endswith(name) for name in self.fail_puts):
            raise BlobStoreError(f"Upload rejected: {key}")
        return await super().put_object(key, data, content_type)

    async def delete_object(self, key: str) -> None:
        self.events.append(("delete", key))
        if key in self.deny_deletes:
            raise BlobPermissionError(f"Permission denied: {key}")
        await super().delete_object(key)


class RecordingDocumentStore(InMemoryDocumentStore):
    """Document store that logs writes as ("write", "<op> <collection>/<id>")."""

    def __init__(self, events: list[tuple[str, str]], seed: dict[str, Any] | None = None):
        super().__init__(seed)
        self.events = events
        self.fail_writes = False

    def _record(self, op: str, collection: str, doc_id: str = "") -> None:
        self.events.append(("write", f"{op} {collection}/{doc_id}"))
        if self.fail_writes:
            raise DocumentStoreError(f"{op} rejected for {collection}/{doc_id}")

    async def add_document(self, collection: str, data: dict[str, Any]) -> str:
        self._record("add", collection)
        return await super().add_document(collection, data)

    async def update_document(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        self._record("update", collection, doc_id)
        await super().update_document(collection, doc_id, data)

    async def set_document(
        self, collection: str, doc_id: str, data: dict[str, Any], merge: bool = False
    ) -> None:
        self._record("set", collection, doc_id)
        await super().set_document(collection, doc_id, data, merge=merge)

    async def delete_document(self, collection: str, doc_id: str) -> None:
        self._record("delete", collection, doc_id)
        await super().delete_document(collection, doc_id)


def make_image(name: str = "photo.png", size: int = 64, content_type: str = "image/png") -> UploadFile:
    """Build an in-memory upload of ``size`` bytes."""
    return UploadFile(filename=name, content_type=content_type, data=b"\x89" * size)


@pytest.fixture
def events() -> list[tuple[str, str]]:
    """Shared event log for blob and document calls."""
    return []


@pytest.fixture
def blobs(events) -> RecordingBlobStore:
    return RecordingBlobStore(events)


@pytest.fixture
def documents(events) -> RecordingDocumentStore:
    return RecordingDocumentStore(events)


@pytest.fixture
def cleanup_log() -> list:
    """Cleanup outcomes reported to the asset store observer."""
    return []


@pytest.fixture
def assets(blobs, cleanup_log) -> AssetStore:
    return AssetStore(blobs, on_cleanup=cleanup_log.append)


@pytest.fixture
def image():
    """Factory fixture for test uploads."""
    return make_image
