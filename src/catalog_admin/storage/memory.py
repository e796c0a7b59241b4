"""In-process blob store for local runs and tests."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import quote

from .base import BlobNotFoundError


@dataclass(frozen=True)
class StoredObject:
    data: bytes
    content_type: str


class InMemoryBlobStore:
    """Dict-backed object store; URLs mirror the key under ``base_url``."""

    def __init__(self, base_url: str = "https://blobs.local"):
        self.base_url = base_url.rstrip("/")
        self.objects: dict[str, StoredObject] = {}

    async def put_object(self, key: str, data: bytes, content_type: str) -> str:
        self.objects[key] = StoredObject(data=bytes(data), content_type=content_type)
        return f"{self.base_url}/{quote(key)}"

    async def delete_object(self, key: str) -> None:
        if key not in self.objects:
            raise BlobNotFoundError(f"Object not found: {key}")
        del self.objects[key]

    def exists(self, key: str) -> bool:
        return key in self.objects
