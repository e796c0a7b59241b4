"""Document backend interface shared by Firestore and the in-memory store."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


class _ServerTimestamp:
    """Sentinel replaced by the backend's commit time."""

    _instance: "_ServerTimestamp | None" = None

    def __new__(cls) -> "_ServerTimestamp":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "SERVER_TIMESTAMP"


SERVER_TIMESTAMP = _ServerTimestamp()


@runtime_checkable
class DocumentStore(Protocol):
    """Per-collection document CRUD keyed by string id.

    Backends raise ``DocumentStoreError`` for every failure; ``get_document``
    returns None for a missing document. ``update_document`` accepts dotted
    field paths ("meta.updatedAt") and fails if the document is missing.
    """

    async def list_documents(self, collection: str) -> list[tuple[str, dict[str, Any]]]: ...

    async def get_document(self, collection: str, doc_id: str) -> dict[str, Any] | None: ...

    async def add_document(self, collection: str, data: dict[str, Any]) -> str: ...

    async def update_document(self, collection: str, doc_id: str, data: dict[str, Any]) -> None: ...

    async def set_document(
        self, collection: str, doc_id: str, data: dict[str, Any], merge: bool = False
    ) -> None: ...

    async def delete_document(self, collection: str, doc_id: str) -> None: ...
