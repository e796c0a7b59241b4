"""In-process document store for local runs and tests."""

from __future__ import annotations

import copy
import uuid
from datetime import datetime, timezone
from typing import Any

from catalog_admin.exceptions import DocumentStoreError

from .base import SERVER_TIMESTAMP


def _resolve(value: Any) -> Any:
    if value is SERVER_TIMESTAMP:
        return datetime.now(timezone.utc)
    if isinstance(value, dict):
        return {k: _resolve(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_resolve(v) for v in value]
    return value


def _merge(target: dict[str, Any], data: dict[str, Any]) -> None:
    for key, value in data.items():
        if isinstance(value, dict) and isinstance(target.get(key), dict):
            _merge(target[key], value)
        else:
            target[key] = value


class InMemoryDocumentStore:
    """Dict-backed collections; documents are deep-copied in and out."""

    def __init__(self, seed: dict[str, dict[str, dict[str, Any]]] | None = None):
        self.collections: dict[str, dict[str, dict[str, Any]]] = copy.deepcopy(seed or {})

    def _docs(self, collection: str) -> dict[str, dict[str, Any]]:
        return self.collections.setdefault(collection, {})

    async def list_documents(self, collection: str) -> list[tuple[str, dict[str, Any]]]:
        return [(doc_id, copy.deepcopy(data)) for doc_id, data in self._docs(collection).items()]

    async def get_document(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        data = self._docs(collection).get(doc_id)
        return copy.deepcopy(data) if data is not None else None

    async def add_document(self, collection: str, data: dict[str, Any]) -> str:
        doc_id = uuid.uuid4().hex[:20]
        self._docs(collection)[doc_id] = _resolve(copy.deepcopy(data))
        return doc_id

    async def update_document(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        docs = self._docs(collection)
        if doc_id not in docs:
            raise DocumentStoreError(f"No document to update: {collection}/{doc_id}")
        doc = docs[doc_id]
        for path, value in data.items():
            # Dotted paths address nested maps, as in Firestore updates
            parts = path.split(".")
            node = doc
            for part in parts[:-1]:
                if not isinstance(node.get(part), dict):
                    node[part] = {}
                node = node[part]
            node[parts[-1]] = _resolve(copy.deepcopy(value))

    async def set_document(
        self, collection: str, doc_id: str, data: dict[str, Any], merge: bool = False
    ) -> None:
        docs = self._docs(collection)
        payload = _resolve(copy.deepcopy(data))
        if merge and doc_id in docs:
            _merge(docs[doc_id], payload)
        else:
            docs[doc_id] = payload

    async def delete_document(self, collection: str, doc_id: str) -> None:
        self._docs(collection).pop(doc_id, None)
