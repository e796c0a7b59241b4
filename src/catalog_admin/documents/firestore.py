"""Cloud Firestore backend for entity documents.

The google-cloud-firestore client is synchronous here; calls run in worker
threads and Google API errors are mapped to ``DocumentStoreError``.
"""

from __future__ import annotations

import asyncio
from typing import Any

from google.auth.exceptions import DefaultCredentialsError
from google.cloud import firestore
from google.cloud.exceptions import Forbidden, GoogleCloudError, NotFound

from catalog_admin.config.logging import get_logger
from catalog_admin.exceptions import ConfigurationError, DocumentStoreError

from .base import SERVER_TIMESTAMP

logger = get_logger(__name__)


def _encode(value: Any) -> Any:
    if value is SERVER_TIMESTAMP:
        return firestore.SERVER_TIMESTAMP
    if isinstance(value, dict):
        return {k: _encode(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_encode(v) for v in value]
    return value


class FirestoreDocumentStore:
    """Document store backed by a Firestore database."""

    def __init__(
        self,
        *,
        project: str | None = None,
        database: str | None = None,
        client: firestore.Client | None = None,
    ):
        try:
            if client is not None:
                self.client = client
            elif database:
                self.client = firestore.Client(project=project, database=database)
            else:
                self.client = firestore.Client(project=project)
        except DefaultCredentialsError as e:
            raise ConfigurationError(
                "Google Cloud credentials not configured.",
                details="Run: gcloud auth application-default login",
            ) from e
        logger.debug("Initialized Firestore store (project=%s, database=%s)", project, database)

    async def _call(self, action: str, fn, *args, **kwargs):
        try:
            return await asyncio.to_thread(fn, *args, **kwargs)
        except NotFound as e:
            raise DocumentStoreError(f"{action}: document not found", details=str(e)) from e
        except Forbidden as e:
            raise DocumentStoreError(f"{action}: permission denied", details=str(e)) from e
        except GoogleCloudError as e:
            raise DocumentStoreError(f"{action} failed", details=str(e)) from e

    async def list_documents(self, collection: str) -> list[tuple[str, dict[str, Any]]]:
        def scan() -> list[tuple[str, dict[str, Any]]]:
            return [(snap.id, snap.to_dict() or {}) for snap in self.client.collection(collection).stream()]

        return await self._call(f"List {collection}", scan)

    async def get_document(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        snap = await self._call(
            f"Get {collection}/{doc_id}", self.client.collection(collection).document(doc_id).get
        )
        if not snap.exists:
            return None
        return snap.to_dict() or {}

    async def add_document(self, collection: str, data: dict[str, Any]) -> str:
        _, ref = await self._call(f"Create in {collection}", self.client.collection(collection).add, _encode(data))
        logger.info("Created %s/%s", collection, ref.id)
        return ref.id

    async def update_document(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        ref = self.client.collection(collection).document(doc_id)
        await self._call(f"Update {collection}/{doc_id}", ref.update, _encode(data))
        logger.info("Updated %s/%s", collection, doc_id)

    async def set_document(
        self, collection: str, doc_id: str, data: dict[str, Any], merge: bool = False
    ) -> None:
        ref = self.client.collection(collection).document(doc_id)
        await self._call(f"Save {collection}/{doc_id}", ref.set, _encode(data), merge=merge)
        logger.info("Saved %s/%s", collection, doc_id)

    async def delete_document(self, collection: str, doc_id: str) -> None:
        ref = self.client.collection(collection).document(doc_id)
        await self._call(f"Delete {collection}/{doc_id}", ref.delete)
        logger.info("Deleted %s/%s", collection, doc_id)
