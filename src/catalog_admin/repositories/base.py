"""Base entity repository for DRY document CRUD."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from catalog_admin.config.logging import get_logger
from catalog_admin.documents.base import DocumentStore
from catalog_admin.exceptions import DocumentStoreError, EntityNotFoundError, WriteError
from catalog_admin.models.assets import AssetRef

TEntity = TypeVar("TEntity", bound=BaseModel)
logger = get_logger(__name__)


class EntityRepository(ABC, Generic[TEntity]):
    """CRUD over one document collection.

    Subclasses define the collection name, how to decode a document, and how
    an asset reference set is written into document fields. Repositories never
    touch blob storage.
    """

    collection: str
    namespace: str = ""
    max_assets: int = 0

    def __init__(self, store: DocumentStore):
        self._store = store

    @abstractmethod
    def decode(self, doc_id: str, data: Any) -> TEntity:
        """Total decode of a stored field bag."""

    def asset_fields(self, assets: list[AssetRef], **extra: Any) -> dict[str, Any]:
        """Document fields recording ``assets``. Asset-free entities return {}."""
        return {}

    def asset_keys(self, entity: TEntity) -> list[str]:
        """Blob keys the entity's current revision references."""
        return list(getattr(entity, "image_keys", []))

    async def list(self) -> list[TEntity]:
        """Full scan of the collection."""
        docs = await self._store.list_documents(self.collection)
        entities = [self.decode(doc_id, data) for doc_id, data in docs]
        logger.debug("Loaded %d documents from %s", len(entities), self.collection)
        return entities

    async def find(self, entity_id: str) -> TEntity | None:
        data = await self._store.get_document(self.collection, entity_id)
        if data is None:
            return None
        return self.decode(entity_id, data)

    async def get(self, entity_id: str) -> TEntity:
        """Load one entity.

        Raises:
            EntityNotFoundError: If no document has this id.
        """
        entity = await self.find(entity_id)
        if entity is None:
            raise EntityNotFoundError(self.collection, entity_id)
        return entity

    async def create(self, fields: dict[str, Any]) -> str:
        try:
            entity_id = await self._store.add_document(self.collection, fields)
        except DocumentStoreError as e:
            raise WriteError(f"Failed to create {self._label}", details=str(e)) from e
        logger.info("Created %s %s", self._label, entity_id)
        return entity_id

    async def update(self, entity_id: str, fields: dict[str, Any]) -> None:
        try:
            await self._store.update_document(self.collection, entity_id, fields)
        except DocumentStoreError as e:
            raise WriteError(f"Failed to update {self._label} '{entity_id}'", details=str(e)) from e
        logger.info("Updated %s %s", self._label, entity_id)

    async def delete(self, entity_id: str) -> None:
        try:
            await self._store.delete_document(self.collection, entity_id)
        except DocumentStoreError as e:
            raise WriteError(f"Failed to delete {self._label} '{entity_id}'", details=str(e)) from e
        logger.info("Deleted %s %s", self._label, entity_id)

    @property
    def _label(self) -> str:
        return self.collection.rstrip("s")
