"""Collection repository."""

from __future__ import annotations

from typing import Any

from catalog_admin.config.constants import Limits, Namespaces
from catalog_admin.documents.base import SERVER_TIMESTAMP
from catalog_admin.models.assets import AssetRef
from catalog_admin.models.collection import Collection

from .base import EntityRepository


class CollectionRepository(EntityRepository[Collection]):
    collection = "collections"
    namespace = Namespaces.COLLECTIONS
    max_assets = Limits.MAX_COLLECTION_IMAGES

    def decode(self, doc_id: str, data: Any) -> Collection:
        return Collection.from_document(doc_id, data)

    def asset_fields(self, assets: list[AssetRef], **extra: Any) -> dict[str, Any]:
        return Collection.asset_fields(assets, caption=extra.get("caption", ""))

    async def create(self, fields: dict[str, Any]) -> str:
        return await super().create({**fields, "createdAt": SERVER_TIMESTAMP, "updatedAt": SERVER_TIMESTAMP})

    async def update(self, entity_id: str, fields: dict[str, Any]) -> None:
        await super().update(entity_id, {**fields, "updatedAt": SERVER_TIMESTAMP})
