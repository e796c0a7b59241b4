"""Gallery hero repository: one fixed document."""

from __future__ import annotations

from typing import Any

from catalog_admin.config.constants import HERO_DOC_ID, Namespaces
from catalog_admin.documents.base import SERVER_TIMESTAMP
from catalog_admin.exceptions import DocumentStoreError, WriteError
from catalog_admin.models.assets import AssetRef
from catalog_admin.models.gallery import GalleryHero

from .base import EntityRepository


class GalleryRepository(EntityRepository[GalleryHero]):
    """Singleton ``gallery/hero``; ``create`` and ``update`` both merge-save."""

    collection = "gallery"
    namespace = Namespaces.GALLERY
    max_assets = 1
    entity_id = HERO_DOC_ID

    def decode(self, doc_id: str, data: Any) -> GalleryHero:
        return GalleryHero.from_document(doc_id, data)

    def asset_fields(self, assets: list[AssetRef], **extra: Any) -> dict[str, Any]:
        return GalleryHero.asset_fields(assets)

    async def load(self) -> GalleryHero | None:
        """The hero, or None if it was never saved."""
        return await self.find(self.entity_id)

    async def save(self, fields: dict[str, Any]) -> None:
        payload = {**fields, "updatedAt": SERVER_TIMESTAMP}
        try:
            await self._store.set_document(self.collection, self.entity_id, payload, merge=True)
        except DocumentStoreError as e:
            raise WriteError("Failed to save hero image", details=str(e)) from e

    async def create(self, fields: dict[str, Any]) -> str:
        await self.save(fields)
        return self.entity_id

    async def update(self, entity_id: str, fields: dict[str, Any]) -> None:
        await self.save(fields)
