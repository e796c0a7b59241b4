"""Gallery hero image service."""

from __future__ import annotations

from catalog_admin.commit.protocol import CommitResult
from catalog_admin.exceptions import CatalogAdminError
from catalog_admin.models.assets import UploadFile
from catalog_admin.models.gallery import GalleryHero
from catalog_admin.repositories.gallery import GalleryRepository

from .base import AssetEntityService


class GalleryService(AssetEntityService[GalleryRepository]):
    """The singleton hero: at most one live image at any time."""

    async def load(self) -> GalleryHero | None:
        return await self.repository.load()

    async def save(self, caption: str = "", file: UploadFile | None = None) -> CommitResult:
        """Swap the image and/or caption; the previous image is removed after the write."""
        try:
            existing = await self.load()
        except CatalogAdminError as e:
            return CommitResult.failure(e.message, self.repository.entity_id)
        previous_caption = existing.caption if existing else ""
        if file is None and caption == previous_caption:
            return CommitResult.failure("Please choose an image or change the caption.")
        return await self.new_protocol().update(
            self.repository.entity_id,
            {"caption": caption or ""},
            [file] if file else [],
            previous_keys=existing.image_keys if existing else (),
        )
