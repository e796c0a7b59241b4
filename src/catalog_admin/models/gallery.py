"""Gallery hero singleton model."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel

from catalog_admin.config.constants import HERO_DOC_ID
from catalog_admin.utils.coerce import as_datetime, as_str
from catalog_admin.utils.keys import key_from_url

from .assets import AssetRef


class GalleryHero(BaseModel):
    """The storefront's single hero image and its caption."""

    id: str = HERO_DOC_ID
    caption: str = ""
    asset: AssetRef | None = None
    updated_at: datetime | None = None

    @property
    def image_keys(self) -> list[str]:
        return [self.asset.key] if self.asset and self.asset.key else []

    @classmethod
    def from_document(cls, doc_id: str, data: Any) -> "GalleryHero":
        d = data if isinstance(data, dict) else {}
        url = as_str(d.get("url"))
        key = as_str(d.get("key")) or key_from_url(url)
        return cls(
            id=as_str(doc_id, HERO_DOC_ID),
            caption=as_str(d.get("caption")),
            asset=AssetRef(key=key, url=url) if url else None,
            updated_at=as_datetime(d.get("updatedAt")),
        )

    @staticmethod
    def asset_fields(assets: list[AssetRef]) -> dict[str, Any]:
        asset = assets[0] if assets else None
        return {"url": asset.url if asset else "", "key": asset.key if asset else ""}
