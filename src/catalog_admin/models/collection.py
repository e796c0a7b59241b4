"""Collection document model."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from catalog_admin.utils.coerce import as_datetime, as_int, as_str, as_str_list
from catalog_admin.utils.keys import key_from_url

from .assets import AssetRef


class Collection(BaseModel):
    """A named group of products with one optional cover photo."""

    id: str = ""
    name: str = ""
    description: str = ""
    products: list[str] = Field(default_factory=list, description="Product ids, in display order")
    publishing_channels: list[str] = Field(default_factory=list)
    caption: str = ""
    asset: AssetRef | None = None
    products_count: int = 0
    updated_at: datetime | None = None

    @property
    def image_keys(self) -> list[str]:
        return [self.asset.key] if self.asset and self.asset.key else []

    @classmethod
    def from_document(cls, doc_id: str, data: Any) -> "Collection":
        d = data if isinstance(data, dict) else {}
        photo = d.get("photo") if isinstance(d.get("photo"), dict) else {}
        url = as_str(photo.get("url"))
        key = as_str(d.get("imageKey")) or key_from_url(url)
        products = as_str_list(d.get("products"))
        if isinstance(d.get("products"), list):
            count = len(products)
        else:
            count = as_int(d.get("productsCount"))
        return cls(
            id=as_str(doc_id),
            name=as_str(d.get("name")),
            description=as_str(d.get("description")),
            products=products,
            publishing_channels=as_str_list(d.get("publishingChannels")),
            caption=as_str(photo.get("caption")),
            asset=AssetRef(key=key, url=url) if url else None,
            products_count=count,
            updated_at=as_datetime(d.get("updatedAt")),
        )

    def to_document(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "products": list(self.products),
            "publishingChannels": list(self.publishing_channels),
        }

    @staticmethod
    def asset_fields(assets: list[AssetRef], caption: str = "") -> dict[str, Any]:
        asset = assets[0] if assets else None
        return {
            "photo": {"url": asset.url, "caption": caption} if asset else None,
            "imageKey": asset.key if asset and asset.key else None,
        }
