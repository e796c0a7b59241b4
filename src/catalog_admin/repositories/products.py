"""Product repository."""

from __future__ import annotations

from typing import Any

from catalog_admin.config.constants import Limits, Namespaces
from catalog_admin.models.assets import AssetRef
from catalog_admin.models.product import Product

from .base import EntityRepository


class ProductRepository(EntityRepository[Product]):
    collection = "products"
    namespace = Namespaces.PRODUCTS
    max_assets = Limits.MAX_PRODUCT_IMAGES

    def decode(self, doc_id: str, data: Any) -> Product:
        return Product.from_document(doc_id, data)

    def asset_fields(self, assets: list[AssetRef], **extra: Any) -> dict[str, Any]:
        return Product.asset_fields(assets)
