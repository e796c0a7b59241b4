"""Data models for catalog entities and their assets.

Entity models:
- Product: multi-asset entity (0..6 images)
- Collection: single optional cover image
- GalleryHero: singleton document with one optional image
- Order: asset-free document with status and admin note

Every model exposes a total ``from_document`` decoder that never raises.
"""

from catalog_admin.models.assets import AssetRef, UploadFile
from catalog_admin.models.collection import Collection
from catalog_admin.models.gallery import GalleryHero
from catalog_admin.models.order import Order, OrderItem, OrderPricing
from catalog_admin.models.product import Product, parse_sizes

__all__ = [
    "AssetRef",
    "UploadFile",
    "Product",
    "parse_sizes",
    "Collection",
    "GalleryHero",
    "Order",
    "OrderItem",
    "OrderPricing",
]
