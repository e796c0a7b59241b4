"""Per-surface services: products, collections, gallery and orders."""

from catalog_admin.services.base import AssetEntityService, ListedEntityService
from catalog_admin.services.collections import CollectionForm, CollectionService
from catalog_admin.services.gallery import GalleryService
from catalog_admin.services.orders import OrderService
from catalog_admin.services.products import ProductForm, ProductService

__all__ = [
    "AssetEntityService",
    "ListedEntityService",
    "ProductForm",
    "ProductService",
    "CollectionForm",
    "CollectionService",
    "GalleryService",
    "OrderService",
]
