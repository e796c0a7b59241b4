"""Entity repositories over the document store."""

from catalog_admin.repositories.base import EntityRepository
from catalog_admin.repositories.collections import CollectionRepository
from catalog_admin.repositories.gallery import GalleryRepository
from catalog_admin.repositories.orders import OrderRepository
from catalog_admin.repositories.products import ProductRepository

__all__ = [
    "EntityRepository",
    "ProductRepository",
    "CollectionRepository",
    "GalleryRepository",
    "OrderRepository",
]
