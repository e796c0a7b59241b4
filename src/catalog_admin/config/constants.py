"""Centralized constants for catalog-admin."""

IMAGE_MIME_PREFIX = "image/"
DEFAULT_CONTENT_TYPE = "application/octet-stream"
PLACEHOLDER_IMAGE = "/placeholder.svg?height=400&width=300"
HERO_DOC_ID = "hero"
ORDER_STATUSES = ("pending", "paid", "fulfilled", "cancelled")


# Blob key prefixes, one per entity kind
class Namespaces:
    PRODUCTS = "products"
    COLLECTIONS = "collections"
    GALLERY = "gallery"

    @classmethod
    def all(cls) -> tuple[str, ...]:
        return (cls.PRODUCTS, cls.COLLECTIONS, cls.GALLERY)


# Upload and listing limits
class Limits:
    MAX_UPLOAD_MB = 10
    MAX_UPLOAD_BYTES = MAX_UPLOAD_MB * 1024 * 1024
    MAX_PRODUCT_IMAGES = 6
    MAX_COLLECTION_IMAGES = 1
    UPLOAD_CONCURRENCY = 6
    PAGE_SIZE = 10
    PAGE_SIZE_CHOICES = (10, 20, 30, 40, 50)
