"""Build the service graph from settings."""

from __future__ import annotations

from dataclasses import dataclass

from catalog_admin.config.logging import get_logger
from catalog_admin.config.settings import Settings, get_settings
from catalog_admin.documents.base import DocumentStore
from catalog_admin.documents.memory import InMemoryDocumentStore
from catalog_admin.exceptions import ConfigurationError
from catalog_admin.repositories import (
    CollectionRepository,
    GalleryRepository,
    OrderRepository,
    ProductRepository,
)
from catalog_admin.services import CollectionService, GalleryService, OrderService, ProductService
from catalog_admin.storage.assets import AssetStore
from catalog_admin.storage.base import BlobStore
from catalog_admin.storage.memory import InMemoryBlobStore

logger = get_logger(__name__)


@dataclass
class Services:
    """Everything the CLI needs, sharing one document store and one asset store."""

    documents: DocumentStore
    assets: AssetStore
    products: ProductService
    collections: CollectionService
    gallery: GalleryService
    orders: OrderService


def _build_backends(settings: Settings) -> tuple[DocumentStore, BlobStore]:
    if settings.backend == "memory":
        logger.debug("Using in-memory document and blob stores")
        return InMemoryDocumentStore(), InMemoryBlobStore()

    if not settings.gcs_bucket:
        raise ConfigurationError(
            "No bucket configured",
            details="Set CATALOG_ADMIN_GCS_BUCKET or use CATALOG_ADMIN_BACKEND=memory",
        )
    # Google clients are only imported when the gcp backend is selected
    from catalog_admin.documents.firestore import FirestoreDocumentStore
    from catalog_admin.storage.gcs import GCSAuthenticationError, GCSBlobStore, GCSStorageError

    documents = FirestoreDocumentStore(
        project=settings.gcp_project,
        database=settings.firestore_database,
    )
    try:
        blobs = GCSBlobStore(
            settings.gcs_bucket,
            project=settings.gcp_project,
            public_urls=settings.public_urls,
            signed_url_minutes=settings.signed_url_minutes,
            verify_bucket=settings.verify_bucket,
        )
    except GCSAuthenticationError as e:
        raise ConfigurationError("Google Cloud credentials not available", details=str(e)) from e
    except GCSStorageError as e:
        raise ConfigurationError(f"Cannot use bucket '{settings.gcs_bucket}'", details=str(e)) from e
    return documents, blobs


def build_services(settings: Settings | None = None) -> Services:
    """Wire repositories, the asset store and services for one backend.

    Raises:
        ConfigurationError: If the gcp backend cannot be reached.
    """
    settings = settings or get_settings()
    documents, blobs = _build_backends(settings)
    assets = AssetStore(
        blobs,
        max_bytes=settings.max_upload_bytes,
        max_concurrency=settings.upload_concurrency,
    )
    products = ProductRepository(documents)
    return Services(
        documents=documents,
        assets=assets,
        products=ProductService(products, assets, page_size=settings.page_size),
        collections=CollectionService(
            CollectionRepository(documents), assets, products, page_size=settings.page_size
        ),
        gallery=GalleryService(GalleryRepository(documents), assets),
        orders=OrderService(OrderRepository(documents), page_size=settings.page_size),
    )
