"""Document storage backends."""

from catalog_admin.documents.base import SERVER_TIMESTAMP, DocumentStore
from catalog_admin.documents.memory import InMemoryDocumentStore

__all__ = ["SERVER_TIMESTAMP", "DocumentStore", "InMemoryDocumentStore"]
