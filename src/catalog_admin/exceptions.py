"""Centralized exception classes for catalog-admin.

This module provides a hierarchy of exceptions that separates failures the
operator must see (validation, upload, write) from best-effort cleanup
failures that are only logged.
"""


class CatalogAdminError(Exception):
    """Base exception for all catalog-admin errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(self, message: str, details: str | None = None):
        """Initialize the exception.

        Args:
            message: User-friendly error message.
            details: Additional technical details for debugging.
        """
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}\n  Details: {self.details}"
        return self.message


class ConfigurationError(CatalogAdminError):
    """Raised when configuration is missing or invalid."""

    pass


class AssetValidationError(CatalogAdminError, ValueError):
    """Raised when an upload fails type or size checks.

    Always raised before any network call is made.
    """

    pass


class UploadError(CatalogAdminError):
    """Raised when the blob store rejects an upload."""

    pass


class WriteError(CatalogAdminError):
    """Raised when the document store rejects a create, update or delete."""

    pass


class CleanupError(CatalogAdminError):
    """Describes a failed asset removal.

    Never raised to callers: the asset store records it on a CleanupOutcome.
    """

    pass


class DocumentStoreError(CatalogAdminError):
    """Raised when a document store read fails."""

    pass


class EntityNotFoundError(CatalogAdminError, LookupError):
    """Raised when a document doesn't exist."""

    def __init__(self, collection: str, entity_id: str):
        super().__init__(f"{collection.rstrip('s').capitalize()} '{entity_id}' not found")
        self.collection = collection
        self.entity_id = entity_id
