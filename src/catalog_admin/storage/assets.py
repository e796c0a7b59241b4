"""Asset store client: validated uploads and best-effort removals.

``put``/``put_many`` are correctness-critical and raise. ``remove``/
``remove_many`` are cleanup: they never raise, log failures, and report each
result on a separate ``CleanupOutcome`` channel.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Callable, Iterable, Sequence

from catalog_admin.config.constants import (
    DEFAULT_CONTENT_TYPE,
    IMAGE_MIME_PREFIX,
    Limits,
    Namespaces,
)
from catalog_admin.config.logging import get_logger
from catalog_admin.exceptions import AssetValidationError, CleanupError, UploadError
from catalog_admin.models.assets import AssetRef, UploadFile
from catalog_admin.utils.keys import generate_asset_key

from .base import BlobNotFoundError, BlobPermissionError, BlobStore, BlobStoreError

logger = get_logger(__name__)

KeyFactory = Callable[[str, str], str]


@dataclass(frozen=True)
class CleanupOutcome:
    """Result of one best-effort removal."""

    key: str
    removed: bool
    error: CleanupError | None = None

    @property
    def missing(self) -> bool:
        """True when the object was already gone."""
        return self.error is not None and isinstance(self.error.__cause__, BlobNotFoundError)


CleanupObserver = Callable[[CleanupOutcome], None]


class AssetStore:
    """Uploads entity images and removes superseded ones."""

    def __init__(
        self,
        backend: BlobStore,
        *,
        max_bytes: int = Limits.MAX_UPLOAD_BYTES,
        max_concurrency: int = Limits.UPLOAD_CONCURRENCY,
        key_factory: KeyFactory = generate_asset_key,
        on_cleanup: CleanupObserver | None = None,
    ):
        self._backend = backend
        self._max_bytes = max_bytes
        self._max_concurrency = max(1, max_concurrency)
        self._key_factory = key_factory
        self._observers: list[CleanupObserver] = [on_cleanup] if on_cleanup else []

    def add_cleanup_observer(self, observer: CleanupObserver) -> None:
        self._observers.append(observer)

    def validate(self, upload: UploadFile) -> None:
        """Reject non-images and oversized files.

        Raises:
            AssetValidationError: With a message naming the file.
        """
        content_type = upload.content_type or ""
        if not content_type.startswith(IMAGE_MIME_PREFIX):
            raise AssetValidationError(f'"{upload.filename}" is not an image')
        if upload.size > self._max_bytes:
            limit_mb = self._max_bytes // (1024 * 1024)
            raise AssetValidationError(f'"{upload.filename}" exceeds {limit_mb}MB limit')

    def _check_namespace(self, namespace: str) -> None:
        if namespace not in Namespaces.all():
            raise AssetValidationError(f"Unknown asset namespace: {namespace!r}")

    async def _store(self, upload: UploadFile, namespace: str) -> AssetRef:
        key = self._key_factory(namespace, upload.filename)
        content_type = upload.content_type or DEFAULT_CONTENT_TYPE
        try:
            url = await self._backend.put_object(key, upload.data, content_type)
        except BlobStoreError as e:
            raise UploadError(f'Failed to upload "{upload.filename}"', details=str(e)) from e
        logger.debug("Stored asset %s (%d bytes)", key, upload.size)
        return AssetRef(key=key, url=url)

    async def put(self, upload: UploadFile, namespace: str) -> AssetRef:
        """Validate and upload one file.

        Raises:
            AssetValidationError: Before any network call.
            UploadError: If the blob store rejects the object.
        """
        self._check_namespace(namespace)
        self.validate(upload)
        return await self._store(upload, namespace)

    async def put_many(self, uploads: Sequence[UploadFile], namespace: str) -> list[AssetRef]:
        """Upload files concurrently; results follow input order.

        Every file is validated before the first upload starts. The call
        returns only after all uploads settle; if any failed, the first
        failure is raised and objects that did upload are left in place.
        """
        if not uploads:
            return []
        self._check_namespace(namespace)
        for upload in uploads:
            self.validate(upload)

        semaphore = asyncio.Semaphore(self._max_concurrency)

        async def store_with_semaphore(upload: UploadFile) -> AssetRef:
            async with semaphore:
                return await self._store(upload, namespace)

        results = await asyncio.gather(
            *(store_with_semaphore(u) for u in uploads),
            return_exceptions=True,
        )
        failures = [r for r in results if isinstance(r, BaseException)]
        if failures:
            stored = len(results) - len(failures)
            logger.warning(
                "Upload batch failed: %d of %d files rejected, %d left orphaned",
                len(failures),
                len(results),
                stored,
            )
            for failure in failures:
                if not isinstance(failure, UploadError):
                    raise failure
            raise failures[0]
        return list(results)

    async def remove(self, key: str) -> CleanupOutcome:
        """Delete one object. Never raises; failures are logged and observed."""
        if not key:
            return CleanupOutcome(key=key, removed=False)
        try:
            await self._backend.delete_object(key)
            outcome = CleanupOutcome(key=key, removed=True)
            logger.debug("Removed asset %s", key)
        except BlobNotFoundError as e:
            error = CleanupError(f"Asset already missing: {key}", details=str(e))
            error.__cause__ = e
            outcome = CleanupOutcome(key=key, removed=False, error=error)
            logger.warning("Asset %s was already missing", key)
        except BlobPermissionError as e:
            error = CleanupError(f"Permission denied removing asset: {key}", details=str(e))
            error.__cause__ = e
            outcome = CleanupOutcome(key=key, removed=False, error=error)
            logger.warning("Permission denied removing asset %s: %s", key, e)
        except Exception as e:
            error = CleanupError(f"Failed to remove asset: {key}", details=str(e))
            error.__cause__ = e
            outcome = CleanupOutcome(key=key, removed=False, error=error)
            logger.warning("Failed to remove asset %s: %s", key, e)
        self._notify(outcome)
        return outcome

    async def remove_many(self, keys: Iterable[str]) -> list[CleanupOutcome]:
        """Remove keys concurrently; settles even when removals fail."""
        unique = list(dict.fromkeys(k for k in keys if k))
        if not unique:
            return []
        semaphore = asyncio.Semaphore(self._max_concurrency)

        async def remove_with_semaphore(key: str) -> CleanupOutcome:
            async with semaphore:
                return await self.remove(key)

        outcomes = await asyncio.gather(*(remove_with_semaphore(k) for k in unique))
        failed = sum(1 for o in outcomes if o.error is not None)
        if failed:
            logger.warning("Cleanup finished with %d of %d removals failed", failed, len(outcomes))
        return list(outcomes)

    def _notify(self, outcome: CleanupOutcome) -> None:
        for observer in self._observers:
            try:
                observer(outcome)
            except Exception:
                logger.exception("Cleanup observer failed for %s", outcome.key)
