"""Google Cloud Storage backend for catalog images.

Wraps the synchronous google-cloud-storage client; every network call runs
in a worker thread so the asset client can fan uploads out with asyncio.
"""

from __future__ import annotations

import asyncio
from datetime import timedelta

from google.auth.exceptions import DefaultCredentialsError
from google.cloud import storage
from google.cloud.exceptions import Forbidden, GoogleCloudError, NotFound
from tenacity import retry, retry_if_not_exception_type, stop_after_attempt, wait_exponential

from catalog_admin.config.logging import get_logger

from .base import BlobNotFoundError, BlobPermissionError, BlobStoreError

logger = get_logger(__name__)


class GCSStorageError(BlobStoreError):
    """Exception raised for GCS storage errors."""


class GCSAuthenticationError(GCSStorageError):
    """Raised when GCS authentication fails."""


class GCSBucketNotFoundError(GCSStorageError, BlobNotFoundError):
    """Raised when the specified bucket does not exist."""


class GCSPermissionError(GCSStorageError, BlobPermissionError):
    """Raised when permission is denied for a GCS operation."""


class GCSObjectNotFoundError(GCSStorageError, BlobNotFoundError):
    """Raised when an object does not exist."""


class GCSBlobStore:
    """Google Cloud Storage client for uploading and deleting catalog images.

    Handles authentication via Application Default Credentials (ADC).
    Run `gcloud auth application-default login` to set up credentials.
    """

    def __init__(
        self,
        bucket_name: str,
        *,
        project: str | None = None,
        public_urls: bool = True,
        signed_url_minutes: int = 60 * 24 * 7,
        verify_bucket: bool = True,
        client: storage.Client | None = None,
    ):
        """Initialize GCS storage client.

        Args:
            bucket_name: Name of the GCS bucket to use.
            project: Google Cloud project id (defaults to the ADC project).
            public_urls: Return ``blob.public_url`` instead of a signed URL.
            signed_url_minutes: Lifetime of signed URLs when ``public_urls`` is off.
            verify_bucket: Whether to verify bucket exists on initialization.
            client: Pre-built client, mainly for tests.

        Raises:
            GCSAuthenticationError: If Google Cloud credentials are not configured.
            GCSBucketNotFoundError: If the specified bucket does not exist.
            GCSPermissionError: If access to the bucket is denied.
        """
        try:
            self.client = client or storage.Client(project=project)
        except DefaultCredentialsError as e:
            raise GCSAuthenticationError(
                "Google Cloud credentials not configured.\n"
                "Run: gcloud auth application-default login"
            ) from e

        self.bucket = self.client.bucket(bucket_name)
        self.bucket_name = bucket_name
        self.public_urls = public_urls
        self.signed_url_minutes = signed_url_minutes

        if verify_bucket:
            self._verify_bucket_access()

        logger.debug("Initialized GCS storage with bucket: %s", bucket_name)

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=30),
        retry=retry_if_not_exception_type((GCSBucketNotFoundError, GCSPermissionError)),
        reraise=True,
    )
    def _verify_bucket_access(self) -> None:
        """Verify that the bucket exists and is accessible.

        Raises:
            GCSBucketNotFoundError: If the bucket does not exist.
            GCSPermissionError: If access to the bucket is denied.
        """
        try:
            self.bucket.reload()
        except NotFound:
            raise GCSBucketNotFoundError(
                f"Bucket '{self.bucket_name}' not found.\n"
                f"Create it with: gsutil mb gs://{self.bucket_name}"
            )
        except Forbidden:
            raise GCSPermissionError(
                f"Permission denied for bucket '{self.bucket_name}'.\n"
                "Ensure your account has 'Storage Object Admin' role on the bucket."
            )
        except GoogleCloudError as e:
            raise GCSStorageError(f"Failed to access bucket: {e}") from e

    def _upload(self, key: str, data: bytes, content_type: str) -> str:
        try:
            blob = self.bucket.blob(key)
            blob.upload_from_string(data, content_type=content_type)
            logger.info("Uploaded %d bytes to gs://%s/%s", len(data), self.bucket_name, key)
            if self.public_urls:
                return blob.public_url
            return blob.generate_signed_url(
                version="v4",
                expiration=timedelta(minutes=self.signed_url_minutes),
                method="GET",
            )
        except Forbidden as e:
            raise GCSPermissionError(
                f"Permission denied uploading to gs://{self.bucket_name}/{key}.\n"
                "Ensure your account has 'Storage Object Admin' role."
            ) from e
        except GoogleCloudError as e:
            raise GCSStorageError(f"Failed to upload {key} to GCS: {e}") from e

    def _delete(self, key: str) -> None:
        try:
            self.bucket.blob(key).delete()
            logger.info("Deleted gs://%s/%s", self.bucket_name, key)
        except NotFound as e:
            raise GCSObjectNotFoundError(f"Object not found: gs://{self.bucket_name}/{key}") from e
        except Forbidden as e:
            raise GCSPermissionError(
                f"Permission denied deleting gs://{self.bucket_name}/{key}."
            ) from e
        except GoogleCloudError as e:
            raise GCSStorageError(f"Failed to delete {key}: {e}") from e

    async def put_object(self, key: str, data: bytes, content_type: str) -> str:
        return await asyncio.to_thread(self._upload, key, data, content_type)

    async def delete_object(self, key: str) -> None:
        await asyncio.to_thread(self._delete, key)
