"""Tests for the Google Cloud backends with mocked clients."""

from unittest.mock import MagicMock

import pytest
from google.cloud import firestore
from google.cloud.exceptions import Forbidden, NotFound

from catalog_admin.documents.base import SERVER_TIMESTAMP
from catalog_admin.documents.firestore import FirestoreDocumentStore
from catalog_admin.exceptions import DocumentStoreError
from catalog_admin.storage.assets import AssetStore
from catalog_admin.storage.base import BlobNotFoundError
from catalog_admin.storage.gcs import (
    GCSBlobStore,
    GCSBucketNotFoundError,
    GCSObjectNotFoundError,
    GCSPermissionError,
)


@pytest.fixture
def gcs_client() -> MagicMock:
    client = MagicMock()
    blob = client.bucket.return_value.blob.return_value
    blob.public_url = "https://storage.googleapis.com/shop/products/a.png"
    blob.generate_signed_url.return_value = "https://signed.example/a.png"
    return client


class TestGCSBlobStore:
    """Tests for GCSBlobStore."""

    @pytest.mark.asyncio
    async def test_put_returns_public_url(self, gcs_client) -> None:
        store = GCSBlobStore("shop", client=gcs_client, verify_bucket=False)
        url = await store.put_object("products/a.png", b"data", "image/png")

        assert url == "https://storage.googleapis.com/shop/products/a.png"
        blob = gcs_client.bucket.return_value.blob
        blob.assert_called_with("products/a.png")
        blob.return_value.upload_from_string.assert_called_once_with(b"data", content_type="image/png")

    @pytest.mark.asyncio
    async def test_put_returns_signed_url(self, gcs_client) -> None:
        store = GCSBlobStore("shop", client=gcs_client, verify_bucket=False, public_urls=False)
        assert await store.put_object("products/a.png", b"data", "image/png") == "https://signed.example/a.png"

    @pytest.mark.asyncio
    async def test_delete_missing_object(self, gcs_client) -> None:
        gcs_client.bucket.return_value.blob.return_value.delete.side_effect = NotFound("gone")
        store = GCSBlobStore("shop", client=gcs_client, verify_bucket=False)

        with pytest.raises(GCSObjectNotFoundError):
            await store.delete_object("products/a.png")

    @pytest.mark.asyncio
    async def test_missing_object_cleanup_is_reported_as_missing(self, gcs_client) -> None:
        """The asset store sees GCS not-found as an already-missing object."""
        gcs_client.bucket.return_value.blob.return_value.delete.side_effect = NotFound("gone")
        assets = AssetStore(GCSBlobStore("shop", client=gcs_client, verify_bucket=False))

        outcome = await assets.remove("products/a.png")

        assert outcome.missing
        assert isinstance(outcome.error.__cause__, BlobNotFoundError)

    @pytest.mark.asyncio
    async def test_upload_forbidden(self, gcs_client) -> None:
        gcs_client.bucket.return_value.blob.return_value.upload_from_string.side_effect = Forbidden("no")
        store = GCSBlobStore("shop", client=gcs_client, verify_bucket=False)

        with pytest.raises(GCSPermissionError):
            await store.put_object("products/a.png", b"data", "image/png")

    def test_missing_bucket_is_not_retried(self, gcs_client) -> None:
        gcs_client.bucket.return_value.reload.side_effect = NotFound("no bucket")

        with pytest.raises(GCSBucketNotFoundError):
            GCSBlobStore("shop", client=gcs_client)
        assert gcs_client.bucket.return_value.reload.call_count == 1


class TestFirestoreDocumentStore:
    """Tests for FirestoreDocumentStore."""

    @pytest.mark.asyncio
    async def test_get_missing_returns_none(self) -> None:
        client = MagicMock()
        client.collection.return_value.document.return_value.get.return_value.exists = False
        store = FirestoreDocumentStore(client=client)

        assert await store.get_document("products", "p1") is None

    @pytest.mark.asyncio
    async def test_server_timestamp_is_translated(self) -> None:
        client = MagicMock()
        store = FirestoreDocumentStore(client=client)

        await store.update_document("orders", "o1", {"status": "paid", "meta.updatedAt": SERVER_TIMESTAMP})

        ref = client.collection.return_value.document.return_value
        ref.update.assert_called_once_with({"status": "paid", "meta.updatedAt": firestore.SERVER_TIMESTAMP})

    @pytest.mark.asyncio
    async def test_add_returns_new_id(self) -> None:
        client = MagicMock()
        ref = MagicMock()
        ref.id = "new-id"
        client.collection.return_value.add.return_value = (None, ref)
        store = FirestoreDocumentStore(client=client)

        assert await store.add_document("products", {"name": "Tee"}) == "new-id"

    @pytest.mark.asyncio
    async def test_update_missing_document(self) -> None:
        client = MagicMock()
        client.collection.return_value.document.return_value.update.side_effect = NotFound("missing")
        store = FirestoreDocumentStore(client=client)

        with pytest.raises(DocumentStoreError, match="document not found"):
            await store.update_document("products", "nope", {"price": "1"})

    @pytest.mark.asyncio
    async def test_list_documents(self) -> None:
        snap = MagicMock()
        snap.id = "p1"
        snap.to_dict.return_value = {"name": "Tee"}
        client = MagicMock()
        client.collection.return_value.stream.return_value = [snap]
        store = FirestoreDocumentStore(client=client)

        assert await store.list_documents("products") == [("p1", {"name": "Tee"})]
