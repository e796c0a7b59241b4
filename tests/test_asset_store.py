"""Tests for the asset store client."""

import pytest

from catalog_admin.exceptions import AssetValidationError, UploadError
from catalog_admin.storage.assets import AssetStore
from catalog_admin.storage.memory import InMemoryBlobStore


class TestValidate:
    """Tests for upload validation."""

    def test_rejects_non_images(self, assets, image) -> None:
        with pytest.raises(AssetValidationError, match='"notes.pdf" is not an image'):
            assets.validate(image("notes.pdf", content_type="application/pdf"))

    def test_rejects_oversized_files(self, blobs, image) -> None:
        store = AssetStore(blobs, max_bytes=1024 * 1024)
        with pytest.raises(AssetValidationError, match="exceeds 1MB limit"):
            store.validate(image("big.png", size=1024 * 1024 + 1))

    def test_accepts_limit_sized_file(self, blobs, image) -> None:
        store = AssetStore(blobs, max_bytes=100)
        store.validate(image(size=100))


class TestPut:
    """Tests for single and batch uploads."""

    @pytest.mark.asyncio
    async def test_put_returns_key_and_url(self, assets, blobs, image) -> None:
        ref = await assets.put(image("Red Tee.png"), "products")
        assert ref.key.startswith("products/")
        assert ref.key.endswith("-Red_Tee.png")
        assert blobs.exists(ref.key)
        assert ref.url.startswith("https://blobs.local/products/")

    @pytest.mark.asyncio
    async def test_unknown_namespace(self, assets, image) -> None:
        with pytest.raises(AssetValidationError):
            await assets.put(image(), "avatars")

    @pytest.mark.asyncio
    async def test_validation_happens_before_any_upload(self, assets, events, image) -> None:
        """One bad file stops the whole batch before the network."""
        files = [image("a.png"), image("b.txt", content_type="text/plain")]
        with pytest.raises(AssetValidationError):
            await assets.put_many(files, "products")
        assert events == []

    @pytest.mark.asyncio
    async def test_put_many_keeps_input_order(self, assets, image) -> None:
        refs = await assets.put_many([image(f"{i}.png") for i in range(5)], "products")
        assert [r.key.rsplit("-", 1)[-1] for r in refs] == [f"{i}.png" for i in range(5)]

    @pytest.mark.asyncio
    async def test_put_many_settles_before_raising(self, assets, blobs, events, image) -> None:
        """Every upload is attempted; the failure surfaces after all settle."""
        blobs.fail_puts = {"b.png"}
        with pytest.raises(UploadError, match='"b.png"'):
            await assets.put_many([image("a.png"), image("b.png"), image("c.png")], "products")
        assert len([e for e in events if e[0] == "put"]) == 3
        # The successful ones are left behind as orphans
        assert len(blobs.objects) == 2

    @pytest.mark.asyncio
    async def test_put_many_empty(self, assets) -> None:
        assert await assets.put_many([], "products") == []


class TestRemove:
    """Tests for best-effort removal."""

    @pytest.mark.asyncio
    async def test_remove_existing(self, assets, blobs, cleanup_log, image) -> None:
        ref = await assets.put(image(), "gallery")
        outcome = await assets.remove(ref.key)
        assert outcome.removed
        assert not blobs.exists(ref.key)
        assert cleanup_log == [outcome]

    @pytest.mark.asyncio
    async def test_missing_object_does_not_raise(self, assets) -> None:
        outcome = await assets.remove("products/gone.png")
        assert not outcome.removed
        assert outcome.missing

    @pytest.mark.asyncio
    async def test_permission_denied_does_not_raise(self, assets, blobs, image) -> None:
        ref = await assets.put(image(), "products")
        blobs.deny_deletes = {ref.key}
        outcome = await assets.remove(ref.key)
        assert not outcome.removed
        assert not outcome.missing
        assert "Permission denied" in outcome.error.message

    @pytest.mark.asyncio
    async def test_remove_many_deduplicates(self, assets, events, image) -> None:
        ref = await assets.put(image(), "products")
        events.clear()
        outcomes = await assets.remove_many([ref.key, ref.key, "", "products/other.png"])
        assert [o.key for o in outcomes] == [ref.key, "products/other.png"]
        assert events == [("delete", ref.key), ("delete", "products/other.png")]

    @pytest.mark.asyncio
    async def test_broken_observer_is_contained(self, image) -> None:
        """An observer that raises does not break cleanup."""

        def observer(outcome):
            raise RuntimeError("boom")

        store = AssetStore(InMemoryBlobStore())
        store.add_cleanup_observer(observer)
        ref = await store.put(image(), "products")
        outcome = await store.remove(ref.key)
        assert outcome.removed
