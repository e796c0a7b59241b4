"""Tests for entity repositories over the in-memory document store."""

import pytest

from catalog_admin.documents.base import SERVER_TIMESTAMP
from catalog_admin.documents.memory import InMemoryDocumentStore
from catalog_admin.exceptions import EntityNotFoundError, WriteError
from catalog_admin.models import AssetRef
from catalog_admin.repositories import (
    CollectionRepository,
    GalleryRepository,
    OrderRepository,
    ProductRepository,
)


@pytest.fixture
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore(
        {
            "products": {"p1": {"name": "Winter Coat", "imageKeys": ["products/a.png"], "images": ["u"]}},
            "orders": {"o1": {"status": "pending", "meta": {"createdAt": {"seconds": 1}}}},
        }
    )


class TestProductRepository:
    """Tests for ProductRepository."""

    @pytest.mark.asyncio
    async def test_list_and_get(self, store) -> None:
        repo = ProductRepository(store)
        products = await repo.list()
        assert [p.id for p in products] == ["p1"]
        assert (await repo.get("p1")).name == "Winter Coat"

    @pytest.mark.asyncio
    async def test_get_missing(self, store) -> None:
        with pytest.raises(EntityNotFoundError, match="Product 'nope' not found"):
            await ProductRepository(store).get("nope")

    @pytest.mark.asyncio
    async def test_find_missing_returns_none(self, store) -> None:
        assert await ProductRepository(store).find("nope") is None

    @pytest.mark.asyncio
    async def test_asset_keys(self, store) -> None:
        repo = ProductRepository(store)
        assert repo.asset_keys(await repo.get("p1")) == ["products/a.png"]

    @pytest.mark.asyncio
    async def test_create_update_delete(self, store) -> None:
        repo = ProductRepository(store)
        new_id = await repo.create({"name": "Tee"})
        await repo.update(new_id, {"price": "10"})
        assert (await repo.get(new_id)).price == "10"
        await repo.delete(new_id)
        assert await repo.find(new_id) is None

    @pytest.mark.asyncio
    async def test_update_missing_is_write_error(self, store) -> None:
        with pytest.raises(WriteError):
            await ProductRepository(store).update("nope", {"price": "1"})


class TestCollectionRepository:
    """Tests for CollectionRepository."""

    @pytest.mark.asyncio
    async def test_timestamps_are_stamped(self, store) -> None:
        repo = CollectionRepository(store)
        new_id = await repo.create({"name": "Winter"})
        collection = await repo.get(new_id)
        assert collection.updated_at is not None
        assert "createdAt" in store.collections["collections"][new_id]

    def test_asset_fields_carry_caption(self, store) -> None:
        fields = CollectionRepository(store).asset_fields(
            [AssetRef(key="collections/c.png", url="https://b/c.png")], caption="Snow"
        )
        assert fields == {"photo": {"url": "https://b/c.png", "caption": "Snow"}, "imageKey": "collections/c.png"}


class TestGalleryRepository:
    """Tests for the singleton gallery document."""

    @pytest.mark.asyncio
    async def test_load_before_first_save(self, store) -> None:
        assert await GalleryRepository(store).load() is None

    @pytest.mark.asyncio
    async def test_save_merges(self, store) -> None:
        repo = GalleryRepository(store)
        assert await repo.create({"url": "https://b/gallery/h.png", "key": "gallery/h.png"}) == "hero"
        await repo.update("anything", {"caption": "Hello"})
        hero = await repo.load()
        assert hero.caption == "Hello"
        assert hero.image_keys == ["gallery/h.png"]
        assert list(store.collections["gallery"]) == ["hero"]


class TestOrderRepository:
    """Tests for order status edits."""

    @pytest.mark.asyncio
    async def test_update_status_with_note(self, store) -> None:
        repo = OrderRepository(store)
        await repo.update_status("o1", "paid", "called customer")
        doc = store.collections["orders"]["o1"]
        assert doc["status"] == "paid"
        assert doc["meta"]["adminNote"] == "called customer"
        # Nested fields next to the edited ones survive
        assert doc["meta"]["createdAt"] == {"seconds": 1}
        assert doc["meta"]["updatedAt"] is not SERVER_TIMESTAMP

    @pytest.mark.asyncio
    async def test_update_status_without_note(self, store) -> None:
        await OrderRepository(store).update_status("o1", "fulfilled")
        assert "adminNote" not in store.collections["orders"]["o1"]["meta"]
