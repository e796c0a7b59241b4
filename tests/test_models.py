"""Tests for document decoding and encoding."""

import pytest

from catalog_admin.config.constants import PLACEHOLDER_IMAGE
from catalog_admin.models import AssetRef, Collection, GalleryHero, Order, Product, parse_sizes

GARBAGE = [None, 42, "text", [], {"images": "nope", "rating": "bad", "sizes": 5}, {"photo": 3}]


class TestParseSizes:
    """Tests for size normalisation."""

    def test_comma_string(self) -> None:
        """Sizes are trimmed, lower-cased and de-duplicated in order."""
        assert parse_sizes(" S, m ,L, s,, ") == ["s", "m", "l"]

    def test_list_input(self) -> None:
        assert parse_sizes(["XL", "xl", "M"]) == ["xl", "m"]

    def test_other_input(self) -> None:
        assert parse_sizes(None) == []


class TestProductDocument:
    """Tests for Product decode/encode."""

    def test_decode_full_document(self) -> None:
        """Stored fields map onto the model, with keys paired to urls."""
        product = Product.from_document(
            "p1",
            {
                "name": "Winter Coat",
                "price": "120",
                "originalPrice": "$150",
                "stock": "3",
                "rating": 4.5,
                "reviews": "12",
                "sizes": ["M", "L"],
                "images": ["https://b/products/1-a-coat.png", "https://b/products/2-b-back.png"],
                "imageKeys": ["products/1-a-coat.png", "products/2-b-back.png"],
            },
        )
        assert product.id == "p1"
        assert product.original_price == "150"
        assert product.reviews == 12
        assert product.sizes == ["m", "l"]
        assert product.image_keys == ["products/1-a-coat.png", "products/2-b-back.png"]
        assert product.cover_url == "https://b/products/1-a-coat.png"

    def test_legacy_document_recovers_keys_from_urls(self) -> None:
        """Documents without imageKeys derive keys from the url path."""
        product = Product.from_document("p2", {"title": "Old", "images": ["https://b/products/x%20y.png"]})
        assert product.name == "Old"
        assert product.image_keys == ["products/x y.png"]

    def test_unrecoverable_keys_are_skipped(self) -> None:
        """A url with no usable path leaves the image without a key."""
        product = Product.from_document("p3", {"images": ["/placeholder.svg"]})
        assert product.image_urls == ["/placeholder.svg"]
        assert product.image_keys == []

    @pytest.mark.parametrize("data", GARBAGE)
    def test_decode_never_raises(self, data) -> None:
        """Malformed documents decode to defaults."""
        product = Product.from_document("x", data)
        assert product.category == "Uncategorized"
        assert product.color == "N/A"
        assert product.cover_url == PLACEHOLDER_IMAGE

    def test_encode_prefixes_original_price(self) -> None:
        doc = Product(name="Tee", original_price="20").to_document()
        assert doc["originalPrice"] == "$20"
        assert Product(name="Tee").to_document()["originalPrice"] == ""

    def test_asset_fields(self) -> None:
        """Images, keys and cover are written together."""
        refs = [AssetRef(key="products/a.png", url="https://b/a.png")]
        assert Product.asset_fields(refs) == {
            "images": ["https://b/a.png"],
            "imageKeys": ["products/a.png"],
            "image": "https://b/a.png",
        }
        assert Product.asset_fields([])["image"] == PLACEHOLDER_IMAGE


class TestCollectionDocument:
    """Tests for Collection decode/encode."""

    def test_decode_photo(self) -> None:
        collection = Collection.from_document(
            "c1",
            {
                "name": "Winter",
                "products": ["p1", "p2"],
                "photo": {"url": "https://b/collections/c.png", "caption": "Snow"},
            },
        )
        assert collection.caption == "Snow"
        assert collection.products_count == 2
        # imageKey missing: recovered from the photo url
        assert collection.image_keys == ["collections/c.png"]

    def test_products_count_fallback(self) -> None:
        """Without a products array the stored count is used."""
        assert Collection.from_document("c2", {"productsCount": "4"}).products_count == 4

    @pytest.mark.parametrize("data", GARBAGE)
    def test_decode_never_raises(self, data) -> None:
        collection = Collection.from_document("x", data)
        assert collection.asset is None
        assert collection.image_keys == []

    def test_asset_fields_without_image(self) -> None:
        assert Collection.asset_fields([], caption="ignored") == {"photo": None, "imageKey": None}


class TestGalleryHeroDocument:
    """Tests for GalleryHero decode."""

    def test_decode(self) -> None:
        hero = GalleryHero.from_document("hero", {"url": "https://b/gallery/h.png", "key": "gallery/h.png"})
        assert hero.image_keys == ["gallery/h.png"]

    @pytest.mark.parametrize("data", GARBAGE)
    def test_decode_never_raises(self, data) -> None:
        assert GalleryHero.from_document("hero", data).image_keys == []


class TestOrderDocument:
    """Tests for Order decode."""

    def test_decode(self) -> None:
        order = Order.from_document(
            "o1",
            {
                "orderNumber": "A-100",
                "status": "paid",
                "pricing": {"subtotal": "100", "shipping": 5, "total": 105},
                "items": [{"productId": "p1", "name": "Coat", "qty": 2, "unitPrice": 50}],
                "meta": {"createdAt": {"seconds": 0}, "adminNote": "gift"},
            },
        )
        assert order.order_number == "A-100"
        assert order.pricing.total == 105.0
        assert order.total_items == 2
        assert order.admin_note == "gift"
        assert order.created_at is not None

    @pytest.mark.parametrize("data", GARBAGE)
    def test_decode_never_raises(self, data) -> None:
        order = Order.from_document("o2", data)
        assert order.order_number == "o2"
        assert order.status == "pending"
        assert order.currency == "LEK"
