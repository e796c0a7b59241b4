"""Product document model."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from catalog_admin.config.constants import PLACEHOLDER_IMAGE
from catalog_admin.utils.coerce import as_bool, as_float, as_int, as_str, as_str_list
from catalog_admin.utils.keys import key_from_url

from .assets import AssetRef


def parse_sizes(value: Any) -> list[str]:
    """Normalise sizes to unique lower-case entries, keeping first-seen order.

    Accepts the comma separated form input ("S, m, L") or a stored list.
    """
    if isinstance(value, str):
        parts = value.split(",")
    elif isinstance(value, (list, tuple)):
        parts = [as_str(v) for v in value]
    else:
        return []
    seen: dict[str, None] = {}
    for part in parts:
        size = part.strip().lower()
        if size:
            seen.setdefault(size, None)
    return list(seen)


class Product(BaseModel):
    """A catalog product with up to six images."""

    id: str = ""
    name: str = ""
    stock: str = ""
    price: str = ""
    original_price: str = ""
    category: str = "Uncategorized"
    subcategory: str = ""
    era: str = ""
    sizes: list[str] = Field(default_factory=list)
    color: str = "N/A"
    condition: str = ""
    is_sale: bool = False
    no_stock: bool = False
    is_new: bool = False
    rating: float = 0.0
    reviews: int = 0
    description: str = ""
    assets: list[AssetRef] = Field(default_factory=list)

    @property
    def image_keys(self) -> list[str]:
        return [a.key for a in self.assets if a.key]

    @property
    def image_urls(self) -> list[str]:
        return [a.url for a in self.assets]

    @property
    def cover_url(self) -> str:
        return self.assets[0].url if self.assets else PLACEHOLDER_IMAGE

    @classmethod
    def from_document(cls, doc_id: str, data: Any) -> "Product":
        """Decode a stored product; missing or malformed fields get defaults."""
        d = data if isinstance(data, dict) else {}
        urls = as_str_list(d.get("images"))
        if isinstance(d.get("imageKeys"), list):
            keys = [as_str(k) for k in d["imageKeys"]]
        else:
            # Legacy documents predate imageKeys
            keys = [key_from_url(u) for u in urls]
        assets = [AssetRef(key=keys[i] if i < len(keys) else "", url=u) for i, u in enumerate(urls)]
        return cls(
            id=as_str(doc_id),
            name=as_str(d.get("name"), as_str(d.get("title"))),
            stock=as_str(d.get("stock")),
            price=as_str(d.get("price")),
            original_price=as_str(d.get("originalPrice")).lstrip("$"),
            category=as_str(d.get("category")) or "Uncategorized",
            subcategory=as_str(d.get("subcategory")),
            era=as_str(d.get("era")),
            sizes=parse_sizes(d.get("sizes")),
            color=as_str(d.get("color")) or "N/A",
            condition=as_str(d.get("condition")),
            is_sale=as_bool(d.get("isSale")),
            no_stock=as_bool(d.get("noStock")),
            is_new=as_bool(d.get("isNew")),
            rating=as_float(d.get("rating")),
            reviews=as_int(d.get("reviews")),
            description=as_str(d.get("description")),
            assets=assets,
        )

    def to_document(self) -> dict[str, Any]:
        """Encode the domain fields (asset fields come from ``asset_fields``)."""
        return {
            "name": self.name,
            "stock": self.stock,
            "price": self.price,
            "originalPrice": f"${self.original_price}" if self.original_price else "",
            "category": self.category or "Uncategorized",
            "subcategory": self.subcategory,
            "era": self.era,
            "sizes": list(self.sizes),
            "color": self.color or "N/A",
            "condition": self.condition,
            "isSale": self.is_sale,
            "noStock": self.no_stock,
            "isNew": self.is_new,
            "rating": self.rating,
            "reviews": self.reviews,
            "description": self.description,
        }

    @staticmethod
    def asset_fields(assets: list[AssetRef]) -> dict[str, Any]:
        """Document fields that record the product's images."""
        urls = [a.url for a in assets]
        return {
            "images": urls,
            "imageKeys": [a.key for a in assets],
            "image": urls[0] if urls else PLACEHOLDER_IMAGE,
        }
