"""List rows: the display/action projection of an entity."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from catalog_admin.models.collection import Collection
from catalog_admin.models.order import Order
from catalog_admin.models.product import Product

PRODUCT_FILTER_FIELDS = ("title", "price", "stock", "rating")
COLLECTION_FILTER_FIELDS = ("name", "products_count")
ORDER_FILTER_FIELDS = ("id", "order_number", "status", "items_count")


@dataclass
class Row:
    """One table row. ``asset_keys`` is only used for cascading delete."""

    id: str
    fields: dict[str, Any] = field(default_factory=dict)
    asset_keys: list[str] = field(default_factory=list)
    is_deleting: bool = False

    def value(self, column: str) -> Any:
        if column == "id":
            return self.id
        return self.fields.get(column)

    def __getitem__(self, column: str) -> Any:
        return self.value(column)


def product_row(product: Product) -> Row:
    return Row(
        id=product.id,
        fields={
            "title": product.name or "Untitled",
            "price": product.price or "0",
            "stock": product.stock or "0",
            "rating": product.rating,
        },
        asset_keys=product.image_keys,
    )


def collection_row(collection: Collection) -> Row:
    return Row(
        id=collection.id,
        fields={
            "name": collection.name or "Untitled Collection",
            "products_count": collection.products_count,
        },
        asset_keys=collection.image_keys,
    )


def order_row(order: Order) -> Row:
    return Row(
        id=order.id,
        fields={
            "order_number": order.order_number,
            "items_count": len(order.items),
            "status": order.status,
            "total": order.pricing.total,
        },
    )
