"""Order document model."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from catalog_admin.utils.coerce import as_datetime, as_float, as_int, as_str


class OrderItem(BaseModel):
    product_id: str = ""
    name: str = ""
    qty: int = 0
    size: str | None = None
    image: str | None = None
    unit_price: float = 0.0
    line_total: float = 0.0

    @classmethod
    def from_document(cls, data: Any) -> "OrderItem":
        d = data if isinstance(data, dict) else {}
        return cls(
            product_id=as_str(d.get("productId")),
            name=as_str(d.get("name")),
            qty=as_int(d.get("qty")),
            size=as_str(d.get("size")) or None,
            image=as_str(d.get("image")) or None,
            unit_price=as_float(d.get("unitPrice")),
            line_total=as_float(d.get("lineTotal")),
        )


class OrderPricing(BaseModel):
    subtotal: float = 0.0
    shipping: float = 0.0
    total: float = 0.0


class Order(BaseModel):
    """A storefront order; read-mostly, only status and note are edited."""

    id: str = ""
    order_number: str = ""
    status: str = "pending"
    currency: str = "LEK"
    pricing: OrderPricing = Field(default_factory=OrderPricing)
    shipping_info: dict[str, Any] | None = None
    items: list[OrderItem] = Field(default_factory=list)
    created_at: datetime | None = None
    admin_note: str = ""

    @property
    def total_items(self) -> int:
        return sum(item.qty for item in self.items)

    @classmethod
    def from_document(cls, doc_id: str, data: Any) -> "Order":
        d = data if isinstance(data, dict) else {}
        pricing = d.get("pricing") if isinstance(d.get("pricing"), dict) else {}
        meta = d.get("meta") if isinstance(d.get("meta"), dict) else {}
        items = d.get("items") if isinstance(d.get("items"), list) else []
        shipping = d.get("shippingInfo")
        order_id = as_str(doc_id)
        return cls(
            id=order_id,
            order_number=as_str(d.get("orderNumber")) or order_id,
            status=as_str(d.get("status")) or "pending",
            currency=as_str(d.get("currency")) or "LEK",
            pricing=OrderPricing(
                subtotal=as_float(pricing.get("subtotal")),
                shipping=as_float(pricing.get("shipping")),
                total=as_float(pricing.get("total")),
            ),
            shipping_info=shipping if isinstance(shipping, dict) else None,
            items=[OrderItem.from_document(item) for item in items],
            created_at=as_datetime(meta.get("createdAt")),
            admin_note=as_str(meta.get("adminNote")),
        )
