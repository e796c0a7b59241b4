"""Order repository: read access plus status edits."""

from __future__ import annotations

from typing import Any

from catalog_admin.documents.base import SERVER_TIMESTAMP
from catalog_admin.models.order import Order

from .base import EntityRepository


class OrderRepository(EntityRepository[Order]):
    collection = "orders"

    def decode(self, doc_id: str, data: Any) -> Order:
        return Order.from_document(doc_id, data)

    async def update_status(self, order_id: str, status: str, note: str = "") -> None:
        """Write the status; the admin note only when one is given."""
        fields: dict[str, Any] = {"status": status, "meta.updatedAt": SERVER_TIMESTAMP}
        if note:
            fields["meta.adminNote"] = note
        await self.update(order_id, fields)
