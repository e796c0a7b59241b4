"""Order list and status service."""

from __future__ import annotations

from catalog_admin.commit.protocol import CommitResult
from catalog_admin.config.constants import ORDER_STATUSES, Limits
from catalog_admin.exceptions import CatalogAdminError
from catalog_admin.listing.controller import ListController
from catalog_admin.listing.rows import ORDER_FILTER_FIELDS, Row, order_row
from catalog_admin.models.order import Order
from catalog_admin.repositories.orders import OrderRepository


class OrderService:
    """Orders carry no assets, so status edits are plain document writes."""

    def __init__(self, repository: OrderRepository, *, page_size: int = Limits.PAGE_SIZE):
        self.repository = repository
        self.page_size = page_size

    async def load_rows(self) -> list[Row]:
        return [order_row(o) for o in await self.repository.list()]

    async def list_controller(self) -> ListController:
        return ListController(
            await self.load_rows(),
            filter_fields=ORDER_FILTER_FIELDS,
            page_size=self.page_size,
        )

    async def get(self, order_id: str) -> Order:
        return await self.repository.get(order_id)

    async def update_status(self, order_id: str, status: str, note: str = "") -> CommitResult:
        status = status.strip().lower()
        if status not in ORDER_STATUSES:
            return CommitResult.failure(f"Unknown status '{status}'", order_id)
        try:
            order = await self.get(order_id)
            if order.status == status:
                return CommitResult.failure("Status is unchanged", order_id)
            await self.repository.update_status(order_id, status, note.strip())
        except CatalogAdminError as e:
            return CommitResult.failure(e.message, order_id)
        return CommitResult.ok(order_id)
