"""Client-side list view-model and row projections."""

from catalog_admin.listing.controller import (
    DeleteOutcome,
    DeleteStatus,
    ListController,
    SortSpec,
)
from catalog_admin.listing.rows import (
    COLLECTION_FILTER_FIELDS,
    ORDER_FILTER_FIELDS,
    PRODUCT_FILTER_FIELDS,
    Row,
    collection_row,
    order_row,
    product_row,
)

__all__ = [
    "ListController",
    "SortSpec",
    "DeleteOutcome",
    "DeleteStatus",
    "Row",
    "product_row",
    "collection_row",
    "order_row",
    "PRODUCT_FILTER_FIELDS",
    "COLLECTION_FILTER_FIELDS",
    "ORDER_FILTER_FIELDS",
]
