"""Product create/edit/delete service."""

from __future__ import annotations

from typing import Any, Sequence

from pydantic import BaseModel

from catalog_admin.commit.protocol import CommitResult
from catalog_admin.exceptions import CatalogAdminError
from catalog_admin.listing.rows import PRODUCT_FILTER_FIELDS, Row, product_row
from catalog_admin.models.assets import UploadFile
from catalog_admin.models.product import Product, parse_sizes
from catalog_admin.repositories.products import ProductRepository

from .base import ListedEntityService


class ProductForm(BaseModel):
    """Values from the product add/edit form."""

    name: str
    stock: str = ""
    price: str = ""
    original_price: str = ""
    category: str = ""
    subcategory: str = ""
    era: str = ""
    sizes: str | list[str] = ""
    color: str = ""
    condition: str = ""
    is_sale: bool = True
    no_stock: bool = False
    description: str = ""

    def to_fields(self, *, creating: bool) -> dict[str, Any]:
        product = Product(
            name=self.name.strip(),
            stock=self.stock.strip(),
            price=self.price.strip(),
            original_price=self.original_price.strip().lstrip("$"),
            category=self.category.strip() or "Uncategorized",
            subcategory=self.subcategory.strip(),
            era=self.era.strip(),
            sizes=parse_sizes(self.sizes),
            color=self.color.strip() or "N/A",
            condition=self.condition.strip(),
            is_sale=self.is_sale,
            no_stock=self.no_stock,
            description=self.description,
        )
        fields = product.to_document()
        if creating:
            fields.update({"isNew": False, "rating": 4, "reviews": 0})
        else:
            # Storefront-owned counters are left alone on edit
            for key in ("isNew", "rating", "reviews"):
                fields.pop(key)
        return fields


class ProductService(ListedEntityService[ProductRepository]):
    """Products with up to six images."""

    label = "product"
    filter_fields = PRODUCT_FILTER_FIELDS

    def to_row(self, entity: Product) -> Row:
        return product_row(entity)

    async def get(self, product_id: str) -> Product:
        return await self.repository.get(product_id)

    async def create(self, form: ProductForm, files: Sequence[UploadFile] = ()) -> CommitResult:
        if not form.name.strip():
            return CommitResult.failure("Product name is required")
        return await self.new_protocol().create(form.to_fields(creating=True), files)

    async def update(
        self,
        product_id: str,
        form: ProductForm,
        files: Sequence[UploadFile] = (),
        previous_keys: Sequence[str] | None = None,
    ) -> CommitResult:
        """Save edits; attached files replace every existing image."""
        if not form.name.strip():
            return CommitResult.failure("Product name is required", product_id)
        if files and previous_keys is None:
            try:
                previous_keys = (await self.get(product_id)).image_keys
            except CatalogAdminError as e:
                return CommitResult.failure(e.message, product_id)
        return await self.new_protocol().update(
            product_id,
            form.to_fields(creating=False),
            files,
            previous_keys=previous_keys or (),
        )
