"""Collection create/edit/delete service."""

from __future__ import annotations

from typing import Any, Sequence

from pydantic import BaseModel, Field

from catalog_admin.commit.protocol import CommitResult
from catalog_admin.exceptions import CatalogAdminError
from catalog_admin.listing.rows import COLLECTION_FILTER_FIELDS, Row, collection_row
from catalog_admin.models.assets import UploadFile
from catalog_admin.models.collection import Collection
from catalog_admin.repositories.collections import CollectionRepository
from catalog_admin.repositories.products import ProductRepository
from catalog_admin.storage.assets import AssetStore

from .base import ListedEntityService, TransitionHook


class CollectionForm(BaseModel):
    """Values from the collection add/edit form."""

    name: str
    description: str = ""
    products: list[str] = Field(default_factory=list)
    publishing_channels: list[str] = Field(default_factory=list)
    caption: str = ""

    def to_fields(self) -> dict[str, Any]:
        return Collection(
            name=self.name.strip(),
            description=self.description,
            products=list(dict.fromkeys(p for p in self.products if p)),
            publishing_channels=list(dict.fromkeys(c for c in self.publishing_channels if c)),
        ).to_document()


class CollectionService(ListedEntityService[CollectionRepository]):
    """Collections with one optional cover photo."""

    label = "collection"
    filter_fields = COLLECTION_FILTER_FIELDS

    def __init__(
        self,
        repository: CollectionRepository,
        assets: AssetStore,
        products: ProductRepository | None = None,
        *,
        page_size: int = 10,
        on_transition: TransitionHook | None = None,
    ):
        super().__init__(repository, assets, page_size=page_size, on_transition=on_transition)
        self.products = products

    def to_row(self, entity: Collection) -> Row:
        return collection_row(entity)

    async def get(self, collection_id: str) -> Collection:
        return await self.repository.get(collection_id)

    async def product_choices(self, query: str = "") -> list[tuple[str, str]]:
        """(id, name) pairs for the product picker, filtered by name."""
        if self.products is None:
            return []
        q = query.strip().lower()
        choices = [(p.id, p.name or "Untitled") for p in await self.products.list()]
        if not q:
            return choices
        return [c for c in choices if q in c[1].lower()]

    async def create(self, form: CollectionForm, files: Sequence[UploadFile] = ()) -> CommitResult:
        if not form.name.strip():
            return CommitResult.failure("Collection name is required")
        return await self.new_protocol().create(
            form.to_fields(), files, asset_extra={"caption": form.caption}
        )

    async def update(
        self,
        collection_id: str,
        form: CollectionForm,
        files: Sequence[UploadFile] = (),
    ) -> CommitResult:
        """Save edits; an attached file swaps the cover photo."""
        if not form.name.strip():
            return CommitResult.failure("Collection name is required", collection_id)
        try:
            current = await self.get(collection_id)
        except CatalogAdminError as e:
            return CommitResult.failure(e.message, collection_id)
        fields = form.to_fields()
        if not files:
            # Caption edits still rewrite the photo map around the current image
            existing = [current.asset] if current.asset else []
            fields.update(Collection.asset_fields(existing, caption=form.caption))
        return await self.new_protocol().update(
            collection_id,
            fields,
            files,
            previous_keys=current.image_keys,
            asset_extra={"caption": form.caption},
        )
