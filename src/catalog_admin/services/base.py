"""Shared plumbing for the per-surface services."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Generic, Sequence, TypeVar

from catalog_admin.commit.protocol import CommitProtocol, CommitResult, CommitState
from catalog_admin.exceptions import AssetValidationError, CatalogAdminError
from catalog_admin.listing.controller import ListController
from catalog_admin.listing.rows import Row
from catalog_admin.models.assets import UploadFile
from catalog_admin.repositories.base import EntityRepository
from catalog_admin.storage.assets import AssetStore

TRepo = TypeVar("TRepo", bound=EntityRepository)

TransitionHook = Callable[[CommitState, CommitState], None]


class AssetEntityService(Generic[TRepo]):
    """Base for services whose entities own images.

    Every submission gets a fresh ``CommitProtocol``.
    """

    def __init__(
        self,
        repository: TRepo,
        assets: AssetStore,
        *,
        page_size: int = 10,
        on_transition: TransitionHook | None = None,
    ):
        self.repository = repository
        self.assets = assets
        self.page_size = page_size
        self._on_transition = on_transition
        self.last_protocol: CommitProtocol | None = None

    def new_protocol(self) -> CommitProtocol:
        self.last_protocol = CommitProtocol(self.repository, self.assets, self._on_transition)
        return self.last_protocol

    def validate_files(self, files: Sequence[UploadFile]) -> None:
        """Pre-validate a file selection before submit.

        Raises:
            AssetValidationError: On type, size or count violations.
        """
        limit = self.repository.max_assets
        if len(files) > limit:
            noun = "image" if limit == 1 else "images"
            raise AssetValidationError(f"You can upload up to {limit} {noun}.")
        for upload in files:
            self.assets.validate(upload)


class ListedEntityService(AssetEntityService[TRepo], ABC):
    """Asset-owning entities shown in a table with row deletes."""

    label = "item"
    filter_fields: Sequence[str] = ()

    @abstractmethod
    def to_row(self, entity) -> Row:
        """Project an entity onto its table row."""

    async def load_rows(self) -> list[Row]:
        return [self.to_row(e) for e in await self.repository.list()]

    async def list_controller(self) -> ListController:
        """Load rows and wire row deletes to the cascading delete path."""
        return ListController(
            await self.load_rows(),
            filter_fields=self.filter_fields,
            delete_handler=self.delete_row,
            page_size=self.page_size,
            confirm_message=f"Delete this {self.label}? This cannot be undone.",
        )

    async def delete(self, entity_id: str, keys: Sequence[str] | None = None) -> CommitResult:
        """Cascading delete; loads the asset keys when the caller has none."""
        if keys is None:
            try:
                keys = self.repository.asset_keys(await self.repository.get(entity_id))
            except CatalogAdminError as e:
                return CommitResult.failure(e.message, entity_id)
        return await self.new_protocol().delete(entity_id, keys)

    async def delete_row(self, row: Row) -> CommitResult:
        return await self.delete(row.id, row.asset_keys)
