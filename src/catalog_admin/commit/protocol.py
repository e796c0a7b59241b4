"""Asset-linked commit protocol.

One ``CommitProtocol`` runs one form submission through

    IDLE -> UPLOADING -> WRITING -> CLEANING_UP -> DONE

with FAILED reachable from UPLOADING or WRITING. The stage order is strict:
every upload settles before the document write, and superseded objects are
removed only after the write that stops referencing them has succeeded. A
document therefore never references an object that does not exist.

Cleanup results never reach ``CommitResult``; they go to the asset store's
cleanup observers and to ``CommitProtocol.cleanup_outcomes``.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Callable, Sequence

from catalog_admin.config.logging import get_logger
from catalog_admin.exceptions import AssetValidationError, CatalogAdminError
from catalog_admin.models.assets import AssetRef, UploadFile
from catalog_admin.repositories.base import EntityRepository
from catalog_admin.storage.assets import AssetStore, CleanupOutcome

logger = get_logger(__name__)


class CommitState(str, Enum):
    IDLE = "idle"
    UPLOADING = "uploading"
    WRITING = "writing"
    CLEANING_UP = "cleaning_up"
    DONE = "done"
    FAILED = "failed"

    def is_terminal(self) -> bool:
        return self in (CommitState.DONE, CommitState.FAILED)


_ALLOWED: dict[CommitState, tuple[CommitState, ...]] = {
    CommitState.IDLE: (CommitState.UPLOADING, CommitState.WRITING),
    CommitState.UPLOADING: (CommitState.WRITING, CommitState.FAILED),
    CommitState.WRITING: (CommitState.CLEANING_UP, CommitState.DONE, CommitState.FAILED),
    CommitState.CLEANING_UP: (CommitState.DONE,),
    CommitState.DONE: (),
    CommitState.FAILED: (),
}


@dataclass
class CommitResult:
    """Outcome reported to the submitting view."""

    success: bool
    entity_id: str | None = None
    assets: list[AssetRef] = field(default_factory=list)
    error: str | None = None

    @classmethod
    def ok(cls, entity_id: str | None, assets: Sequence[AssetRef] = ()) -> "CommitResult":
        return cls(success=True, entity_id=entity_id, assets=list(assets))

    @classmethod
    def failure(cls, message: str, entity_id: str | None = None) -> "CommitResult":
        return cls(success=False, entity_id=entity_id, error=message)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["assets"] = [a.model_dump() for a in self.assets]
        return data


class CommitProtocol:
    """Runs one create, update or delete against a repository and asset store.

    Instances are single-use; ``state`` and ``history`` show how far the
    submission got.
    """

    def __init__(
        self,
        repository: EntityRepository,
        assets: AssetStore,
        on_transition: Callable[[CommitState, CommitState], None] | None = None,
    ):
        self._repository = repository
        self._assets = assets
        self._on_transition = on_transition
        self.state = CommitState.IDLE
        self.history: list[CommitState] = [CommitState.IDLE]
        self.cleanup_outcomes: list[CleanupOutcome] = []

    def _advance(self, new_state: CommitState) -> None:
        if new_state not in _ALLOWED[self.state]:
            raise RuntimeError(f"Invalid commit transition {self.state.value} -> {new_state.value}")
        old_state, self.state = self.state, new_state
        self.history.append(new_state)
        logger.debug("%s commit: %s -> %s", self._repository.collection, old_state.value, new_state.value)
        if self._on_transition:
            self._on_transition(old_state, new_state)

    def _begin(self) -> None:
        if self.state is not CommitState.IDLE:
            raise RuntimeError("CommitProtocol instances are single-use")

    def _fail(self, error: CatalogAdminError, entity_id: str | None = None) -> CommitResult:
        self._advance(CommitState.FAILED)
        logger.error("%s commit failed: %s", self._repository.collection, error)
        return CommitResult.failure(error.message, entity_id=entity_id)

    async def _upload(self, files: Sequence[UploadFile]) -> list[AssetRef]:
        limit = self._repository.max_assets
        if len(files) > limit:
            noun = "image" if limit == 1 else "images"
            raise AssetValidationError(f"You can upload up to {limit} {noun}.")
        return await self._assets.put_many(files, self._repository.namespace)

    async def _cleanup(self, keys: Sequence[str]) -> None:
        self._advance(CommitState.CLEANING_UP)
        self.cleanup_outcomes = await self._assets.remove_many(keys)
        self._advance(CommitState.DONE)

    async def create(
        self,
        fields: dict[str, Any],
        files: Sequence[UploadFile] = (),
        asset_extra: dict[str, Any] | None = None,
    ) -> CommitResult:
        """Upload attached files, then create the document referencing them."""
        self._begin()
        refs: list[AssetRef] = []
        if files:
            self._advance(CommitState.UPLOADING)
            try:
                refs = await self._upload(files)
            except CatalogAdminError as e:
                return self._fail(e)
        self._advance(CommitState.WRITING)
        payload = {**fields}
        if self._repository.max_assets:
            payload.update(self._repository.asset_fields(refs, **(asset_extra or {})))
        try:
            entity_id = await self._repository.create(payload)
        except CatalogAdminError as e:
            return self._fail(e)
        self._advance(CommitState.DONE)
        logger.info("Created %s %s with %d assets", self._repository.collection, entity_id, len(refs))
        return CommitResult.ok(entity_id, refs)

    async def update(
        self,
        entity_id: str,
        fields: dict[str, Any],
        files: Sequence[UploadFile] = (),
        previous_keys: Sequence[str] = (),
        asset_extra: dict[str, Any] | None = None,
    ) -> CommitResult:
        """Replace the entity's fields, and its whole asset set when files are attached.

        Without files this is a pure field update: nothing is uploaded and
        nothing is removed.
        """
        self._begin()
        refs: list[AssetRef] = []
        if files:
            self._advance(CommitState.UPLOADING)
            try:
                refs = await self._upload(files)
            except CatalogAdminError as e:
                return self._fail(e, entity_id)
        self._advance(CommitState.WRITING)
        payload = {**fields}
        if files:
            payload.update(self._repository.asset_fields(refs, **(asset_extra or {})))
        try:
            await self._repository.update(entity_id, payload)
        except CatalogAdminError as e:
            return self._fail(e, entity_id)
        if not files:
            self._advance(CommitState.DONE)
            return CommitResult.ok(entity_id)
        new_keys = {r.key for r in refs}
        stale = [k for k in previous_keys if k and k not in new_keys]
        await self._cleanup(stale)
        logger.info(
            "Updated %s %s: %d new assets, %d superseded",
            self._repository.collection,
            entity_id,
            len(refs),
            len(stale),
        )
        return CommitResult.ok(entity_id, refs)

    async def delete(self, entity_id: str, keys: Sequence[str] = ()) -> CommitResult:
        """Delete the document, then every asset its last revision referenced."""
        self._begin()
        self._advance(CommitState.WRITING)
        try:
            await self._repository.delete(entity_id)
        except CatalogAdminError as e:
            return self._fail(e, entity_id)
        await self._cleanup(keys)
        logger.info("Deleted %s %s and %d assets", self._repository.collection, entity_id, len(keys))
        return CommitResult.ok(entity_id)
