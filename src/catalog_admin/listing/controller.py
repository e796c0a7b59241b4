"""Interactive list view-model: filter, sort, paginate, reorder, delete.

All state is local. Reordering is view-only and never written back; a row
is removed only after its delete has succeeded remotely.
"""

from __future__ import annotations

import inspect
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Iterable, Sequence

from catalog_admin.commit.protocol import CommitResult
from catalog_admin.config.constants import Limits
from catalog_admin.config.logging import get_logger
from catalog_admin.utils.coerce import as_str

from .rows import Row

logger = get_logger(__name__)

DeleteHandler = Callable[[Row], Awaitable[CommitResult]]
ConfirmFn = Callable[[str], "bool | Awaitable[bool]"]


@dataclass(frozen=True)
class SortSpec:
    column: str
    descending: bool = False


class DeleteStatus(str, Enum):
    DELETED = "deleted"
    CANCELLED = "cancelled"
    BUSY = "busy"
    MISSING = "missing"
    FAILED = "failed"


@dataclass(frozen=True)
class DeleteOutcome:
    status: DeleteStatus
    row_id: str
    error: str | None = None

    @property
    def success(self) -> bool:
        return self.status is DeleteStatus.DELETED


def _display(value: Any) -> str:
    text = as_str(value, default="")
    if not text and value is not None and not isinstance(value, str):
        text = str(value)
    return text


def _sort_key(value: Any) -> tuple[int, Any]:
    """Numbers (and numeric strings) before text, blanks last."""
    if value is None or value == "":
        return (2, "")
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return (0, float(value))
    text = _display(value)
    try:
        return (0, float(text.strip().lstrip("$")))
    except ValueError:
        return (1, text.lower())


class ListController:
    """View-model over a loaded list of rows.

    Args:
        rows: Initial rows in load order.
        filter_fields: Columns the free-text filter searches (OR).
        delete_handler: Runs the cascading delete for a row.
        page_size: Rows per page.
        confirm_message: Prompt passed to the confirm callback on delete.
    """

    def __init__(
        self,
        rows: Iterable[Row] = (),
        *,
        filter_fields: Sequence[str] = (),
        delete_handler: DeleteHandler | None = None,
        page_size: int = Limits.PAGE_SIZE,
        confirm_message: str = "Delete this item? This cannot be undone.",
    ):
        self._rows: list[Row] = list(rows)
        self.filter_fields = tuple(filter_fields)
        self._delete_handler = delete_handler
        self.confirm_message = confirm_message
        self.filter_text = ""
        self.sort: SortSpec | None = None
        self.page_index = 0
        self.page_size = max(1, page_size)
        self.deleting_id: str | None = None
        self._listeners: list[Callable[["ListController"], None]] = []

    # ------------------------------------------------------------------ state

    @property
    def rows(self) -> list[Row]:
        """Unfiltered rows in current (possibly reordered) order."""
        return list(self._rows)

    def subscribe(self, listener: Callable[["ListController"], None]) -> None:
        self._listeners.append(listener)

    def _changed(self) -> None:
        for listener in self._listeners:
            listener(self)

    def replace_rows(self, rows: Iterable[Row]) -> None:
        """Reload rows; filter and sort survive, manual order does not."""
        self._rows = list(rows)
        self._clamp_page()
        self._changed()

    def find(self, row_id: str) -> Row | None:
        return next((r for r in self._rows if r.id == row_id), None)

    # ----------------------------------------------------------------- filter

    def set_filter(self, text: str) -> None:
        self.filter_text = text or ""
        self.page_index = 0
        self._changed()

    def _matches(self, row: Row, query: str) -> bool:
        return any(query in _display(row.value(f)).lower() for f in self.filter_fields)

    def filtered_rows(self) -> list[Row]:
        query = self.filter_text.strip().lower()
        if not query:
            return list(self._rows)
        return [r for r in self._rows if self._matches(r, query)]

    # ------------------------------------------------------------------- sort

    def set_sort(self, column: str | None, descending: bool = False) -> None:
        self.sort = SortSpec(column, descending) if column else None
        self._changed()

    def toggle_sort(self, column: str) -> None:
        """Cycle a column through ascending, descending and unsorted."""
        if self.sort is None or self.sort.column != column:
            self.sort = SortSpec(column)
        elif not self.sort.descending:
            self.sort = SortSpec(column, descending=True)
        else:
            self.sort = None
        self._changed()

    def sorted_rows(self) -> list[Row]:
        rows = self.filtered_rows()
        if self.sort is None:
            return rows
        column = self.sort.column
        return sorted(rows, key=lambda r: _sort_key(r.value(column)), reverse=self.sort.descending)

    # ------------------------------------------------------------- pagination

    @property
    def page_count(self) -> int:
        return math.ceil(len(self.filtered_rows()) / self.page_size)

    @property
    def can_previous_page(self) -> bool:
        return self.page_index > 0

    @property
    def can_next_page(self) -> bool:
        return self.page_index + 1 < self.page_count

    def _clamp_page(self) -> None:
        self.page_index = min(max(self.page_index, 0), max(self.page_count - 1, 0))

    def set_page(self, index: int) -> None:
        self.page_index = index
        self._clamp_page()
        self._changed()

    def set_page_size(self, size: int) -> None:
        if size < 1:
            raise ValueError("Page size must be positive")
        # Keep the first visible row on screen
        first = self.page_index * self.page_size
        self.page_size = size
        self.page_index = first // size
        self._clamp_page()
        self._changed()

    def first_page(self) -> None:
        self.set_page(0)

    def previous_page(self) -> None:
        self.set_page(self.page_index - 1)

    def next_page(self) -> None:
        self.set_page(self.page_index + 1)

    def last_page(self) -> None:
        self.set_page(self.page_count - 1)

    def visible_rows(self) -> list[Row]:
        """Filter, then sort, then cut the current page."""
        start = self.page_index * self.page_size
        return self.sorted_rows()[start : start + self.page_size]

    # ---------------------------------------------------------------- reorder

    def move(self, from_index: int, to_index: int) -> None:
        """Array move: remove at ``from_index``, insert at ``to_index``."""
        size = len(self._rows)
        if not (0 <= from_index < size and 0 <= to_index < size):
            raise IndexError(f"Cannot move row {from_index} to {to_index} in {size} rows")
        if from_index == to_index:
            return
        row = self._rows.pop(from_index)
        self._rows.insert(to_index, row)
        self._changed()

    def move_row(self, active_id: str, over_id: str | None) -> bool:
        """Drag-end handler; returns False when the drop changes nothing."""
        if over_id is None or active_id == over_id:
            return False
        ids = [r.id for r in self._rows]
        if active_id not in ids or over_id not in ids:
            return False
        self.move(ids.index(active_id), ids.index(over_id))
        return True

    # ----------------------------------------------------------------- delete

    def _refuse_delete(self, row_id: str) -> DeleteOutcome | None:
        row = self.find(row_id)
        if row is None:
            return DeleteOutcome(DeleteStatus.MISSING, row_id, f"No row with id '{row_id}'")
        if self.deleting_id is not None or row.is_deleting:
            return DeleteOutcome(DeleteStatus.BUSY, row_id, "A delete is already in progress")
        return None

    async def delete_row(self, row_id: str, confirm: ConfirmFn | None = None) -> DeleteOutcome:
        """Confirm, run the cascading delete, and drop the row only on success."""
        refused = self._refuse_delete(row_id)
        if refused is not None:
            return refused
        if self._delete_handler is None:
            raise RuntimeError("ListController has no delete handler")
        if confirm is not None:
            answer = confirm(self.confirm_message)
            if inspect.isawaitable(answer):
                answer = await answer
            if not answer:
                return DeleteOutcome(DeleteStatus.CANCELLED, row_id)
            # Another delete may have started or finished while the prompt was open
            refused = self._refuse_delete(row_id)
            if refused is not None:
                return refused

        row = self.find(row_id)
        self.deleting_id = row_id
        row.is_deleting = True
        self._changed()
        try:
            result = await self._delete_handler(row)
            error = None if result.success else (result.error or "Failed to delete.")
        except Exception as e:
            logger.exception("Delete handler crashed for row %s", row_id)
            error = str(e) or "Failed to delete."
        finally:
            self.deleting_id = None
            row.is_deleting = False

        if error is not None:
            self._changed()
            return DeleteOutcome(DeleteStatus.FAILED, row_id, error)
        self._rows = [r for r in self._rows if r.id != row_id]
        self._clamp_page()
        self._changed()
        return DeleteOutcome(DeleteStatus.DELETED, row_id)
