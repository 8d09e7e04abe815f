"""
Headless controller behind every list screen.

A ``ListView`` wires the three interaction surfaces of a table to its
``CollectionActions``:

- sort headers: same column flips direction, a new column starts ascending
- search box: input is stored at once, the query is debounced
- infinite scroll: the sentinel only loads more when nothing is loading and
  another page exists

It also wraps every mutation so a failure becomes an error toast rather than
an exception, and it tracks transient row feedback (spinner while in flight,
then a saved/deleted glyph, then fade-out) from store notifications.

The Reflex layer holds one ``ListView`` per resource per browser session and
renders ``snapshot()``.
"""

import threading
import time
from collections import deque
from dataclasses import dataclass
from typing import Any, Callable, Mapping

from finops_ui import config
from finops_ui.errors import ActionRejected, NoMorePagesError
from finops_ui.lib import logs
from finops_ui.models.common import SortConfig, TransactionSummary
from finops_ui.store.actions import CollectionActions
from finops_ui.store.slice import CollectionState
from finops_ui.utils.debounce import Debouncer, TimerFactory
from finops_ui.views.row_status import RowStatusTracker

LOG = logs.logger(__file__)

SUCCESS = "success"
ERROR = "error"
INFO = "info"


@dataclass(frozen=True, slots=True)
class Toast:
    level: str
    message: str


@dataclass(frozen=True, slots=True)
class RowView:
    """
    One rendered row.

    Attributes:
        record: The record as last known.
        busy: An update or delete for this row is in flight.
        status: ``"saved"``/``"deleted"`` while the glyph shows.
        removing: The row is fading out.
        ghost: The record is already gone from the slice and is only kept for display.
    """

    record: dict
    busy: bool = False
    status: str | None = None
    removing: bool = False
    ghost: bool = False

    @property
    def id(self) -> int:
        return self.record.get("id")


@dataclass(frozen=True, slots=True)
class ListSnapshot:
    """Everything a table needs to render, captured at one instant."""

    rows: tuple[RowView, ...]
    search_input: str
    sort: SortConfig
    loading: bool
    loading_more: bool
    has_more: bool
    creating: bool
    total_count: int
    error: str | None
    summary: TransactionSummary | None
    settling: bool


class ListView:
    """
    Controller for one list screen.

    The Reflex pages debounce the search input in the browser and call
    ``submit_search`` once typing stops. ``on_search_input`` does the same
    debouncing server-side for front ends that forward every keystroke.

    Attributes:
        actions: Request orchestration for the collection.
        search_input: Text currently in the search box.
        tracker: Transient row feedback.
    """

    def __init__(
        self,
        actions: CollectionActions,
        search_wait: float = config.SEARCH_DEBOUNCE_SECONDS,
        timer_factory: TimerFactory = threading.Timer,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.actions = actions
        self.spec = actions.spec
        self.search_input = ""
        self.tracker = RowStatusTracker(clock=clock)
        self._debouncer = Debouncer(search_wait, timer_factory)
        self._toasts: deque[Toast] = deque()
        self._lock = threading.RLock()
        self._unsubscribe = actions.store.subscribe(self._on_change)

    @property
    def state(self) -> CollectionState:
        return self.actions.state

    # Loading

    def load(self, **overrides: Any) -> bool:
        """Fetch page 1; failures surface as a toast."""
        return self._attempt(lambda: self.actions.fetch(**overrides))

    def apply_filters(self, filters: Mapping[str, Any]) -> bool:
        return self._attempt(lambda: self.actions.apply_filters(filters))

    def retry(self) -> bool:
        """Clear the last error and fetch page 1 again."""
        self.actions.clear_error()
        return self.load()

    def reset(self, filters: Mapping[str, Any] | None = None) -> bool:
        """Drop search, sort and filters back to the defaults and reload."""
        self._debouncer.cancel()
        self.search_input = ""
        self.actions.reset(filters)
        return self.load()

    def toggle_sort(self, column: str) -> bool:
        """
        Sort by ``column``, flipping direction if it is already the sort column.

        On failure the slice keeps its last applied sort, which is what the
        headers keep showing.
        """
        if not self.spec.is_sortable(column):
            return False
        target = self.state.sort_config.toggled(column)
        return self._attempt(lambda: self.actions.sort(target.sort_by, target.sort_order))

    def on_search_input(self, value: str) -> None:
        """Record a keystroke and (re)start the search debounce."""
        self.search_input = value
        self._debouncer.call(self.submit_search, value)

    def submit_search(self, value: str) -> bool:
        """Run the search now. Blank input returns to the unfiltered list."""
        self.search_input = value
        query = value.strip()
        if not query:
            self.actions.set_search("")
            return self._attempt(self.actions.fetch)
        return self._attempt(lambda: self.actions.search(query))

    def on_sentinel_visible(self) -> bool:
        """
        Load the next page when the end-of-list sentinel scrolls into view.

        Returns:
            Whether a request was started.
        """
        state = self.state
        if not state.has_more or state.loading or state.loading_more:
            return False
        try:
            self.actions.load_more()
        except NoMorePagesError:
            return False
        except ActionRejected as exc:
            self.notify(ERROR, exc.message)
        return True

    # Mutations

    def create(self, payload: Any) -> bool:
        ok = self._attempt(lambda: self.actions.create(payload))
        if ok:
            self.notify(SUCCESS, f"{self.spec.label} created successfully")
            if self.state.error:
                self.notify(ERROR, self.state.error)
        return ok

    def save(self, record_id: int, changes: Mapping[str, Any]) -> bool:
        if self.state.is_busy(record_id):
            return False
        ok = self._attempt(lambda: self.actions.edit(record_id, changes))
        if ok:
            self.notify(SUCCESS, f"{self.spec.label} updated successfully")
        return ok

    def delete(self, record_id: int) -> bool:
        """Delete a row; the success toast follows once the row has faded out."""
        if self.state.is_busy(record_id):
            return False
        return self._attempt(lambda: self.actions.delete(record_id))

    def mark_done(self, record_id: int) -> bool:
        if self.state.is_busy(record_id):
            return False
        ok = self._attempt(lambda: self.actions.mark_done(record_id))
        if ok:
            self.notify(SUCCESS, f"{self.spec.label} marked as done")
        return ok

    # Rendering

    def tick(self) -> bool:
        """
        Advance row feedback.

        Returns:
            Whether any row is still showing feedback.
        """
        with self._lock:
            for _ in self.tracker.expire():
                self.notify(SUCCESS, f"{self.spec.label} deleted")
            return self.tracker.active

    def rows(self) -> list[RowView]:
        state = self.state
        with self._lock:
            rows = [
                RowView(
                    record=record,
                    busy=state.is_busy(record.get("id")),
                    status=self.tracker.status(record.get("id")),
                )
                for record in state.records
            ]
            for index, record in self.tracker.ghosts():
                record_id = record.get("id")
                rows.insert(
                    min(index, len(rows)),
                    RowView(
                        record=record,
                        status=self.tracker.status(record_id),
                        removing=self.tracker.is_removing(record_id),
                        ghost=True,
                    ),
                )
        return rows

    def snapshot(self) -> ListSnapshot:
        state = self.state
        return ListSnapshot(
            rows=tuple(self.rows()),
            search_input=self.search_input,
            sort=state.sort_config,
            loading=state.loading,
            loading_more=state.loading_more,
            has_more=state.has_more,
            creating=state.creating,
            total_count=state.total_count,
            error=state.error,
            summary=state.summary,
            settling=self.tracker.active,
        )

    def drain_toasts(self) -> list[Toast]:
        with self._lock:
            toasts = list(self._toasts)
            self._toasts.clear()
        return toasts

    def close(self) -> None:
        """Cancel the pending search and stop listening to the store."""
        self._debouncer.cancel()
        self._unsubscribe()

    # Internals

    def _attempt(self, operation: Callable[[], Any]) -> bool:
        try:
            operation()
        except ActionRejected as exc:
            self.notify(ERROR, exc.message)
            return False
        return True

    def notify(self, level: str, message: str) -> None:
        """Queue a toast for the UI."""
        with self._lock:
            self._toasts.append(Toast(level, message))

    def _on_change(self, name: str, previous: CollectionState, current: CollectionState) -> None:
        if name != self.actions.name:
            return
        with self._lock:
            for record_id in previous.updating - current.updating:
                before, after = previous.record(record_id), current.record(record_id)
                # The reducer replaces the record object only when the update succeeded.
                if after is not None and after is not before:
                    self.tracker.mark_saved(record_id)
            for record_id in previous.deleting - current.deleting:
                index = previous.index_of(record_id)
                if index is not None and current.record(record_id) is None:
                    self.tracker.mark_deleted(record_id, index, previous.records[index])
