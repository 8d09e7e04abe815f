"""
Collection slice: the state of one list screen and its pure reducer.

The slice tracks:

- records and pagination from the last response
- what is applied (filters, search, sort), as echoed by the server
- ``status`` for full reloads and ``more_status`` for page continuations, so a
  background "load more" never toggles the full-page spinner
- in-flight work: ``creating`` plus the ids being updated or deleted
- ``query_token`` of the latest list-replacing request

``reduce`` never mutates its input. Responses that carry an older token than
``query_token`` are dropped so the list always shows the latest query.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Mapping

from finops_ui.models.common import PageEnvelope, PaginationInfo, SortConfig, TransactionSummary


class Status(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class Kind(str, Enum):
    FETCH = "fetch"
    SEARCH = "search"
    SORT = "sort"
    FILTER = "filter"
    REFRESH = "refresh"
    LOAD_MORE = "load_more"
    CREATE = "create"
    EDIT = "edit"
    DELETE = "delete"
    MARK_DONE = "mark_done"
    RESET = "reset"
    SET_SEARCH = "set_search"
    CLEAR_ERROR = "clear_error"


class Phase(str, Enum):
    PENDING = "pending"
    FULFILLED = "fulfilled"
    REJECTED = "rejected"


# Requests that replace the whole list.
QUERY_KINDS = frozenset({Kind.FETCH, Kind.SEARCH, Kind.SORT, Kind.FILTER, Kind.REFRESH})
# A failed query of these kinds also clears the list.
CLEARING_KINDS = frozenset({Kind.FETCH, Kind.SEARCH})
# Mutations tracked per record id in ``updating``.
UPDATE_KINDS = frozenset({Kind.EDIT, Kind.MARK_DONE})


@dataclass(frozen=True, slots=True)
class Action:
    """
    One state transition.

    Attributes:
        kind: Which operation.
        phase: Async phase, ``None`` for plain reducers.
        payload: Page envelope, record or value, depending on ``kind``.
        token: Query token of the request that produced this action.
        record_id: Target record for edit/delete/mark-done.
        error: Message for rejected actions.
    """

    kind: Kind
    phase: Phase | None = None
    payload: Any = None
    token: int = 0
    record_id: int | None = None
    error: str | None = None


@dataclass(frozen=True, slots=True)
class CollectionState:
    """Snapshot of one list screen."""

    sort_config: SortConfig
    records: tuple[dict, ...] = ()
    pagination: PaginationInfo | None = None
    filters: Mapping[str, Any] = field(default_factory=dict)
    search_query: str = ""
    status: Status = Status.IDLE
    more_status: Status = Status.IDLE
    error: str | None = None
    creating: bool = False
    updating: frozenset[int] = frozenset()
    deleting: frozenset[int] = frozenset()
    summary: TransactionSummary | None = None
    query_token: int = 0

    @property
    def loading(self) -> bool:
        return self.status is Status.LOADING

    @property
    def loading_more(self) -> bool:
        return self.more_status is Status.LOADING

    @property
    def has_more(self) -> bool:
        return self.pagination is not None and self.pagination.has_next_page

    @property
    def total_count(self) -> int:
        return self.pagination.total_count if self.pagination else 0

    def record(self, record_id: int) -> dict | None:
        for record in self.records:
            if record.get("id") == record_id:
                return record
        return None

    def index_of(self, record_id: int) -> int | None:
        for index, record in enumerate(self.records):
            if record.get("id") == record_id:
                return index
        return None

    def is_busy(self, record_id: int) -> bool:
        return record_id in self.updating or record_id in self.deleting


def initial_state(sort_config: SortConfig, filters: Mapping[str, Any] | None = None) -> CollectionState:
    return CollectionState(sort_config=sort_config, filters=dict(filters or {}))


def reduce(state: CollectionState, action: Action) -> CollectionState:
    """Apply ``action`` and return the new state."""
    if action.kind in QUERY_KINDS:
        return _reduce_query(state, action)
    if action.kind is Kind.LOAD_MORE:
        return _reduce_load_more(state, action)
    if action.kind is Kind.CREATE:
        return _reduce_create(state, action)
    if action.kind in UPDATE_KINDS:
        return _reduce_update(state, action)
    if action.kind is Kind.DELETE:
        return _reduce_delete(state, action)
    return _reduce_plain(state, action)


def _reduce_query(state: CollectionState, action: Action) -> CollectionState:
    if action.phase is Phase.PENDING:
        return replace(state, status=Status.LOADING, error=None, query_token=action.token)

    if action.token != state.query_token:
        return state

    if action.phase is Phase.FULFILLED:
        envelope: PageEnvelope = action.payload
        return replace(
            state,
            records=tuple(envelope.records),
            pagination=envelope.pagination,
            sort_config=envelope.sort_applied or state.sort_config,
            search_query=envelope.search_applied or "",
            filters=dict(envelope.filters_applied),
            summary=envelope.summary,
            status=Status.SUCCEEDED,
            error=None,
        )

    cleared = {"records": (), "pagination": None} if action.kind in CLEARING_KINDS else {}
    return replace(state, status=Status.FAILED, error=action.error, **cleared)


def _reduce_load_more(state: CollectionState, action: Action) -> CollectionState:
    if action.phase is Phase.PENDING:
        return replace(state, more_status=Status.LOADING, error=None)

    if action.token != state.query_token:
        return replace(state, more_status=Status.IDLE)

    if action.phase is Phase.FULFILLED:
        envelope: PageEnvelope = action.payload
        present = {record.get("id") for record in state.records}
        appended = tuple(r for r in envelope.records if r.get("id") not in present)
        return replace(
            state,
            records=state.records + appended,
            pagination=envelope.pagination or state.pagination,
            summary=envelope.summary or state.summary,
            more_status=Status.SUCCEEDED,
        )

    return replace(state, more_status=Status.FAILED, error=action.error)


def _reduce_create(state: CollectionState, action: Action) -> CollectionState:
    if action.phase is Phase.PENDING:
        return replace(state, creating=True, error=None)
    if action.phase is Phase.REJECTED:
        return replace(state, creating=False, error=action.error)
    if action.payload is None:
        return replace(state, creating=False)
    pagination = state.pagination.with_total_count(1) if state.pagination else None
    return replace(
        state,
        creating=False,
        records=(dict(action.payload),) + state.records,
        pagination=pagination,
    )


def _reduce_update(state: CollectionState, action: Action) -> CollectionState:
    record_id = action.record_id
    if action.phase is Phase.PENDING:
        return replace(state, updating=state.updating | {record_id}, error=None)
    updating = state.updating - {record_id}
    if action.phase is Phase.REJECTED:
        return replace(state, updating=updating, error=action.error)
    changes = action.payload or {}
    records = tuple(
        {**record, **changes} if record.get("id") == record_id else record
        for record in state.records
    )
    return replace(state, updating=updating, records=records)


def _reduce_delete(state: CollectionState, action: Action) -> CollectionState:
    record_id = action.record_id
    if action.phase is Phase.PENDING:
        return replace(state, deleting=state.deleting | {record_id}, error=None)
    deleting = state.deleting - {record_id}
    if action.phase is Phase.REJECTED:
        return replace(state, deleting=deleting, error=action.error)
    records = tuple(r for r in state.records if r.get("id") != record_id)
    pagination = state.pagination
    if pagination is not None and len(records) < len(state.records):
        pagination = pagination.with_total_count(-1)
    return replace(state, deleting=deleting, records=records, pagination=pagination)


def _reduce_plain(state: CollectionState, action: Action) -> CollectionState:
    if action.kind is Kind.RESET:
        return action.payload
    if action.kind is Kind.SET_SEARCH:
        return replace(state, search_query=action.payload or "")
    if action.kind is Kind.CLEAR_ERROR:
        return replace(state, error=None)
    raise ValueError(f"Unhandled action: {action.kind}")
