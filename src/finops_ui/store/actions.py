"""
Async-style orchestrators for one collection slice.

Each operation reads what is currently applied (filters, search, sort,
pagination) from the slice, overlays the caller's overrides, dispatches
``pending``, calls the service and dispatches ``fulfilled`` or ``rejected``.

Failures are turned into a readable message (server message first, then a
generic "Failed to ..." text), dispatched as ``rejected`` and raised as
``ActionRejected`` for the caller to surface.
"""

from dataclasses import replace
from typing import Any, Mapping

from finops_ui.errors import ActionRejected, ApiError, FinOpsError, NoMorePagesError, error_message
from finops_ui.lib import logs
from finops_ui.models.common import PageEnvelope, SortConfig
from finops_ui.models.filters import clean_filters
from finops_ui.models.requests import to_payload
from finops_ui.services.resource_service import ResourceService
from finops_ui.store.slice import Action, CollectionState, Kind, Phase, initial_state
from finops_ui.store.store import Store

LOG = logs.logger(__file__)

_PAGING_KEYS = frozenset({"page", "limit", "sort_by", "sort_order", "search"})


class CollectionActions:
    """
    Operations on the slice ``name`` backed by ``service``.

    Attributes:
        store: Shared state container.
        name: Slice name inside the store.
        service: Data source for the resource.
        page_size: Records requested per page.
    """

    def __init__(
        self,
        store: Store,
        name: str,
        service: ResourceService,
        page_size: int | None = None,
        filters: Mapping[str, Any] | None = None,
    ) -> None:
        self.store = store
        self.name = name
        self.service = service
        self.spec = service.spec
        self.page_size = page_size or self.spec.default_limit
        store.register(name, initial_state(self.spec.default_sort, filters))

    @property
    def state(self) -> CollectionState:
        return self.store.get_state(self.name)

    # Queries

    def fetch(self, **overrides: Any) -> PageEnvelope:
        """Load page 1 with the applied filters, search and sort, replacing the list."""
        return self._query(Kind.FETCH, overrides, f"Failed to fetch {self._plural}")

    def search(self, query: str) -> PageEnvelope:
        """Load page 1 for ``query``."""
        text = query.strip()
        return self._query(Kind.SEARCH, {"search": text or None}, f"Failed to search {self._plural}")

    def sort(self, sort_by: str, sort_order: str) -> PageEnvelope:
        """Load page 1 ordered by ``sort_by``/``sort_order``."""
        overrides = {"sort_by": sort_by, "sort_order": sort_order}
        return self._query(Kind.SORT, overrides, f"Failed to sort {self._plural}")

    def apply_filters(self, filters: Mapping[str, Any]) -> PageEnvelope:
        """Replace the applied filters and load page 1."""
        overrides = {"filters": clean_filters(filters)}
        return self._query(Kind.FILTER, overrides, f"Failed to filter {self._plural}")

    def load_more(self) -> PageEnvelope:
        """
        Load the next page and append it.

        Raises:
            NoMorePagesError: If the last page was already loaded; no request is sent.
            ActionRejected: If the request fails; loaded records are kept.
        """
        state = self.state
        if not state.has_more:
            raise NoMorePagesError(f"No more {self._plural} to load")

        pagination = state.pagination
        params = self._params(state, {"page": pagination.next_page(), "limit": pagination.per_page or self.page_size})
        token = state.query_token
        self._dispatch(Action(Kind.LOAD_MORE, Phase.PENDING, token=token))
        try:
            envelope = self._list(params)
        except Exception as exc:
            raise self._reject(Kind.LOAD_MORE, exc, f"Failed to load more {self._plural}", token=token) from exc
        self._dispatch(Action(Kind.LOAD_MORE, Phase.FULFILLED, payload=envelope, token=token))
        return envelope

    # Mutations

    def create(self, payload: Any) -> dict:
        """
        Create a record.

        When the list shows newest first with no search or filter applied the
        new record is put at the top; otherwise the list is refetched. The
        record is already stored once the service returns, so a failed refetch
        keeps the current list and is left in ``error`` instead of raising.
        """
        body = to_payload(payload)
        self._dispatch(Action(Kind.CREATE, Phase.PENDING))
        try:
            record = self._data(self.service.create(body))
        except Exception as exc:
            raise self._reject(Kind.CREATE, exc, f"Failed to create {self._label}") from exc

        state = self.state
        prepend = (
            isinstance(record, Mapping)
            and self.spec.created_desc(state.sort_config)
            and not state.search_query
            and not clean_filters(state.filters)
        )
        self._dispatch(Action(Kind.CREATE, Phase.FULFILLED, payload=dict(record) if prepend else None))
        LOG.info("create - resource:%s prepend:%s", self.spec.name, prepend)
        if not prepend:
            try:
                self._query(Kind.REFRESH, {}, f"Failed to refresh {self._plural}")
            except ActionRejected as exc:
                LOG.warning("create - %s refetch failed: %s", self.spec.name, exc.message)
        return dict(record) if isinstance(record, Mapping) else body

    def edit(self, record_id: int, changes: Any) -> dict:
        """Update one record and patch it in place."""
        body = {**to_payload(changes), "id": record_id}
        self._dispatch(Action(Kind.EDIT, Phase.PENDING, record_id=record_id))
        try:
            updated = self._data(self.service.update(body))
        except Exception as exc:
            raise self._reject(Kind.EDIT, exc, f"Failed to update {self._label}", record_id=record_id) from exc
        patch = dict(updated) if isinstance(updated, Mapping) else body
        self._dispatch(Action(Kind.EDIT, Phase.FULFILLED, payload=patch, record_id=record_id))
        return patch

    def delete(self, record_id: int) -> None:
        """Delete one record and drop it from the list."""
        self._dispatch(Action(Kind.DELETE, Phase.PENDING, record_id=record_id))
        try:
            self._data(self.service.delete(record_id))
        except Exception as exc:
            raise self._reject(Kind.DELETE, exc, f"Failed to delete {self._label}", record_id=record_id) from exc
        self._dispatch(Action(Kind.DELETE, Phase.FULFILLED, record_id=record_id))

    def mark_done(self, record_id: int) -> dict:
        """Close a profile; the returned record is patched into the list."""
        self._dispatch(Action(Kind.MARK_DONE, Phase.PENDING, record_id=record_id))
        try:
            updated = self._data(self.service.mark_done(record_id))
        except Exception as exc:
            raise self._reject(
                Kind.MARK_DONE, exc, f"Failed to mark {self._label} as done", record_id=record_id
            ) from exc
        patch = dict(updated) if isinstance(updated, Mapping) else {"status": "done"}
        self._dispatch(Action(Kind.MARK_DONE, Phase.FULFILLED, payload=patch, record_id=record_id))
        return patch

    # Plain transitions

    def set_search(self, query: str) -> None:
        self._dispatch(Action(Kind.SET_SEARCH, payload=query))

    def clear_error(self) -> None:
        self._dispatch(Action(Kind.CLEAR_ERROR))

    def reset(self, filters: Mapping[str, Any] | None = None) -> None:
        """Return the slice to its initial state with ``filters`` applied."""
        self._dispatch(Action(Kind.RESET, payload=initial_state(self.spec.default_sort, filters)))

    # Internals

    @property
    def _label(self) -> str:
        return self.spec.label.lower()

    @property
    def _plural(self) -> str:
        return self.spec.plural.lower()

    def _params(self, state: CollectionState, overrides: Mapping[str, Any]) -> dict[str, Any]:
        overrides = dict(overrides)
        filters = overrides.pop("filters", state.filters)
        params: dict[str, Any] = dict(filters)
        params.update(
            page=1,
            limit=self.page_size,
            sort_by=state.sort_config.sort_by,
            sort_order=state.sort_config.sort_order,
            search=state.search_query or None,
        )
        params.update(overrides)
        return params

    def _query(self, kind: Kind, overrides: Mapping[str, Any], fallback: str) -> PageEnvelope:
        params = self._params(self.state, overrides)
        token = self.store.next_token()
        self._dispatch(Action(kind, Phase.PENDING, token=token))
        try:
            envelope = self._with_requested(self._list(params), params)
        except Exception as exc:
            raise self._reject(kind, exc, fallback, token=token) from exc
        self._dispatch(Action(kind, Phase.FULFILLED, payload=envelope, token=token))
        return envelope

    def _list(self, params: Mapping[str, Any]) -> PageEnvelope:
        envelope = PageEnvelope.from_response(self.service.list_page(params))
        if not envelope.success:
            raise ApiError(envelope.message or f"Failed to fetch {self._plural}")
        return envelope

    @staticmethod
    def _with_requested(envelope: PageEnvelope, params: Mapping[str, Any]) -> PageEnvelope:
        """Fill in applied values the server did not echo with what was requested."""
        requested_filters = clean_filters({k: v for k, v in params.items() if k not in _PAGING_KEYS})
        return replace(
            envelope,
            sort_applied=envelope.sort_applied or SortConfig(params["sort_by"], params["sort_order"]),
            search_applied=envelope.search_applied or params.get("search"),
            filters_applied=envelope.filters_applied or requested_filters,
        )

    @staticmethod
    def _data(response: Mapping[str, Any]) -> Any:
        if not response.get("success", True):
            raise ApiError(response.get("message") or "Request was not successful", code=response.get("code"))
        return response.get("data")

    def _reject(
        self,
        kind: Kind,
        exc: Exception,
        fallback: str,
        token: int = 0,
        record_id: int | None = None,
    ) -> ActionRejected:
        if isinstance(exc, FinOpsError):
            message = error_message(exc, fallback)
            LOG.warning("%s %s rejected: %s", self.spec.name, kind.value, message)
        else:
            message = fallback
            LOG.exception("%s %s failed unexpectedly", self.spec.name, kind.value)
        self._dispatch(
            Action(kind, Phase.REJECTED, token=token, record_id=record_id, error=message)
        )
        return ActionRejected(message)

    def _dispatch(self, action: Action) -> CollectionState:
        return self.store.dispatch(self.name, action)
