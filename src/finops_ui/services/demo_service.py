"""
In-memory implementation of ResourceService.

Useful for:
- Local development without the REST API (``FINOPS_UI_SERVICE=demo``)
- Exercising the list machinery end to end in tests

Responses use the same envelope as the API, including echoed
``filters_applied``/``search_applied``/``sort_applied`` and pagination, so the
action layer cannot tell the difference.
"""

import math
import threading
from datetime import datetime
from typing import Any, Callable, Mapping, Sequence

from finops_ui.errors import ApiError
from finops_ui.lib import logs
from finops_ui.models.common import SORT_DESC, TransactionSummary
from finops_ui.models.filters import clean_filters
from finops_ui.models.resources import ResourceSpec
from finops_ui.services.resource_service import ResourceService

LOG = logs.logger(__file__)

_AMOUNT_KEYS = ("transaction_amount", "amount")
_PAGING_KEYS = {"page", "limit", "sort_by", "sort_order", "search"}


class DemoResourceService(ResourceService):
    """
    Resource service over a list of dicts.

    Attributes:
        records: Backing records; mutated in place by create/update/delete.
        predicate: Optional filter applied before anything else, used for
            views such as the active-profile dashboard.
    """

    def __init__(
        self,
        spec: ResourceSpec,
        records: list[dict] | None = None,
        predicate: Callable[[dict], bool] | None = None,
    ) -> None:
        super().__init__(spec)
        self.records: list[dict] = records if records is not None else []
        self.predicate = predicate
        self.calls: list[tuple[str, Any]] = []
        self._lock = threading.Lock()

    def list_page(self, params: Mapping[str, Any]) -> dict:
        self.calls.append(("list_page", dict(params)))
        page = max(int(params.get("page") or 1), 1)
        limit = max(int(params.get("limit") or self.spec.default_limit), 1)
        sort_by = params.get("sort_by") or self.spec.default_sort.sort_by
        sort_order = (params.get("sort_order") or self.spec.default_sort.sort_order).lower()
        search = (params.get("search") or "").strip()
        filters = clean_filters({k: v for k, v in params.items() if k not in _PAGING_KEYS})

        with self._lock:
            rows = [r for r in self.records if self.predicate is None or self.predicate(r)]
        rows = [r for r in rows if _matches_search(r, search) and _matches_filters(r, filters)]
        rows = _sorted(rows, sort_by, sort_order)

        total = len(rows)
        total_pages = math.ceil(total / limit) if total else 0
        start = (page - 1) * limit
        data = {
            "data": [dict(r) for r in rows[start : start + limit]],
            "pagination": {
                "current_page": page,
                "per_page": limit,
                "total_count": total,
                "total_pages": total_pages,
                "has_next_page": page < total_pages,
                "has_previous_page": page > 1,
            },
            "filters_applied": filters,
            "search_applied": search or None,
            "sort_applied": {"sort_by": sort_by, "sort_order": sort_order},
        }
        if self.spec.name == "profiler_transactions":
            data["summary"] = _summary(rows).to_dict()
        return _ok(data, f"{self.spec.plural} retrieved successfully")

    def autocomplete(self, search: str, limit: int = 5) -> dict:
        self.calls.append(("autocomplete", search))
        needle = search.strip().lower()
        with self._lock:
            items = [
                {"id": r["id"], "name": _display_name(r)}
                for r in self.records
                if needle and needle in _display_name(r).lower()
            ]
        items = items[:limit]
        return _ok(
            {"data": items, "search_query": search, "result_count": len(items), "limit_applied": limit},
            "Suggestions retrieved successfully",
        )

    def create(self, payload: Mapping[str, Any]) -> dict:
        self._require(self.spec.supports_create, "create")
        self.calls.append(("create", dict(payload)))
        record = dict(payload)
        if "amount" in record and record.get("transaction_type") == "withdraw":
            pct = float(record.get("withdraw_charges_percentage") or 0)
            record["withdraw_charges_amount"] = round(float(record["amount"]) * pct / 100, 2)
        with self._lock:
            record["id"] = max((r["id"] for r in self.records), default=0) + 1
            record.update(_created_fields(self.spec.created_column))
            self.records.append(record)
        return _ok(dict(record), f"{self.spec.label} created successfully")

    def update(self, payload: Mapping[str, Any]) -> dict:
        self._require(self.spec.supports_update, "update")
        self.calls.append(("update", dict(payload)))
        changes = dict(payload)
        record_id = changes.pop("id", None)
        with self._lock:
            record = self._find(record_id)
            record.update(changes)
            if self.spec.created_column == "create_date":
                now = datetime.now()
                record.update(modify_date=now.date().isoformat(), modify_time=now.time().isoformat(timespec="seconds"))
            else:
                record["updated_at"] = datetime.now().isoformat(timespec="seconds")
            return _ok(dict(record), f"{self.spec.label} updated successfully")

    def delete(self, record_id: int) -> dict:
        self._require(self.spec.supports_delete, "delete")
        self.calls.append(("delete", record_id))
        with self._lock:
            record = self._find(record_id)
            self.records.remove(record)
        return _ok({"id": record_id}, f"{self.spec.label} deleted successfully")

    def mark_done(self, record_id: int) -> dict:
        self.calls.append(("mark_done", record_id))
        with self._lock:
            record = self._find(record_id)
            record.update(status="done", marked_done_at=datetime.now().isoformat(timespec="seconds"))
            return _ok(dict(record), "Profile marked as done")

    def summary(self, profile_id: int) -> TransactionSummary:
        with self._lock:
            rows = [r for r in self.records if r.get("profile_id") == profile_id]
        return _summary(rows)

    def _find(self, record_id: Any) -> dict:
        for record in self.records:
            if record["id"] == record_id:
                return record
        raise ApiError(f"{self.spec.label} not found", status_code=404, code="NOT_FOUND")


def active_profiles(record: Mapping[str, Any]) -> bool:
    """Dashboard predicate: active profiles with money left on them."""
    return record.get("status") == "active" and float(record.get("remaining_balance") or 0) > 0


def _ok(data: Any, message: str) -> dict:
    return {"success": True, "data": data, "code": "SUCCESS", "message": message}


def _display_name(record: Mapping[str, Any]) -> str:
    if record.get("name"):
        return str(record["name"])
    return " - ".join(str(record[key]) for key in ("client_name", "bank_name") if record.get(key))


def _matches_search(record: Mapping[str, Any], search: str) -> bool:
    if not search:
        return True
    needle = search.lower()
    return any(isinstance(v, str) and needle in v.lower() for v in record.values())


def _matches_filters(record: Mapping[str, Any], filters: Mapping[str, Any]) -> bool:
    for key, value in filters.items():
        if key.endswith("_ids"):
            if record.get(key[:-1]) not in set(_as_list(value)):
                return False
        elif key == "min_amount":
            if _amount(record) < float(value):
                return False
        elif key == "max_amount":
            if _amount(record) > float(value):
                return False
        elif key == "start_date":
            if _created(record)[:10] < str(value)[:10]:
                return False
        elif key == "end_date":
            if _created(record)[:10] > str(value)[:10]:
                return False
        elif key in record and record[key] != value:
            return False
    return True


def _sorted(rows: Sequence[dict], sort_by: str, sort_order: str) -> list[dict]:
    def key(record: dict) -> tuple:
        value = record.get(sort_by)
        if isinstance(value, str):
            value = value.lower()
        return (value is None, value if value is not None else 0, record["id"])

    present = [r for r in rows if r.get(sort_by) is not None]
    missing = [r for r in rows if r.get(sort_by) is None]
    ordered = sorted(present, key=key, reverse=sort_order == SORT_DESC)
    return ordered + missing


def _summary(rows: Sequence[Mapping[str, Any]]) -> TransactionSummary:
    deposits = sum(float(r.get("amount") or 0) for r in rows if r.get("transaction_type") == "deposit")
    withdrawals = sum(float(r.get("amount") or 0) for r in rows if r.get("transaction_type") == "withdraw")
    charges = sum(float(r.get("withdraw_charges_amount") or 0) for r in rows)
    return TransactionSummary.from_dict(
        {
            "total_deposits": round(deposits, 2),
            "total_withdrawals": round(withdrawals, 2),
            "total_charges": round(charges, 2),
            "transaction_count": len(rows),
        }
    )


def _created_fields(created_column: str) -> dict:
    now = datetime.now()
    if created_column == "create_date":
        return {"create_date": now.date().isoformat(), "create_time": now.time().isoformat(timespec="seconds")}
    return {created_column: now.isoformat(timespec="seconds")}


def _amount(record: Mapping[str, Any]) -> float:
    for key in _AMOUNT_KEYS:
        if record.get(key) is not None:
            return float(record[key])
    return 0.0


def _created(record: Mapping[str, Any]) -> str:
    return str(record.get("create_date") or record.get("created_at") or "")


def _as_list(value: Any) -> list:
    return list(value) if isinstance(value, (list, tuple, set, frozenset)) else [value]
