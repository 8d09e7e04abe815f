"""
Shared list models: pagination, sort order and the paginated response envelope.

The REST API wraps every list in the same envelope::

    {"success": true,
     "data": {"data": [...], "pagination": {...}, "filters_applied": {...},
              "search_applied": "...", "sort_applied": {...}, "summary": {...}},
     "code": "...", "message": "..."}

A few endpoints use older spellings (``page_size``, ``total_records``,
``search_query``, ``sort_by``/``sort_order`` at the data level). ``PageEnvelope``
accepts both so the rest of the app only ever sees one shape.
"""

import math
from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import Any, Mapping

from benedict import benedict

SORT_ASC = "asc"
SORT_DESC = "desc"


@dataclass(frozen=True, slots=True)
class SortConfig:
    """
    Active sort column and direction.

    Attributes:
        sort_by: Column name understood by the server.
        sort_order: ``"asc"`` or ``"desc"``.
    """

    sort_by: str
    sort_order: str = SORT_DESC

    def toggled(self, column: str) -> "SortConfig":
        """Flip direction on the same column; a new column starts ascending."""
        if column == self.sort_by:
            order = SORT_ASC if self.sort_order == SORT_DESC else SORT_DESC
            return SortConfig(column, order)
        return SortConfig(column, SORT_ASC)

    def to_dict(self) -> dict:
        return {"sort_by": self.sort_by, "sort_order": self.sort_order}

    @classmethod
    def from_dict(
        cls, data: Mapping[str, Any] | None, default: "SortConfig | None" = None
    ) -> "SortConfig | None":
        if not data or not data.get("sort_by"):
            return default
        order = str(data.get("sort_order") or SORT_DESC).lower()
        return cls(str(data["sort_by"]), order)


@dataclass(frozen=True, slots=True)
class PaginationInfo:
    """
    Pagination block of the last list response.

    ``has_next_page`` always equals ``current_page < total_pages``.
    """

    current_page: int = 1
    per_page: int = 20
    total_count: int = 0
    total_pages: int = 0
    has_next_page: bool = False
    has_previous_page: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "has_next_page", self.current_page < self.total_pages)
        object.__setattr__(self, "has_previous_page", self.current_page > 1)

    def next_page(self) -> int:
        return self.current_page + 1

    def with_total_count(self, delta: int) -> "PaginationInfo":
        """Return a copy with ``total_count`` shifted by ``delta``, floored at zero."""
        return replace(self, total_count=max(0, self.total_count + delta))

    def to_dict(self) -> dict:
        return {
            "current_page": self.current_page,
            "per_page": self.per_page,
            "total_count": self.total_count,
            "total_pages": self.total_pages,
            "has_next_page": self.has_next_page,
            "has_previous_page": self.has_previous_page,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "PaginationInfo | None":
        """
        Build from a server pagination block.

        Accepts ``page_size``/``total_records`` aliases and derives
        ``total_pages`` when the server leaves it out.
        """
        if not data:
            return None
        per_page = int(data.get("per_page") or data.get("page_size") or data.get("limit") or 0)
        total_count = int(data.get("total_count") or data.get("total_records") or 0)
        total_pages = data.get("total_pages")
        if total_pages is None:
            total_pages = math.ceil(total_count / per_page) if per_page else 0
        return cls(
            current_page=int(data.get("current_page") or data.get("page") or 1),
            per_page=per_page,
            total_count=total_count,
            total_pages=int(total_pages),
        )


@dataclass(frozen=True, slots=True)
class TransactionSummary:
    """Totals for a profile's transactions."""

    total_deposits: Decimal = Decimal("0")
    total_withdrawals: Decimal = Decimal("0")
    total_charges: Decimal = Decimal("0")
    transaction_count: int = 0

    @property
    def net_amount(self) -> Decimal:
        return self.total_deposits - self.total_withdrawals - self.total_charges

    def to_dict(self) -> dict:
        return {
            "total_deposits": str(self.total_deposits),
            "total_withdrawals": str(self.total_withdrawals),
            "total_charges": str(self.total_charges),
            "net_amount": str(self.net_amount),
            "transaction_count": self.transaction_count,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "TransactionSummary | None":
        if not data:
            return None
        return cls(
            total_deposits=_decimal(data.get("total_deposits")),
            total_withdrawals=_decimal(data.get("total_withdrawals")),
            total_charges=_decimal(data.get("total_charges")),
            transaction_count=int(data.get("transaction_count") or 0),
        )


@dataclass(frozen=True, slots=True)
class PageEnvelope:
    """
    One page of records plus what the server says it applied.

    Attributes:
        records: Records on this page, in server order.
        pagination: Parsed pagination block, ``None`` if the server sent none.
        filters_applied: Filters the server actually used.
        search_applied: Search text the server actually used (``None`` if none).
        sort_applied: Sort the server actually used (``None`` if not echoed).
        summary: Optional totals (profiler transaction lists).
        success: The envelope's ``success`` flag.
        message: The envelope's ``message``.
    """

    records: tuple[dict, ...] = ()
    pagination: PaginationInfo | None = None
    filters_applied: dict = field(default_factory=dict)
    search_applied: str | None = None
    sort_applied: SortConfig | None = None
    summary: TransactionSummary | None = None
    success: bool = True
    message: str = ""

    @classmethod
    def from_response(cls, payload: Mapping[str, Any] | None) -> "PageEnvelope":
        if not payload:
            return cls(success=False, message="Empty response")
        body = benedict(dict(payload))
        records = tuple(dict(item) for item in body.get_list("data.data"))

        sort_applied = SortConfig.from_dict(body.get_dict("data.sort_applied"))
        if sort_applied is None and body.get("data.sort_by"):
            sort_applied = SortConfig.from_dict(
                {"sort_by": body.get("data.sort_by"), "sort_order": body.get("data.sort_order")}
            )

        search = body.get("data.search_applied", body.get("data.search_query"))

        return cls(
            records=records,
            pagination=PaginationInfo.from_dict(body.get_dict("data.pagination")),
            filters_applied=dict(body.get_dict("data.filters_applied")),
            search_applied=search if search else None,
            sort_applied=sort_applied,
            summary=TransactionSummary.from_dict(body.get_dict("data.summary")),
            success=bool(body.get("success", True)),
            message=str(body.get("message") or ""),
        )


@dataclass(frozen=True, slots=True)
class AutocompleteResult:
    """Suggestions returned by an autocomplete endpoint."""

    items: tuple[dict, ...] = ()
    search_query: str = ""
    result_count: int = 0
    limit_applied: int = 0

    def options(self) -> list[dict]:
        """Return ``{label, value}`` tokens for pickers."""
        return [{"label": _option_label(item), "value": item.get("id")} for item in self.items]

    @classmethod
    def from_response(cls, payload: Mapping[str, Any] | None) -> "AutocompleteResult":
        if not payload:
            return cls()
        body = benedict(dict(payload))
        items = tuple(dict(item) for item in body.get_list("data.data"))
        return cls(
            items=items,
            search_query=str(body.get("data.search_query") or ""),
            result_count=int(body.get("data.result_count") or len(items)),
            limit_applied=int(body.get("data.limit_applied") or 0),
        )


def _decimal(value: Any) -> Decimal:
    if value is None or value == "":
        return Decimal("0")
    return Decimal(str(value))


@dataclass(frozen=True, slots=True)
class DownloadFile:
    """A file the browser should save, e.g. an exported PDF."""

    filename: str
    content: bytes
    media_type: str = "application/pdf"


def _option_label(item: Mapping[str, Any]) -> str:
    if item.get("name"):
        return str(item["name"])
    parts = (item.get(key) for key in ("client_name", "bank_name", "credit_card_number"))
    return " - ".join(str(part) for part in parts if part)
