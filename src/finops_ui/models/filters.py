"""
Filter panel values and their conversion to API query parameters.

Pickers hold ``{label, value}`` tokens chosen from autocomplete suggestions.
Before a request goes out the tokens are reduced to integer ids: duplicates
collapse to their first occurrence and tokens without a numeric id are dropped.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Iterable, Mapping

from finops_ui.models.requests import parse_amount

DEPOSIT = "deposit"
WITHDRAW = "withdraw"

# Ledger transactions encode the type as an integer.
LEDGER_TYPE_CODES = {DEPOSIT: 0, WITHDRAW: 1}


@dataclass(frozen=True, slots=True)
class FilterToken:
    """A picker selection."""

    label: str
    value: Any = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FilterToken":
        return cls(label=str(data.get("label", "")), value=data.get("value"))


def token_ids(tokens: Iterable[FilterToken | Mapping[str, Any]]) -> list[int]:
    """
    Reduce picker tokens to distinct integer ids in selection order.

    Tokens whose value cannot be read as an integer id are skipped.
    """
    ids: list[int] = []
    seen: set[int] = set()
    for token in tokens:
        value = token.get("value") if isinstance(token, Mapping) else token.value
        token_id = _as_id(value)
        if token_id is None or token_id in seen:
            continue
        seen.add(token_id)
        ids.append(token_id)
    return ids


@dataclass(slots=True)
class TransactionFilterValues:
    """
    State of the ledger transaction filter panel.

    Attributes:
        types: Selected transaction types (``"deposit"`` / ``"withdraw"``).
        min_amount: Raw minimum amount input.
        max_amount: Raw maximum amount input.
        start_date: Range start, ISO date string or date.
        end_date: Range end, ISO date string or date.
        banks: Selected bank tokens.
        cards: Selected card tokens.
        clients: Selected client tokens.
    """

    types: list[str] = field(default_factory=list)
    min_amount: str = ""
    max_amount: str = ""
    start_date: str | date | None = None
    end_date: str | date | None = None
    banks: list[FilterToken] = field(default_factory=list)
    cards: list[FilterToken] = field(default_factory=list)
    clients: list[FilterToken] = field(default_factory=list)

    def to_api(self) -> dict[str, Any]:
        """Return only the filters that are set, in API form."""
        params: dict[str, Any] = {}
        selected = {t for t in self.types if t in LEDGER_TYPE_CODES}
        # Both types selected means no type filter.
        if len(selected) == 1:
            params["transaction_type"] = LEDGER_TYPE_CODES[selected.pop()]

        min_amount = parse_amount(self.min_amount)
        max_amount = parse_amount(self.max_amount)
        if min_amount is not None:
            params["min_amount"] = float(min_amount)
        if max_amount is not None:
            params["max_amount"] = float(max_amount)

        if self.start_date:
            params["start_date"] = _iso_date(self.start_date)
        if self.end_date:
            params["end_date"] = _iso_date(self.end_date)

        for key, tokens in (
            ("bank_ids", self.banks),
            ("card_ids", self.cards),
            ("client_ids", self.clients),
        ):
            ids = token_ids(tokens)
            if ids:
                params[key] = ids
        return params

    def active_count(self) -> int:
        return len(self.to_api())


def clean_filters(filters: Mapping[str, Any] | None) -> dict[str, Any]:
    """Drop unset entries (``None``, blank strings, empty sequences)."""
    if not filters:
        return {}
    cleaned = {}
    for key, value in filters.items():
        if value is None:
            continue
        if isinstance(value, str) and not value.strip():
            continue
        if isinstance(value, (list, tuple, set, frozenset)) and not value:
            continue
        cleaned[key] = value
    return cleaned


def build_query_params(params: Mapping[str, Any]) -> list[tuple[str, str]]:
    """
    Serialize request parameters into query pairs.

    ``None`` and blank values are skipped, sequences repeat the key once per
    item, booleans become ``true``/``false`` and dates use ISO format.
    """
    pairs: list[tuple[str, str]] = []
    for key, value in clean_filters(params).items():
        values = value if isinstance(value, (list, tuple, set, frozenset)) else [value]
        for item in values:
            if item is None:
                continue
            pairs.append((key, _query_value(item)))
    return pairs


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def _iso_date(value: str | date) -> str:
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return value


def _as_id(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None
