"""
Display formatting for table cells.

Provides helpers for:
- Date parsing (ISO dates, ISO datetimes and d/m/Y input)
- Currency and percentage formatting
- Turning a record into the string-only row a table renders
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Mapping

from finops_ui import config
from finops_ui.models import resources
from finops_ui.models.resources import Column, ResourceSpec

_DATE_FORMATS = ("%d/%m/%Y", "%d/%m/%y", "%Y-%m-%d")

LEDGER_TYPE_LABELS = {0: "Deposit", 1: "Withdraw"}


def parse_date(value: str | None) -> datetime | None:
    """
    Parse an ISO date/datetime or a d/m/Y date.

    Returns ``None`` for blank or unrecognised input.
    """
    text = (value or "").strip()
    if not text:
        return None
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        pass
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def format_currency(value: Any, currency: str = config.CURRENCY) -> str:
    """Format an amount like ``INR 1,234.56``; blank for missing values."""
    if value is None or value == "":
        return ""
    return f"{currency} {Decimal(str(value)):,.2f}"


def format_date(value: Any, with_time: bool = False) -> str:
    parsed = parse_date(str(value)) if value else None
    if parsed is None:
        return str(value or "")
    return parsed.strftime("%d %b %Y, %H:%M" if with_time else "%d %b %Y")


def format_cell(column: Column, value: Any) -> str:
    """Render one cell according to the column kind."""
    if column.kind == resources.AMOUNT:
        return format_currency(value)
    if column.kind == resources.DATE:
        return format_date(value)
    if column.kind == resources.DATETIME:
        return format_date(value, with_time=True)
    if column.kind == resources.LEDGER_TYPE:
        return LEDGER_TYPE_LABELS.get(_as_int(value), str(value if value is not None else ""))
    if column.kind == resources.PERCENT:
        return f"{Decimal(str(value or 0)):.2f}%"
    if column.kind == resources.STATUS:
        return str(value or "").title()
    if column.kind == resources.COUNT:
        return str(value or 0)
    return "" if value is None else str(value)


def display_row(spec: ResourceSpec, record: Mapping[str, Any]) -> dict[str, str]:
    """Return the formatted cells of ``record`` keyed by column, plus ``id``."""
    row = {column.key: format_cell(column, record.get(column.key)) for column in spec.columns}
    row["id"] = str(record.get("id", ""))
    if spec.edit_field:
        row["edit_value"] = str(record.get(spec.edit_field) or "")
    return row


def _as_int(value: Any) -> int | None:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None
