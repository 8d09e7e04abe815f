"""Utility helpers: debouncing and display formatting."""

from finops_ui.utils.debounce import Debouncer
from finops_ui.utils.formatting import display_row, format_currency, format_date, parse_date

__all__ = ["Debouncer", "display_row", "format_currency", "format_date", "parse_date"]
