"""
Reflex components for the FinOps UI.

- record_table: sortable, infinitely scrolling table with row actions
- search_panel: debounced search box
- filter_panel: ledger transaction filters
- transaction_forms: profiler deposit/withdraw entry and profile totals
- downloads: report and profile PDF downloads
- error_panel: fallback for a list that failed to load
- create_form: "New ..." dialog for resources that accept records
- calculator: simple margin calculator
"""

from finops_ui.components.calculator import calculator_panel
from finops_ui.components.create_form import create_button
from finops_ui.components.downloads import DownloadState, report_panel
from finops_ui.components.error_panel import error_panel
from finops_ui.components.filter_panel import filter_panel
from finops_ui.components.record_table import record_table
from finops_ui.components.search_panel import search_panel
from finops_ui.components.transaction_forms import profile_summary, transaction_form

__all__ = [
    "calculator_panel",
    "create_button",
    "DownloadState",
    "error_panel",
    "filter_panel",
    "profile_summary",
    "record_table",
    "report_panel",
    "search_panel",
    "transaction_form",
]
