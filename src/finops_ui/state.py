"""
Reflex state for the finops UI.

Every list screen has a state class built from ``CollectionStateMixin``. The
state itself only holds render-ready vars; the live controller (store, row
tracker, in-flight sets) is a ``ListView`` looked up per browser session in
``views.registry``. Each handler forwards the interaction to the controller,
copies its snapshot into vars and returns the queued toasts.
"""

import asyncio
from typing import Any

import reflex as rx
from reflex.event import EventSpec

from finops_ui import config
from finops_ui.errors import FinOpsError, error_message
from finops_ui.lib import logs
from finops_ui.models.filters import FilterToken, TransactionFilterValues
from finops_ui.models.requests import MarginBreakdown, margin_breakdown
from finops_ui.models.resources import ResourceSpec
from finops_ui.services import get_autocomplete
from finops_ui.utils.formatting import display_row, format_currency
from finops_ui.views import registry
from finops_ui.views.forms import (
    CREATE_FIELDS,
    DepositForm,
    LedgerTransactionForm,
    WithdrawForm,
    blank_values,
    build_form,
    submit_form,
)
from finops_ui.views.list_view import ERROR, SUCCESS, ListView, RowView, Toast

LOG = logs.logger(__file__)

SEARCH_DEBOUNCE_MS = int(config.SEARCH_DEBOUNCE_SECONDS * 1000)
AUTOCOMPLETE_DEBOUNCE_MS = int(config.AUTOCOMPLETE_DEBOUNCE_SECONDS * 1000)
PICKER_RESOURCES = {"banks": "banks", "cards": "cards", "clients": "clients"}


def toast_events(toasts: list[Toast]) -> list[EventSpec]:
    """Convert queued controller toasts to Reflex toast events."""
    events = []
    for toast in toasts:
        if toast.level == ERROR:
            events.append(rx.toast.error(toast.message))
        elif toast.level == SUCCESS:
            events.append(rx.toast.success(toast.message))
        else:
            events.append(rx.toast.info(toast.message))
    return events


def row_dict(spec: ResourceSpec, row: RowView) -> dict[str, str]:
    """Flatten a row view into the string dict the table renders."""
    cells = display_row(spec, row.record)
    cells.update(
        row_busy="true" if row.busy else "",
        row_status=row.status or "",
        row_removing="true" if row.removing else "",
        row_ghost="true" if row.ghost else "",
    )
    return cells


class CollectionStateMixin(rx.State, mixin=True):
    """Render vars and event handlers shared by every list screen."""

    rows: list[dict[str, str]] = []
    search_value: str = ""
    sort_by: str = ""
    sort_order: str = "desc"
    loading: bool = False
    loading_more: bool = False
    has_more: bool = False
    creating: bool = False
    total_count: int = 0
    error: str = ""
    loaded: bool = False
    settling: bool = False

    @rx.var
    def is_empty(self) -> bool:
        return self.loaded and not self.loading and len(self.rows) == 0 and self.error == ""

    @rx.var
    def load_failed(self) -> bool:
        return self.error != "" and len(self.rows) == 0 and not self.loading

    @rx.var
    def result_summary(self) -> str:
        noun = "record" if self.total_count == 1 else "records"
        base = f"{self.total_count} {noun}"
        if self.search_value.strip():
            return f'{base} matching "{self.search_value.strip()}"'
        return base

    @rx.event
    def on_load(self):
        """Fetch the first page when the page opens."""
        LOG.info("on_load - resource:%s", self._resource())
        view = self._view()
        view.load()
        self.loaded = True
        return self._publish(view)

    @rx.event
    def retry(self):
        """Error panel "Try again"."""
        view = self._view()
        view.retry()
        return self._publish(view)

    @rx.event
    def refresh(self):
        """Re-render from the controller without a request."""
        return self._publish(self._view())

    @rx.event
    def search(self, value: str):
        """Run a search; the input debounces keystrokes before calling this."""
        view = self._view()
        self.search_value = value
        view.submit_search(value)
        return self._publish(view)

    @rx.event
    def sort(self, column: str):
        view = self._view()
        view.toggle_sort(column)
        return self._publish(view)

    @rx.event
    def load_more(self):
        """Infinite scroll callback."""
        view = self._view()
        view.on_sentinel_visible()
        return self._publish(view)

    @rx.event
    def save_row(self, form_data: dict[str, Any]):
        view = self._view()
        field = view.spec.edit_field
        if field is None:
            return None
        record_id = int(form_data["id"])
        view.save(record_id, {field: str(form_data.get("value", "")).strip()})
        return self._publish(view, settle=True)

    @rx.event
    def delete_row(self, record_id: str):
        view = self._view()
        view.delete(int(record_id))
        return self._publish(view, settle=True)

    @rx.event
    def mark_done(self, record_id: str):
        view = self._view()
        view.mark_done(int(record_id))
        return self._publish(view, settle=True)

    @rx.event(background=True)
    async def settle_rows(self):
        """Advance saved/deleted row feedback until every row has settled."""
        while True:
            await asyncio.sleep(config.ROW_SETTLE_INTERVAL)
            async with self:
                view = self._view()
                active = view.tick()
                self._sync(view)
                toasts = view.drain_toasts()
            if toasts:
                yield toast_events(toasts)
            if not active:
                break

    def _resource(self) -> str:
        raise NotImplementedError

    def _slice(self) -> str:
        return self._resource()

    def _filters(self) -> dict[str, Any] | None:
        return None

    def _view(self) -> ListView:
        token = self.router.session.client_token
        return registry.session(token).view(self._resource(), self._slice(), self._filters())

    def _sync(self, view: ListView) -> None:
        snapshot = view.snapshot()
        self.rows = [row_dict(view.spec, row) for row in snapshot.rows]
        self.search_value = snapshot.search_input
        self.sort_by = snapshot.sort.sort_by
        self.sort_order = snapshot.sort.sort_order
        self.loading = snapshot.loading
        self.loading_more = snapshot.loading_more
        self.has_more = snapshot.has_more
        self.creating = snapshot.creating
        self.total_count = snapshot.total_count
        self.error = snapshot.error or ""
        self.settling = snapshot.settling

    def _publish(self, view: ListView, settle: bool = False) -> list:
        self._sync(view)
        events: list = toast_events(view.drain_toasts())
        if settle and view.tracker.active:
            events.append(self.__class__.settle_rows)
        return events


class TransactionsState(CollectionStateMixin, rx.State):
    """Ledger transactions, with the filter panel."""

    filter_types: list[str] = []
    filter_min_amount: str = ""
    filter_max_amount: str = ""
    filter_start_date: str = ""
    filter_end_date: str = ""
    picker_query: dict[str, str] = {"banks": "", "cards": "", "clients": ""}
    picker_options: dict[str, list[dict[str, str]]] = {"banks": [], "cards": [], "clients": []}
    picked: dict[str, list[dict[str, str]]] = {"banks": [], "cards": [], "clients": []}
    active_filters: int = 0

    def _resource(self) -> str:
        return "transactions"

    @rx.event
    def toggle_type(self, kind: str):
        if kind in self.filter_types:
            self.filter_types = [t for t in self.filter_types if t != kind]
        else:
            self.filter_types = self.filter_types + [kind]

    @rx.event
    def set_filter_field(self, name: str, value: str):
        if name == "min_amount":
            self.filter_min_amount = value
        elif name == "max_amount":
            self.filter_max_amount = value
        elif name == "start_date":
            self.filter_start_date = value
        elif name == "end_date":
            self.filter_end_date = value

    @rx.event
    def lookup(self, picker: str, value: str):
        """Autocomplete for the bank/card/client pickers."""
        self.picker_query = {**self.picker_query, picker: value}
        try:
            options = get_autocomplete(PICKER_RESOURCES[picker]).options(value)
        except FinOpsError as exc:
            LOG.warning("Autocomplete failed for %s: %s", picker, exc)
            return rx.toast.error(error_message(exc, f"Failed to search {picker}"))
        self.picker_options = {**self.picker_options, picker: options}

    @rx.event
    def pick(self, picker: str, label: str, value: str):
        chosen = self.picked.get(picker, [])
        if all(token["value"] != value for token in chosen):
            chosen = chosen + [{"label": label, "value": value}]
        self.picked = {**self.picked, picker: chosen}
        self.picker_query = {**self.picker_query, picker: ""}
        self.picker_options = {**self.picker_options, picker: []}

    @rx.event
    def unpick(self, picker: str, value: str):
        chosen = [token for token in self.picked.get(picker, []) if token["value"] != value]
        self.picked = {**self.picked, picker: chosen}

    @rx.event
    def apply_filters(self):
        values = self._filter_values()
        self.active_filters = values.active_count()
        view = self._view()
        view.apply_filters(values.to_api())
        return self._publish(view)

    @rx.event
    def clear_filters(self):
        self.filter_types = []
        self.filter_min_amount = ""
        self.filter_max_amount = ""
        self.filter_start_date = ""
        self.filter_end_date = ""
        self.picked = {"banks": [], "cards": [], "clients": []}
        self.active_filters = 0
        view = self._view()
        view.reset()
        return self._publish(view)

    def _filter_values(self) -> TransactionFilterValues:
        def tokens(picker: str) -> list[FilterToken]:
            return [FilterToken.from_dict(token) for token in self.picked.get(picker, [])]

        return TransactionFilterValues(
            types=list(self.filter_types),
            min_amount=self.filter_min_amount,
            max_amount=self.filter_max_amount,
            start_date=self.filter_start_date or None,
            end_date=self.filter_end_date or None,
            banks=tokens("banks"),
            cards=tokens("cards"),
            clients=tokens("clients"),
        )


class ClientsState(CollectionStateMixin, rx.State):
    def _resource(self) -> str:
        return "clients"


class BanksState(CollectionStateMixin, rx.State):
    def _resource(self) -> str:
        return "banks"


class CardsState(CollectionStateMixin, rx.State):
    def _resource(self) -> str:
        return "cards"


class ProfilerClientsState(CollectionStateMixin, rx.State):
    def _resource(self) -> str:
        return "profiler_clients"


class ProfilerBanksState(CollectionStateMixin, rx.State):
    def _resource(self) -> str:
        return "profiler_banks"


class ProfilesState(CollectionStateMixin, rx.State):
    def _resource(self) -> str:
        return "profiler_profiles"


class DashboardState(CollectionStateMixin, rx.State):
    """Active profiles that still have a remaining balance."""

    def _resource(self) -> str:
        return "profiler_dashboard"


class ProfilerTransactionsState(CollectionStateMixin, rx.State):
    """Profiler transactions, optionally narrowed to one profile."""

    profile_filter: str = ""
    profile_totals: dict[str, str] = {}

    def _resource(self) -> str:
        return "profiler_transactions"

    @rx.event
    def filter_profile(self, profile_id: str):
        """Show one profile's transactions and its totals; blank shows all."""
        self.profile_filter = profile_id.strip()
        self.profile_totals = {}
        view = self._view()
        if not self.profile_filter.isdigit():
            self.profile_filter = ""
            view.reset()
            return self._publish(view)

        view.apply_filters({"profile_id": int(self.profile_filter)})
        events = self._publish(view)
        try:
            totals = view.actions.service.summary(int(self.profile_filter))
        except FinOpsError as exc:
            LOG.warning("Profile summary failed for %s: %s", self.profile_filter, exc)
            return events + [rx.toast.error(error_message(exc, "Failed to load profile summary"))]
        self.profile_totals = _summary_dict(totals)
        return events


class TransactionFormState(rx.State):
    """Deposit/withdraw entry against a profiler profile."""

    kind: str = "deposit"
    profile_id: str = ""
    profile_label: str = ""
    profile_query: str = ""
    profile_options: list[dict[str, str]] = []
    amount: str = ""
    charges_percentage: str = ""
    notes: str = ""
    errors: dict[str, str] = {}

    @rx.var
    def charge_amount(self) -> str:
        return format_currency(self._withdraw_form().breakdown.charge_amount)

    @rx.var
    def adjusted_amount(self) -> str:
        return format_currency(self._withdraw_form().breakdown.adjusted_amount)

    @rx.event
    def set_kind(self, kind: str):
        self.kind = kind
        self.errors = {}

    @rx.event
    def set_amount(self, value: str):
        self.amount = value

    @rx.event
    def set_charges_percentage(self, value: str):
        self.charges_percentage = value

    @rx.event
    def set_notes(self, value: str):
        self.notes = value

    @rx.event
    def lookup_profiles(self, value: str):
        self.profile_query = value
        try:
            options = get_autocomplete("profiler_profiles").options(value)
        except FinOpsError as exc:
            LOG.warning("Profile autocomplete failed: %s", exc)
            return rx.toast.error(error_message(exc, "Failed to search profiles"))
        self.profile_options = options

    @rx.event
    def pick_profile(self, label: str, value: str):
        self.profile_id = value
        self.profile_label = label
        self.profile_query = ""
        self.profile_options = []

    @rx.event
    def submit(self):
        view = registry.session(self.router.session.client_token).view("profiler_transactions")
        form = self._withdraw_form() if self.kind == "withdraw" else DepositForm(
            profile_id=self.profile_id, amount=self.amount, notes=self.notes
        )
        created, errors = submit_form(view, form)
        self.errors = errors
        if created:
            self.amount = ""
            self.charges_percentage = ""
            self.notes = ""
        return toast_events(view.drain_toasts()) + [ProfilerTransactionsState.refresh]

    def _withdraw_form(self) -> WithdrawForm:
        return WithdrawForm(
            profile_id=self.profile_id,
            amount=self.amount,
            charges_percentage=self.charges_percentage,
            notes=self.notes,
        )


class CalculatorState(rx.State):
    """Simple margin calculator; nothing here is saved."""

    amount: str = ""
    our_percentage: str = ""
    bank_percentage: str = ""
    platform_fee: str = ""

    def _breakdown(self) -> MarginBreakdown:
        return margin_breakdown(self.amount, self.our_percentage, self.bank_percentage, self.platform_fee)

    @rx.var
    def lines(self) -> list[list[str]]:
        b = self._breakdown()
        return [
            ["Bank rate", f"{b.bank_percentage:.2f}%"],
            ["GST on bank", f"{b.gst_on_bank_percentage:.2f}%"],
            ["Bank with GST", f"{b.bank_with_gst_percentage:.2f}%"],
            ["Our charge", f"{b.our_percentage:.2f}%"],
            ["Markup", f"{b.markup_percentage:.2f}%"],
            ["Gross earnings", format_currency(b.gross_earnings)],
            ["Platform fee", format_currency(b.platform_fee)],
            ["Customer payable", format_currency(b.payable)],
        ]

    @rx.var
    def net_profit(self) -> str:
        return format_currency(self._breakdown().net_profit)

    @rx.var
    def is_loss(self) -> bool:
        return self._breakdown().net_profit < 0

    @rx.event
    def set_field(self, name: str, value: str):
        if name in {"amount", "our_percentage", "bank_percentage", "platform_fee"}:
            setattr(self, name, value)

    @rx.event
    def clear(self):
        self.amount = ""
        self.our_percentage = ""
        self.bank_percentage = ""
        self.platform_fee = ""


class RecordFormState(rx.State):
    """
    The "New ..." dialog shared by every list screen that accepts records.

    ``open_resource`` names the resource whose dialog is showing; values are
    raw strings keyed by field, validated by the resource's form on submit.
    """

    open_resource: str = ""
    values: dict[str, str] = {}
    picked_labels: dict[str, str] = {}
    options: dict[str, list[dict[str, str]]] = {}
    errors: dict[str, str] = {}

    @rx.var
    def charge_preview(self) -> str:
        """Charge and total debit for a ledger withdrawal being entered."""
        if self.open_resource != "transactions" or self.values.get("kind") != "withdraw":
            return ""
        form = build_form("transactions", self.values)
        if not isinstance(form, LedgerTransactionForm):
            return ""
        breakdown = form.breakdown
        return (
            f"Charges {format_currency(breakdown.charge_amount)}, "
            f"total debit {format_currency(breakdown.adjusted_amount)}"
        )

    @rx.event
    def open_form(self, resource: str):
        self.open_resource = resource
        self.values = blank_values(resource)
        self.picked_labels = {}
        self.options = {f.key: [] for f in CREATE_FIELDS.get(resource, ()) if f.kind == "picker"}
        self.errors = {}

    @rx.event
    def set_open(self, is_open: bool):
        if not is_open:
            self.open_resource = ""

    @rx.event
    def set_value(self, name: str, value: str):
        self.values = {**self.values, name: value}

    @rx.event
    def set_flag(self, name: str, checked: bool):
        self.values = {**self.values, name: "true" if checked else ""}

    @rx.event
    def lookup(self, name: str, source: str, value: str):
        try:
            options = get_autocomplete(source).options(value)
        except FinOpsError as exc:
            LOG.warning("Autocomplete failed for %s: %s", source, exc)
            return rx.toast.error(error_message(exc, "Failed to load suggestions"))
        self.options = {**self.options, name: options}

    @rx.event
    def pick(self, name: str, label: str, value: str):
        self.values = {**self.values, name: value}
        self.picked_labels = {**self.picked_labels, name: label}
        self.options = {**self.options, name: []}

    @rx.event
    def submit(self):
        resource = self.open_resource
        if not resource:
            return None
        view = registry.session(self.router.session.client_token).view(resource)
        created, errors = submit_form(view, build_form(resource, self.values))
        self.errors = errors
        events = toast_events(view.drain_toasts())
        if created:
            self.open_resource = ""
            self.values = blank_values(resource)
            self.picked_labels = {}
        page = PAGE_STATES.get(resource)
        if page is not None:
            events.append(page.refresh)
        return events


# Resource to the list screen state that renders it.
PAGE_STATES: dict[str, type[CollectionStateMixin]] = {
    "transactions": TransactionsState,
    "clients": ClientsState,
    "banks": BanksState,
    "cards": CardsState,
    "profiler_clients": ProfilerClientsState,
    "profiler_banks": ProfilerBanksState,
    "profiler_profiles": ProfilesState,
    "profiler_transactions": ProfilerTransactionsState,
}


def _summary_dict(summary) -> dict[str, str]:
    if summary is None:
        return {}
    return {
        "total_deposits": format_currency(summary.total_deposits),
        "total_withdrawals": format_currency(summary.total_withdrawals),
        "total_charges": format_currency(summary.total_charges),
        "net_amount": format_currency(summary.net_amount),
    }
