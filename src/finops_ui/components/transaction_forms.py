"""
Profiler transaction entry and per-profile totals.

The deposit/withdraw form validates locally before anything is sent; the
withdraw variant previews the charge and the amount including charges as the
user types.
"""

import reflex as rx

from finops_ui.components.downloads import download_button
from finops_ui.state import (
    AUTOCOMPLETE_DEBOUNCE_MS,
    ProfilerTransactionsState,
    TransactionFormState,
)


def transaction_form() -> rx.Component:
    return rx.box(
        rx.heading("New transaction", size="3", as_="h3"),
        rx.segmented_control.root(
            rx.segmented_control.item("Deposit", value="deposit"),
            rx.segmented_control.item("Withdraw", value="withdraw"),
            value=TransactionFormState.kind,
            on_change=TransactionFormState.set_kind,
        ),
        _profile_picker(),
        rx.grid(
            _field(
                "Amount",
                "amount",
                rx.input(
                    type="number",
                    value=TransactionFormState.amount,
                    on_change=TransactionFormState.set_amount,
                ),
            ),
            rx.cond(
                TransactionFormState.kind == "withdraw",
                _field(
                    "Charges %",
                    "charges_percentage",
                    rx.input(
                        type="number",
                        value=TransactionFormState.charges_percentage,
                        on_change=TransactionFormState.set_charges_percentage,
                    ),
                ),
                None,
            ),
            columns="2",
            spacing="3",
            width="100%",
        ),
        rx.cond(TransactionFormState.kind == "withdraw", _breakdown(), None),
        _field(
            "Notes",
            "notes",
            rx.text_area(value=TransactionFormState.notes, on_change=TransactionFormState.set_notes),
        ),
        rx.button(
            rx.cond(ProfilerTransactionsState.creating, rx.spinner(size="1"), rx.icon("plus", size=16)),
            "Record transaction",
            on_click=TransactionFormState.submit,
            disabled=ProfilerTransactionsState.creating,
        ),
        class_name="card form-card",
    )


def profile_summary() -> rx.Component:
    """Totals for the profile the transaction list is narrowed to."""
    return rx.cond(
        ProfilerTransactionsState.profile_filter != "",
        rx.box(
            rx.hstack(
                rx.heading("Profile totals", size="3", as_="h3"),
                download_button(ProfilerTransactionsState.profile_filter),
                rx.button(
                    "Show all",
                    size="1",
                    variant="soft",
                    on_click=ProfilerTransactionsState.filter_profile(""),
                ),
                align="center",
                spacing="2",
            ),
            rx.grid(
                _stat("Deposits", ProfilerTransactionsState.profile_totals["total_deposits"]),
                _stat("Withdrawals", ProfilerTransactionsState.profile_totals["total_withdrawals"]),
                _stat("Charges", ProfilerTransactionsState.profile_totals["total_charges"]),
                _stat("Net", ProfilerTransactionsState.profile_totals["net_amount"]),
                columns="4",
                spacing="3",
            ),
            class_name="card summary-card",
        ),
        None,
    )


def _profile_picker() -> rx.Component:
    return _field(
        "Profile",
        "profile_id",
        rx.box(
            rx.cond(
                TransactionFormState.profile_label != "",
                rx.badge(TransactionFormState.profile_label, variant="soft"),
                None,
            ),
            rx.input(
                placeholder="Search profiles...",
                value=TransactionFormState.profile_query,
                on_change=TransactionFormState.lookup_profiles,
                debounce=AUTOCOMPLETE_DEBOUNCE_MS,
            ),
            rx.foreach(
                TransactionFormState.profile_options,
                lambda option: rx.box(
                    option["label"],
                    class_name="picker-option",
                    on_click=[
                        TransactionFormState.pick_profile(option["label"], option["value"]),
                        ProfilerTransactionsState.filter_profile(option["value"]),
                    ],
                ),
            ),
            class_name="picker",
        ),
    )


def _breakdown() -> rx.Component:
    return rx.hstack(
        rx.text("Charges: ", rx.text.span(TransactionFormState.charge_amount, weight="bold")),
        rx.text("Total debit: ", rx.text.span(TransactionFormState.adjusted_amount, weight="bold")),
        spacing="4",
        class_name="muted charge-breakdown",
    )


def _field(label: str, key: str, control: rx.Component) -> rx.Component:
    return rx.box(
        rx.text(label, class_name="field-label"),
        control,
        rx.cond(
            TransactionFormState.errors.contains(key),
            rx.text(TransactionFormState.errors[key], class_name="field-error"),
            None,
        ),
    )


def _stat(label: str, value: rx.Var) -> rx.Component:
    return rx.box(
        rx.text(label, class_name="muted"),
        rx.text(value, weight="bold"),
        class_name="stat",
    )
