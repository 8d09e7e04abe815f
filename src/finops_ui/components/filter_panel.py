"""
Ledger transaction filters: type, amount range, date range and
bank/card/client pickers with autocomplete.
"""

import reflex as rx

from finops_ui.state import AUTOCOMPLETE_DEBOUNCE_MS, TransactionsState

_PICKERS = (("banks", "Banks"), ("cards", "Cards"), ("clients", "Clients"))


def filter_panel() -> rx.Component:
    return rx.box(
        rx.hstack(
            rx.heading("Filters", size="3", as_="h3"),
            rx.cond(
                TransactionsState.active_filters > 0,
                rx.badge(TransactionsState.active_filters, variant="soft"),
                None,
            ),
            align="center",
            spacing="2",
        ),
        rx.hstack(
            _type_toggle("deposit", "Deposit"),
            _type_toggle("withdraw", "Withdraw"),
            spacing="2",
        ),
        rx.grid(
            _field("Min amount", TransactionsState.filter_min_amount, "min_amount", "number"),
            _field("Max amount", TransactionsState.filter_max_amount, "max_amount", "number"),
            _field("From", TransactionsState.filter_start_date, "start_date", "date"),
            _field("To", TransactionsState.filter_end_date, "end_date", "date"),
            columns="4",
            spacing="3",
            width="100%",
        ),
        rx.grid(*[_picker(key, label) for key, label in _PICKERS], columns="3", spacing="3", width="100%"),
        rx.hstack(
            rx.button("Apply filters", on_click=TransactionsState.apply_filters),
            rx.button("Clear", variant="soft", color_scheme="gray", on_click=TransactionsState.clear_filters),
            spacing="2",
        ),
        class_name="card filter-card",
    )


def _type_toggle(kind: str, label: str) -> rx.Component:
    return rx.button(
        label,
        size="1",
        variant=rx.cond(TransactionsState.filter_types.contains(kind), "solid", "outline"),
        on_click=TransactionsState.toggle_type(kind),
    )


def _field(label: str, value: rx.Var, name: str, input_type: str) -> rx.Component:
    return rx.box(
        rx.text(label, class_name="field-label"),
        rx.input(
            type=input_type,
            value=value,
            on_change=lambda v: TransactionsState.set_filter_field(name, v),
        ),
    )


def _picker(key: str, label: str) -> rx.Component:
    return rx.box(
        rx.text(label, class_name="field-label"),
        rx.hstack(
            rx.foreach(
                TransactionsState.picked[key],
                lambda token: rx.badge(
                    token["label"],
                    rx.icon("x", size=12, on_click=TransactionsState.unpick(key, token["value"])),
                    variant="soft",
                ),
            ),
            wrap="wrap",
            spacing="1",
        ),
        rx.input(
            placeholder=f"Search {label.lower()}...",
            value=TransactionsState.picker_query[key],
            on_change=lambda v: TransactionsState.lookup(key, v),
            debounce=AUTOCOMPLETE_DEBOUNCE_MS,
        ),
        rx.foreach(
            TransactionsState.picker_options[key],
            lambda option: rx.box(
                option["label"],
                class_name="picker-option",
                on_click=TransactionsState.pick(key, option["label"], option["value"]),
            ),
        ),
        class_name="picker",
    )
