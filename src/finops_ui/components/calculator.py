"""Simple margin calculator: swipe amount, our charge, bank charge and platform fee."""

import reflex as rx

from finops_ui.state import CalculatorState

_INPUTS = (
    ("amount", "Amount"),
    ("our_percentage", "Our charge (%)"),
    ("bank_percentage", "Bank charge (%)"),
    ("platform_fee", "Platform fee"),
)


def _input(name: str, label: str) -> rx.Component:
    return rx.box(
        rx.text(label, class_name="field-label"),
        rx.input(
            type="number",
            min=0,
            value=getattr(CalculatorState, name),
            on_change=lambda v: CalculatorState.set_field(name, v),
        ),
    )


def calculator_panel() -> rx.Component:
    return rx.grid(
        rx.box(
            rx.heading("Inputs", size="3"),
            rx.vstack(*[_input(name, label) for name, label in _INPUTS], spacing="3"),
            rx.text("GST on bank charge: 18% (fixed)", class_name="muted"),
            rx.button("Reset", variant="soft", color_scheme="gray", on_click=CalculatorState.clear),
            class_name="panel",
        ),
        rx.box(
            rx.heading("Breakdown", size="3"),
            rx.foreach(
                CalculatorState.lines,
                lambda line: rx.hstack(rx.text(line[0]), rx.spacer(), rx.text(line[1]), class_name="line"),
            ),
            rx.hstack(
                rx.text("Net profit", weight="bold"),
                rx.spacer(),
                rx.text(
                    CalculatorState.net_profit,
                    weight="bold",
                    color_scheme=rx.cond(CalculatorState.is_loss, "red", "green"),
                ),
                class_name="line",
            ),
            class_name="panel",
        ),
        columns="2",
        spacing="4",
    )
