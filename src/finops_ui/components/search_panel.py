"""
Search box shown above every list.

The input debounces keystrokes client-side and sends the final value to the
state's ``search`` handler; a blank value returns to the unfiltered list.
"""

import reflex as rx

from finops_ui.models.resources import ResourceSpec
from finops_ui.state import SEARCH_DEBOUNCE_MS


def search_panel(state: type[rx.State], spec: ResourceSpec) -> rx.Component:
    return rx.box(
        rx.box(
            rx.icon("search", class_name="input-icon"),
            rx.input(
                placeholder=spec.search_placeholder,
                value=state.search_value,
                on_change=state.search,
                class_name="search-input",
                debounce=SEARCH_DEBOUNCE_MS,
            ),
            rx.cond(state.loading, rx.spinner(size="2"), None),
            class_name="input-with-icon",
        ),
        rx.text(state.result_summary, class_name="muted results-summary"),
        class_name="card search-card",
    )
