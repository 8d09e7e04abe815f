"""Fallback shown in place of a list whose first page failed to load."""

import reflex as rx

from finops_ui.models.resources import ResourceSpec


def error_panel(state: type[rx.State], spec: ResourceSpec) -> rx.Component:
    return rx.box(
        rx.icon("triangle-alert", class_name="empty-icon error", size=60),
        rx.heading(f"Could not load {spec.plural.lower()}", size="3", as_="h3"),
        rx.text(state.error, class_name="muted"),
        rx.hstack(
            rx.button(rx.icon("rotate-ccw", size=16), "Try again", on_click=state.retry),
            rx.button(
                rx.icon("refresh-cw", size=16),
                "Reload page",
                variant="soft",
                on_click=rx.call_script("window.location.reload()"),
            ),
            rx.button(
                rx.icon("house", size=16),
                "Go home",
                variant="ghost",
                on_click=rx.redirect("/"),
            ),
            spacing="3",
            justify="center",
        ),
        class_name="card empty-state error-state",
    )
