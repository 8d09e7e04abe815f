"""
Reflex application entry point for the FinOps UI.

Defines the navigation shell, one page per list screen, and the app-wide
theme and exception handler.
"""

import reflex as rx
from reflex.event import EventSpec

from finops_ui import config
from finops_ui.components import (
    calculator_panel,
    create_button,
    filter_panel,
    profile_summary,
    record_table,
    report_panel,
    search_panel,
    transaction_form,
)
from finops_ui.lib import logs
from finops_ui.models.resources import get_resource
from finops_ui.state import (
    BanksState,
    CardsState,
    ClientsState,
    DashboardState,
    ProfilerBanksState,
    ProfilerClientsState,
    ProfilerTransactionsState,
    ProfilesState,
    TransactionsState,
)

LOG = logs.logger(__file__)

_FONT_URL = "https://fonts.googleapis.com/css2?family=Inter:wght@300;400;500;600;700&family=Fira+Code:wght@400;500&display=swap"

# (route, nav label, state, resource)
_PAGES = (
    ("/", "Transactions", TransactionsState, "transactions"),
    ("/clients", "Clients", ClientsState, "clients"),
    ("/banks", "Banks", BanksState, "banks"),
    ("/cards", "Cards", CardsState, "cards"),
    ("/profiler", "Dashboard", DashboardState, "profiler_dashboard"),
    ("/profiler/profiles", "Profiles", ProfilesState, "profiler_profiles"),
    ("/profiler/transactions", "Profiler Transactions", ProfilerTransactionsState, "profiler_transactions"),
    ("/profiler/clients", "Profiler Clients", ProfilerClientsState, "profiler_clients"),
    ("/profiler/banks", "Profiler Banks", ProfilerBanksState, "profiler_banks"),
)


def nav_bar() -> rx.Component:
    """Links to every list screen, ledger first then profiler, and the calculator."""
    return rx.box(
        rx.heading(config.APP_TITLE, size="5", as_="h1"),
        rx.hstack(
            *[rx.link(label, href=route, class_name="nav-link") for route, label, _, _ in _PAGES],
            rx.link("Calculator", href="/calculator", class_name="nav-link"),
            spacing="4",
            wrap="wrap",
        ),
        class_name="nav-bar",
    )


def _page(state: type[rx.State], resource: str, *extras: rx.Component) -> rx.Component:
    spec = get_resource(resource)
    return rx.box(
        rx.box(
            nav_bar(),
            rx.box(
                rx.heading(spec.plural, size="6", as_="h2"),
                create_button(spec),
                class_name="page-header",
            ),
            *extras,
            search_panel(state, spec),
            record_table(state, spec),
            class_name="app-container",
        ),
        class_name="app-shell",
    )


def transactions_page() -> rx.Component:
    return _page(TransactionsState, "transactions", report_panel(), filter_panel())


def profiler_transactions_page() -> rx.Component:
    return _page(
        ProfilerTransactionsState,
        "profiler_transactions",
        transaction_form(),
        profile_summary(),
    )


def calculator_page() -> rx.Component:
    return rx.box(
        rx.box(
            nav_bar(),
            rx.box(rx.heading("Simple calculator", size="6", as_="h2"), class_name="page-header"),
            calculator_panel(),
            class_name="app-container",
        ),
        class_name="app-shell",
    )


def _simple_page(state: type[rx.State], resource: str):
    def page() -> rx.Component:
        return _page(state, resource)

    page.__name__ = f"{resource}_page"
    return page


def _on_backend_error(exception: Exception) -> EventSpec | list[EventSpec] | None:
    LOG.exception("Unhandled backend error", exc_info=exception)
    return rx.toast.error("Something went wrong. Please try again.")


app = rx.App(
    theme=rx.theme(
        appearance="light",
        has_background=True,
        radius="large",
    ),
    stylesheets=[
        _FONT_URL,
        "/styles.css",
    ],
    backend_exception_handler=_on_backend_error,
)

_CUSTOM_PAGES = {
    "transactions": transactions_page,
    "profiler_transactions": profiler_transactions_page,
}

for _route, _label, _state, _resource in _PAGES:
    app.add_page(
        _CUSTOM_PAGES.get(_resource) or _simple_page(_state, _resource),
        route=_route,
        title=f"{_label} | {config.APP_TITLE}",
        on_load=_state.on_load,
    )

app.add_page(calculator_page, route="/calculator", title=f"Calculator | {config.APP_TITLE}")


def main() -> None:
    """Entrypoint used by `finops_ui` console script."""
    import subprocess
    import sys

    LOG.info("Starting reflex on port %s with %s services", config.APP_PORT, config.SERVICE_KIND)
    subprocess.run([sys.executable, "-m", "reflex", "run", "--frontend-port", str(config.APP_PORT)])


if __name__ == "__main__":
    main()
