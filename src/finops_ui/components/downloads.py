"""
PDF downloads: the ledger transaction report and per-profile exports.

Both run as background events so the page stays responsive while the API
renders the document; the keys of in-flight downloads are kept in a list var
so buttons can show a spinner and ignore repeated clicks.
"""

import asyncio

import reflex as rx
from reflex.event import EventSpec

from finops_ui.errors import FinOpsError, error_message
from finops_ui.lib import logs
from finops_ui.services import get_service
from finops_ui.utils.formatting import parse_date

LOG = logs.logger(__file__)


def report_errors(start: str, end: str) -> dict[str, str]:
    """Validate a report date range."""
    errors = {}
    start_date, end_date = parse_date(start), parse_date(end)
    if start_date is None:
        errors["start_date"] = "Start date is required"
    if end_date is None:
        errors["end_date"] = "End date is required"
    if start_date and end_date and end_date < start_date:
        errors["end_date"] = "End date must be on or after start date"
    return errors


class DownloadState(rx.State):
    download_keys: list[str] = []
    report_start: str = ""
    report_end: str = ""
    report_client: str = ""
    report_errors: dict[str, str] = {}

    @rx.event
    def set_report_field(self, name: str, value: str):
        if name == "start":
            self.report_start = value
        elif name == "end":
            self.report_end = value
        elif name == "client":
            self.report_client = value

    @rx.event(background=True)
    async def report(self) -> EventSpec | list[EventSpec]:
        async with self:
            errors = report_errors(self.report_start, self.report_end)
            self.report_errors = errors
            start, end, client = self.report_start, self.report_end, self.report_client.strip()
        if errors:
            return rx.toast.error("Please fix all validation errors")

        service = get_service("transactions")
        generate = getattr(service, "generate_report", None)
        if generate is None:
            return rx.toast.info("Reports are not available in demo mode")
        client_id = int(client) if client.isdigit() else None
        return await self._fetch(
            "report",
            lambda: generate(start, end, client_id),
            "Failed to generate report",
        )

    @rx.event(background=True)
    async def export_profile(self, profile_id: str) -> EventSpec | list[EventSpec]:
        service = get_service("profiler_transactions")
        export = getattr(service, "export_pdf", None)
        if export is None:
            return rx.toast.info("PDF export is not available in demo mode")
        return await self._fetch(
            profile_id,
            lambda: export(int(profile_id)),
            "Failed to export transactions",
        )

    async def _fetch(self, key: str, load, fallback: str) -> EventSpec | list[EventSpec]:
        async with self:
            if key in self.download_keys:
                return []
            self.download_keys.append(key)
        try:
            LOG.info("Download triggered for: %s", key)
            file = await asyncio.get_running_loop().run_in_executor(None, load)
        except FinOpsError as exc:
            LOG.warning("Download failed for %s: %s", key, exc)
            return rx.toast.error(error_message(exc, fallback))
        finally:
            async with self:
                self.download_keys.remove(key)
        return rx.download(data=file.content, filename=file.filename)


def download_button(profile_id: rx.Var) -> rx.Component:
    return rx.icon_button(
        rx.cond(
            DownloadState.download_keys.contains(profile_id),
            rx.spinner(size="1"),
            rx.icon("download", size=14),
        ),
        size="1",
        variant="ghost",
        title="Export transactions as PDF",
        on_click=DownloadState.export_profile(profile_id),
    )


def report_panel() -> rx.Component:
    """Date range form that downloads the ledger transaction report."""
    return rx.box(
        rx.heading("Transaction report", size="3", as_="h3"),
        rx.hstack(
            _date_field("From", DownloadState.report_start, "start", "start_date"),
            _date_field("To", DownloadState.report_end, "end", "end_date"),
            rx.box(
                rx.text("Client ID", class_name="field-label"),
                rx.input(
                    value=DownloadState.report_client,
                    on_change=lambda value: DownloadState.set_report_field("client", value),
                    placeholder="All clients",
                ),
            ),
            rx.button(
                rx.cond(
                    DownloadState.download_keys.contains("report"),
                    rx.spinner(size="1"),
                    rx.icon("file-down", size=16),
                ),
                "Download PDF",
                on_click=DownloadState.report,
                disabled=DownloadState.download_keys.contains("report"),
            ),
            align="end",
            spacing="3",
            wrap="wrap",
        ),
        class_name="card report-card",
    )


def _date_field(label: str, value: rx.Var, name: str, error_key: str) -> rx.Component:
    return rx.box(
        rx.text(label, class_name="field-label"),
        rx.input(
            type="date",
            value=value,
            on_change=lambda v: DownloadState.set_report_field(name, v),
        ),
        rx.cond(
            DownloadState.report_errors.contains(error_key),
            rx.text(DownloadState.report_errors[error_key], class_name="field-error"),
            None,
        ),
    )
