"""
REST-backed resource services.

``HttpResourceService`` maps the generic list and CRUD operations onto a
resource's endpoints. The subclasses add the endpoints only some resources
have: the ledger report, profile dashboard and mark-done, and profiler
deposit/withdraw posting with per-profile summaries and PDF export.
"""

import base64
import binascii
from datetime import date
from typing import Any, Mapping

from finops_ui.errors import ApiError
from finops_ui.lib import logs, objects
from finops_ui.models.common import DownloadFile, TransactionSummary
from finops_ui.models.requests import DEPOSIT, WITHDRAW, ReportRequest
from finops_ui.models.resources import ResourceSpec
from finops_ui.services.api import ApiClient
from finops_ui.services.resource_service import ResourceService

LOG = logs.logger(__file__)


class HttpResourceService(ResourceService):
    """
    Resource service talking to the REST API.

    Attributes:
        api: JSON client used for every request.
    """

    def __init__(self, spec: ResourceSpec, api: ApiClient | None = None) -> None:
        super().__init__(spec)
        self.api = api or ApiClient()

    def list_page(self, params: Mapping[str, Any]) -> dict:
        LOG.debug("list_page - resource:%s params:%s", self.spec.name, dict(params))
        return self.api.get(self.spec.paginated_path, params)

    def autocomplete(self, search: str, limit: int = 5) -> dict:
        if not self.spec.supports_autocomplete:
            return super().autocomplete(search, limit)
        return self.api.get(self.spec.autocomplete_path, {"search": search, "limit": limit})

    def create(self, payload: Mapping[str, Any]) -> dict:
        self._require(self.spec.supports_create, "create")
        LOG.debug("create - resource:%s payload:%s", self.spec.name, objects.to_json(dict(payload)))
        return self.api.post(self.spec.base_path, payload)

    def update(self, payload: Mapping[str, Any]) -> dict:
        self._require(self.spec.supports_update, "update")
        return self.api.put(self.spec.base_path, payload)

    def delete(self, record_id: int) -> dict:
        self._require(self.spec.supports_delete, "delete")
        return self.api.delete(self.spec.base_path, {"id": record_id})


class TransactionService(HttpResourceService):
    """Ledger transactions, plus the date-range PDF report."""

    def generate_report(
        self, start_date: date | str, end_date: date | str, client_id: int | None = None
    ) -> DownloadFile:
        """
        Request a PDF report for a date range, optionally for one client.

        The API returns the PDF base64-encoded in ``data.pdfContent``.

        Raises:
            ApiError: If the request fails or the response holds no PDF.
        """
        request = ReportRequest(start_date, end_date, client_id)
        payload = request.to_payload()
        response = self.api.post(self.spec.path("report"), payload)
        data = response.get("data") or {}
        content = data.get("pdfContent")
        if not response.get("success", True) or not content:
            raise ApiError(response.get("message") or "Failed to generate report")
        try:
            pdf = base64.b64decode(content, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ApiError("Report content is not valid base64") from exc
        filename = data.get("filename") or (
            f"transaction-report-{payload['startDate']}-to-{payload['endDate']}.pdf"
        )
        return DownloadFile(filename=filename, content=pdf)


class ProfilerProfileService(HttpResourceService):
    """Profiles with balances; adds mark-done."""

    def mark_done(self, record_id: int) -> dict:
        """Close a profile; the id goes in the JSON body."""
        return self.api.put(self.spec.path("mark_done"), {"id": record_id})


class ProfilerTransactionService(HttpResourceService):
    """Deposits and withdrawals posted against profiles."""

    def create(self, payload: Mapping[str, Any]) -> dict:
        """
        Post a deposit or a withdrawal.

        ``payload["transaction_type"]`` picks the endpoint and is not sent.
        """
        body = dict(payload)
        kind = body.pop("transaction_type", None)
        if kind not in (DEPOSIT, WITHDRAW):
            raise ValueError(f"transaction_type must be {DEPOSIT!r} or {WITHDRAW!r}, got {kind!r}")
        return self.api.post(self.spec.path(kind), body)

    def summary(self, profile_id: int) -> TransactionSummary:
        response = self.api.get(self.spec.path("summary", profile_id=profile_id))
        data = response.get("data") or {}
        return TransactionSummary.from_dict(data.get("summary", data)) or TransactionSummary()

    def export_pdf(self, profile_id: int) -> DownloadFile:
        content = self.api.get_bytes(self.spec.path("export_pdf", profile_id=profile_id))
        return DownloadFile(filename=f"profile-{profile_id}-transactions.pdf", content=content)
