import base64
from decimal import Decimal

import httpx
import pytest

from finops_ui.errors import ApiError
from finops_ui.models.resources import get_resource
from finops_ui.services.http_service import (
    HttpResourceService,
    ProfilerProfileService,
    ProfilerTransactionService,
    TransactionService,
)


def test_list_page_hits_paginated_endpoint(api, recorder):
    service = HttpResourceService(get_resource("clients"), api)

    service.list_page({"page": 1, "limit": 20, "sort_by": "name", "sort_order": "asc"})

    assert recorder.last.url.path == "/api/v1/clients/paginated"
    assert recorder.last.url.params["sort_by"] == "name"


def test_dashboard_lists_from_its_own_path(api, recorder):
    service = ProfilerProfileService(get_resource("profiler_dashboard"), api)

    service.list_page({"page": 1, "limit": 50})

    assert recorder.last.url.path == "/api/v2/profiler/profiles/dashboard"


def test_update_and_delete_target_base_path(api, recorder):
    service = HttpResourceService(get_resource("banks"), api)

    service.update({"id": 4, "name": "Axis"})
    assert (recorder.last.method, recorder.last.url.path) == ("PUT", "/api/v1/banks")
    assert recorder.last_json() == {"id": 4, "name": "Axis"}

    service.delete(4)
    assert (recorder.last.method, recorder.last.url.path) == ("DELETE", "/api/v1/banks")
    assert recorder.last_json() == {"id": 4}


def test_unsupported_operation_raises(api, recorder):
    service = ProfilerProfileService(get_resource("profiler_dashboard"), api)

    with pytest.raises(NotImplementedError):
        service.create({"client_id": 1})
    assert recorder.requests == []


def test_autocomplete_without_endpoint_returns_nothing(api, recorder):
    service = TransactionService(get_resource("transactions"), api)

    response = service.autocomplete("abc")

    assert response["data"]["data"] == []
    assert recorder.requests == []


def test_generate_report_decodes_pdf(api, recorder):
    pdf = b"%PDF-1.4 report"
    recorder.queue(
        httpx.Response(200, json={"success": True, "data": {"pdfContent": base64.b64encode(pdf).decode()}})
    )
    service = TransactionService(get_resource("transactions"), api)

    file = service.generate_report("2024-01-01", "2024-01-31", client_id=3)

    assert recorder.last.url.path == "/api/v1/transactions/report"
    assert recorder.last_json() == {"startDate": "2024-01-01", "endDate": "2024-01-31", "clientId": 3}
    assert file.content == pdf
    assert file.filename == "transaction-report-2024-01-01-to-2024-01-31.pdf"


def test_generate_report_without_content_fails(api, recorder):
    recorder.queue(httpx.Response(200, json={"success": False, "message": "No transactions in range"}))
    service = TransactionService(get_resource("transactions"), api)

    with pytest.raises(ApiError, match="No transactions in range"):
        service.generate_report("2024-01-01", "2024-01-31")


def test_profiler_create_routes_by_transaction_type(api, recorder):
    service = ProfilerTransactionService(get_resource("profiler_transactions"), api)

    service.create({"transaction_type": "withdraw", "profile_id": 3, "amount": 1000.0,
                    "withdraw_charges_percentage": 2.0})

    assert recorder.last.url.path == "/api/v2/profiler/transactions/withdraw"
    assert "transaction_type" not in recorder.last_json()

    service.create({"transaction_type": "deposit", "profile_id": 3, "amount": 500.0})
    assert recorder.last.url.path == "/api/v2/profiler/transactions/deposit"


def test_profiler_create_rejects_unknown_type(api, recorder):
    service = ProfilerTransactionService(get_resource("profiler_transactions"), api)

    with pytest.raises(ValueError):
        service.create({"profile_id": 3, "amount": 1.0})
    assert recorder.requests == []


def test_summary_parses_decimals(api, recorder):
    recorder.queue(
        httpx.Response(
            200,
            json={
                "success": True,
                "data": {
                    "total_deposits": "5000.00",
                    "total_withdrawals": "1200.50",
                    "total_charges": "24.01",
                    "transaction_count": 4,
                },
            },
        )
    )
    service = ProfilerTransactionService(get_resource("profiler_transactions"), api)

    summary = service.summary(8)

    assert recorder.last.url.path == "/api/v2/profiler/transactions/profile/8/summary"
    assert summary.total_deposits == Decimal("5000.00")
    assert summary.net_amount == Decimal("3775.49")
    assert summary.transaction_count == 4


def test_export_pdf_names_file_after_profile(api, recorder):
    recorder.queue(httpx.Response(200, content=b"%PDF"))
    service = ProfilerTransactionService(get_resource("profiler_transactions"), api)

    file = service.export_pdf(5)

    assert recorder.last.url.path == "/api/v2/profiler/transactions/profile/5/export-pdf"
    assert file.filename == "profile-5-transactions.pdf"
    assert file.content == b"%PDF"


def test_mark_done_puts_id_in_body(api, recorder):
    service = ProfilerProfileService(get_resource("profiler_profiles"), api)

    service.mark_done(9)

    assert (recorder.last.method, recorder.last.url.path) == ("PUT", "/api/v2/profiler/profiles/mark-done")
    assert recorder.last_json() == {"id": 9}
