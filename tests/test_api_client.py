import httpx
import pytest

from finops_ui.errors import ApiError


def test_get_sends_arrays_as_repeated_params(api, recorder):
    recorder.queue(httpx.Response(200, json={"success": True, "data": {"data": []}}))

    body = api.get(
        "/api/v1/transactions/paginated",
        {"page": 2, "bank_ids": [3, 1], "search": None, "include_done": False, "remark": "  "},
    )

    params = recorder.last.url.params
    assert recorder.last.method == "GET"
    assert recorder.last.url.path == "/api/v1/transactions/paginated"
    assert params.get_list("bank_ids") == ["3", "1"]
    assert params["page"] == "2"
    assert params["include_done"] == "false"
    assert "search" not in params
    assert "remark" not in params
    assert body == {"success": True, "data": {"data": []}}


def test_delete_sends_id_in_json_body(api, recorder):
    api.delete("/api/v1/clients", {"id": 7})

    assert recorder.last.method == "DELETE"
    assert recorder.last_json() == {"id": 7}


def test_error_response_uses_server_message(api, recorder):
    recorder.queue(httpx.Response(404, json={"success": False, "message": "Client not found", "code": "NOT_FOUND"}))

    with pytest.raises(ApiError) as info:
        api.get("/api/v1/clients/paginated")

    assert info.value.message == "Client not found"
    assert info.value.status_code == 404
    assert info.value.code == "NOT_FOUND"


def test_error_response_reads_nested_error_message(api, recorder):
    recorder.queue(httpx.Response(400, json={"error": {"message": "Amount is invalid"}}))

    with pytest.raises(ApiError, match="Amount is invalid"):
        api.post("/api/v2/profiler/transactions/deposit", {"amount": -1})


def test_error_response_without_json_falls_back_to_status(api, recorder):
    recorder.queue(httpx.Response(502, text="Bad gateway"))

    with pytest.raises(ApiError) as info:
        api.get("/api/v1/banks/paginated")

    assert info.value.message == "Request failed with status 502"
    assert info.value.status_code == 502


def test_transport_error_becomes_api_error(api, recorder):
    recorder.queue(httpx.ConnectError("connection refused"))

    with pytest.raises(ApiError, match="connection refused"):
        api.get("/api/v1/cards/paginated")


def test_invalid_json_body(api, recorder):
    recorder.queue(httpx.Response(200, text="<html>"))

    with pytest.raises(ApiError, match="Invalid JSON response"):
        api.get("/api/v1/cards/paginated")


def test_get_bytes_returns_raw_content(api, recorder):
    recorder.queue(httpx.Response(200, content=b"%PDF-1.7", headers={"Content-Type": "application/pdf"}))

    assert api.get_bytes("/export") == b"%PDF-1.7"
    assert recorder.last.headers["Accept"] == "application/pdf"
