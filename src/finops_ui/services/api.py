"""
Thin JSON client for the finops REST API.

``ApiClient`` turns parameter mappings into query strings, sends the request
through a pooled ``httpx.Client`` and returns the decoded body untouched. Every
transport error and every non-2xx response becomes an ``ApiError`` carrying the
server's message when it sent one. Nothing is retried here.
"""

from typing import Any, Mapping

import httpx

from finops_ui.errors import ApiError
from finops_ui.lib import clients, logs
from finops_ui.models.filters import build_query_params

LOG = logs.logger(__file__)


class ApiClient:
    """
    JSON request helper bound to one API origin.

    Attributes:
        client: Underlying ``httpx.Client`` (its ``base_url`` is the API origin).
    """

    def __init__(self, client: httpx.Client | None = None) -> None:
        self.client = client or clients.http_client()

    def get(self, path: str, params: Mapping[str, Any] | None = None) -> dict:
        return self._json(self._send("GET", path, params=params))

    def post(self, path: str, body: Mapping[str, Any] | None = None) -> dict:
        return self._json(self._send("POST", path, body=body))

    def put(self, path: str, body: Mapping[str, Any] | None = None) -> dict:
        return self._json(self._send("PUT", path, body=body))

    def delete(self, path: str, body: Mapping[str, Any] | None = None) -> dict:
        """Send ``DELETE`` with a JSON body; the API identifies records by body ``id``."""
        return self._json(self._send("DELETE", path, body=body))

    def get_bytes(self, path: str, params: Mapping[str, Any] | None = None) -> bytes:
        """Fetch a binary payload such as an exported PDF."""
        return self._send("GET", path, params=params, accept="application/pdf").content

    def _send(
        self,
        method: str,
        path: str,
        params: Mapping[str, Any] | None = None,
        body: Mapping[str, Any] | None = None,
        accept: str | None = None,
    ) -> httpx.Response:
        query = build_query_params(params or {})
        headers = {"Accept": accept} if accept else None
        LOG.debug("%s %s params:%s", method, path, query)
        try:
            response = self.client.request(
                method,
                path,
                params=query or None,
                json=dict(body) if body is not None else None,
                headers=headers,
            )
        except httpx.HTTPError as exc:
            LOG.warning("%s %s failed: %s", method, path, exc)
            raise ApiError(str(exc) or "Network error") from exc

        if response.is_error:
            message, code, payload = _error_details(response)
            LOG.warning("%s %s -> %s %s", method, path, response.status_code, message)
            raise ApiError(message, status_code=response.status_code, code=code, payload=payload)
        return response

    @staticmethod
    def _json(response: httpx.Response) -> dict:
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as exc:
            raise ApiError(
                "Invalid JSON response", status_code=response.status_code
            ) from exc


def _error_details(response: httpx.Response) -> tuple[str, str | None, Any]:
    fallback = f"Request failed with status {response.status_code}"
    try:
        payload = response.json()
    except ValueError:
        return fallback, None, None
    if not isinstance(payload, Mapping):
        return fallback, None, payload
    message = payload.get("message")
    error = payload.get("error")
    if not message and isinstance(error, Mapping):
        message = error.get("message")
    elif not message and isinstance(error, str):
        message = error
    code = payload.get("code") or payload.get("errorCode")
    return str(message or fallback), code, payload
