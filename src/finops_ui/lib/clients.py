"""
Shared HTTP client factory.

One ``httpx.Client`` is kept per base URL so connections are pooled across
services and sessions.
"""

import functools

import httpx

from finops_ui import config


@functools.cache
def http_client(
    base_url: str = config.API_BASE_URL, timeout: float = config.API_TIMEOUT
) -> httpx.Client:
    """
    Return the pooled HTTP client for ``base_url``.

    Args:
        base_url: API origin, e.g. ``http://localhost:5000``.
        timeout: Per-request timeout in seconds.

    Returns:
        A long-lived ``httpx.Client`` with JSON accept headers.
    """
    return httpx.Client(
        base_url=base_url,
        timeout=timeout,
        headers={"Accept": "application/json"},
    )
