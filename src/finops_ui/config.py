"""
Runtime settings for the finops UI.

Values come from environment variables with defaults suitable for local
development:

- ``FINOPS_API_BASE_URL``: REST API origin (default ``http://localhost:5000``)
- ``FINOPS_API_TIMEOUT``: request timeout in seconds
- ``FINOPS_UI_SERVICE``: ``http`` for the real API, ``demo`` for in-memory data
- ``FINOPS_UI_PAGE_SIZE`` / ``FINOPS_UI_PROFILER_PAGE_SIZE``: default list limits
- ``FINOPS_UI_CURRENCY``: currency label used when formatting amounts
- ``FINOPS_UI_CACHE_ENABLED`` / ``FINOPS_UI_AUTOCOMPLETE_TTL``: autocomplete cache
- ``FINOPS_UI_PORT``: port for ``reflex run``
- ``FINOPS_UI_TITLE``: application title shown in the header and tab
- ``FINOPS_UI_SESSION_IDLE``: seconds before an idle browser session is dropped
"""

import os


def env_flag(name: str, default: bool = False) -> bool:
    """Read a boolean flag; ``1``, ``true`` and ``yes`` count as enabled."""
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes"}


def env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    return int(value) if value else default


def env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    return float(value) if value else default


API_BASE_URL = os.getenv("FINOPS_API_BASE_URL", "http://localhost:5000").rstrip("/")
API_TIMEOUT = env_float("FINOPS_API_TIMEOUT", 15.0)
API_V1_PREFIX = "/api/v1"
PROFILER_PREFIX = "/api/v2/profiler"

SERVICE_KIND = os.getenv("FINOPS_UI_SERVICE", "http").lower()

PAGE_SIZE = env_int("FINOPS_UI_PAGE_SIZE", 20)
PROFILER_PAGE_SIZE = env_int("FINOPS_UI_PROFILER_PAGE_SIZE", 50)

CURRENCY = os.getenv("FINOPS_UI_CURRENCY", "INR")

CACHE_ENABLED = env_flag("FINOPS_UI_CACHE_ENABLED", True)
AUTOCOMPLETE_TTL = env_int("FINOPS_UI_AUTOCOMPLETE_TTL", 30)
AUTOCOMPLETE_LIMIT = 5

# Interaction timings
SEARCH_DEBOUNCE_SECONDS = 0.5
AUTOCOMPLETE_DEBOUNCE_SECONDS = 0.3
ROW_STATUS_SECONDS = 1.0
ROW_FADE_SECONDS = 0.4
ROW_SETTLE_INTERVAL = 0.1

APP_PORT = env_int("FINOPS_UI_PORT", 8000)
APP_TITLE = os.getenv("FINOPS_UI_TITLE", "FinOps")

SESSION_IDLE_SECONDS = env_int("FINOPS_UI_SESSION_IDLE", 3600)
