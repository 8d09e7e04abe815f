"""
Service factory for the finops UI.

``get_service(resource)`` returns the ResourceService for a resource name,
built by the implementation selected with ``FINOPS_UI_SERVICE``:

- http: the REST API at ``FINOPS_API_BASE_URL``
- demo: in-memory seeded records, no API required

Instances are cached per (resource, kind), so every session shares one
service (and, for the demo, one data set).
"""

from functools import cache
from typing import Callable

from finops_ui import config
from finops_ui.data.demo_records import shared_demo_records
from finops_ui.lib import logs, paths
from finops_ui.lib.caches import DiskCache
from finops_ui.models.resources import ResourceSpec, get_resource
from finops_ui.services.autocomplete import AutocompleteLookup
from finops_ui.services.demo_service import DemoResourceService, active_profiles
from finops_ui.services.http_service import (
    HttpResourceService,
    ProfilerProfileService,
    ProfilerTransactionService,
    TransactionService,
)
from finops_ui.services.resource_service import ResourceService

LOG = logs.logger(__file__)

_HTTP_CLASSES: dict[str, type[HttpResourceService]] = {
    "transactions": TransactionService,
    "profiler_profiles": ProfilerProfileService,
    "profiler_dashboard": ProfilerProfileService,
    "profiler_transactions": ProfilerTransactionService,
}


def _http(spec: ResourceSpec) -> ResourceService:
    return _HTTP_CLASSES.get(spec.name, HttpResourceService)(spec)


def _demo(spec: ResourceSpec) -> ResourceService:
    predicate = active_profiles if spec.name == "profiler_dashboard" else None
    return DemoResourceService(spec, shared_demo_records(spec.name), predicate=predicate)


_SERVICE_REGISTRY: dict[str, Callable[[ResourceSpec], ResourceService]] = {
    "http": _http,
    "demo": _demo,
}


@cache
def get_service(resource: str, kind: str | None = None) -> ResourceService:
    """Return the configured service implementation for ``resource``."""
    resolved_kind = (kind or config.SERVICE_KIND).lower()
    LOG.info("get_service - resource:%s kind:%s", resource, resolved_kind)
    try:
        factory = _SERVICE_REGISTRY[resolved_kind]
    except KeyError as exc:
        raise ValueError(f"Unknown service kind: {resolved_kind}") from exc
    return factory(get_resource(resource))


@cache
def get_autocomplete(resource: str, kind: str | None = None) -> AutocompleteLookup:
    """Return the cached autocomplete lookup for ``resource``."""
    cache_store = DiskCache(paths.cache_dir()) if config.CACHE_ENABLED else None
    return AutocompleteLookup(get_service(resource, kind), cache=cache_store)


__all__ = [
    "AutocompleteLookup",
    "DemoResourceService",
    "HttpResourceService",
    "ProfilerProfileService",
    "ProfilerTransactionService",
    "ResourceService",
    "TransactionService",
    "get_autocomplete",
    "get_service",
]
