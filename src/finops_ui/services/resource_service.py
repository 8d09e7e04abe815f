"""
Abstract data access contract for one listable resource.

Every list screen talks to a ``ResourceService``. Implementations return the
API's response envelope as a plain dict; interpreting ``success`` and parsing
the page is left to the action layer.

Implementations:
- HttpResourceService (and subclasses): the REST API
- DemoResourceService: in-memory records for local development and tests
"""

from abc import ABC, abstractmethod
from typing import Any, Mapping

from finops_ui.models.resources import ResourceSpec


class ResourceService(ABC):
    """
    Data access for one resource.

    Attributes:
        spec: The resource this service serves.
    """

    def __init__(self, spec: ResourceSpec) -> None:
        self.spec = spec

    @abstractmethod
    def list_page(self, params: Mapping[str, Any]) -> dict:
        """
        Return one page of records.

        Args:
            params: ``page``, ``limit``, ``sort_by``, ``sort_order``, ``search``
                and resource-specific filters. Unset values are ``None``.
        """

    @abstractmethod
    def create(self, payload: Mapping[str, Any]) -> dict:
        """Create a record; the envelope's ``data`` is the stored record."""

    @abstractmethod
    def update(self, payload: Mapping[str, Any]) -> dict:
        """Update the record identified by ``payload["id"]``."""

    @abstractmethod
    def delete(self, record_id: int) -> dict:
        """Delete one record by id."""

    def autocomplete(self, search: str, limit: int = 5) -> dict:
        """Return name suggestions; resources without autocomplete return none."""
        return {
            "success": True,
            "data": {"data": [], "search_query": search, "result_count": 0, "limit_applied": limit},
        }

    def mark_done(self, record_id: int) -> dict:
        raise NotImplementedError(f"{self.spec.plural} cannot be marked done")

    def _require(self, supported: bool, operation: str) -> None:
        if not supported:
            raise NotImplementedError(f"{self.spec.plural} do not support {operation}")
