"""
Cached autocomplete lookups for filter pickers and forms.

Lookups are keyed on resource, search text and limit and kept in a
``DiskCache`` for a short TTL, so retyping the same prefix does not hit the API
again. Blank input never reaches the API.
"""

from finops_ui import config
from finops_ui.lib import logs, objects
from finops_ui.lib.caches import DiskCache
from finops_ui.models.common import AutocompleteResult
from finops_ui.services.resource_service import ResourceService

LOG = logs.logger(__file__)


class AutocompleteLookup:
    """
    Suggestion source for one resource.

    Attributes:
        service: Service whose ``autocomplete`` endpoint is queried.
        cache: Optional disk cache; ``None`` disables caching.
        ttl: Cache lifetime in seconds.
    """

    def __init__(
        self,
        service: ResourceService,
        cache: DiskCache | None = None,
        ttl: float = config.AUTOCOMPLETE_TTL,
    ) -> None:
        self.service = service
        self.cache = cache
        self.ttl = ttl

    def lookup(self, search: str, limit: int = config.AUTOCOMPLETE_LIMIT) -> AutocompleteResult:
        """Return up to ``limit`` suggestions for ``search``."""
        query = search.strip()
        if not query:
            return AutocompleteResult(limit_applied=limit)

        def load() -> dict:
            return self.service.autocomplete(query, limit)

        if self.cache is None:
            return AutocompleteResult.from_response(load())

        key = objects.hash(["autocomplete", self.service.spec.name, query.lower(), limit])
        entry = self.cache.get_or_load(key, load, expire=self.ttl)
        LOG.debug(
            "lookup - resource:%s query:%s hit:%s", self.service.spec.name, query, entry.hit
        )
        return AutocompleteResult.from_response(entry.value)

    def options(self, search: str, limit: int = config.AUTOCOMPLETE_LIMIT) -> list[dict[str, str]]:
        """Picker options as ``{label, value}`` strings, as the UI binds them."""
        return [
            {"label": option["label"], "value": str(option["value"])}
            for option in self.lookup(search, limit).options()
        ]
