"""
Disk-backed TTL cache.

Wraps ``diskcache.Cache`` with a ``get_or_load`` helper. The UI uses it for
autocomplete lookups, which are small, repeated and safe to serve slightly stale.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, TypeVar

import diskcache

T = TypeVar("T")

_MISSING = object()


@dataclass(slots=True)
class CacheEntry:
    """A cached value plus whether it came from the cache."""

    value: Any
    hit: bool = False


class DiskCache:
    """
    Thread- and process-safe cache stored in a directory.

    Attributes:
        cache_dir: Directory holding the cache files.
    """

    def __init__(self, cache_dir: str | Path) -> None:
        self.cache_dir = Path(cache_dir)
        self._cache = diskcache.Cache(str(self.cache_dir))

    def get_or_load(
        self,
        key: str,
        loader: Callable[[], T],
        expire: float | None = None,
    ) -> CacheEntry:
        """
        Return the cached value for ``key`` or call ``loader`` and store its result.

        Args:
            key: Cache key.
            loader: Zero-argument callable producing the value on a miss.
            expire: TTL in seconds, ``None`` for no expiry.

        Returns:
            CacheEntry with ``hit`` set when the value was already cached.
        """
        cached = self._cache.get(key, default=_MISSING)
        if cached is not _MISSING:
            return CacheEntry(value=cached, hit=True)
        value = loader()
        self._cache.set(key, value, expire=expire)
        return CacheEntry(value=value)

    def close(self) -> None:
        self._cache.close()
