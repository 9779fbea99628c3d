"""
Memoization for Easter, season, and special-day lookups.

Keys are tuples: ("easter", year), ("season", "YYYY-MM-DD"),
("special_day", "YYYY-MM-DD"). Values are plain strings (or None), never
date objects, so a cached entry cannot be mutated by a caller.

Every entry is a pure function of its key, so concurrent writers racing on
the same key store the same value and no lock is taken. clear() is not
atomic with respect to concurrent readers: a reader that races a clear
simply recomputes.
"""

import logging
from typing import Any, Callable, Hashable

logger = logging.getLogger(__name__)

_MISSING = object()


class CalculationCache:
    """A process-local memo table that can be injected per caller."""

    def __init__(self):
        self._entries: dict[Hashable, Any] = {}

    def get_or_compute(self, key: Hashable, compute: Callable[[], Any]) -> Any:
        value = self._entries.get(key, _MISSING)
        if value is _MISSING:
            value = compute()
            self._entries[key] = value
        return value

    def clear(self):
        logger.debug("Clearing %d cached calendar calculations", len(self._entries))
        self._entries = {}

    def __contains__(self, key: Hashable) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)


# Shared by callers that do not pass their own cache.
DEFAULT_CACHE = CalculationCache()


def resolve_cache(cache=None) -> CalculationCache:
    return DEFAULT_CACHE if cache is None else cache
