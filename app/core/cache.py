"""In-process TTL cache for hot, rarely-changing lookups.

Used for resolving a site's tenant from its domain on public requests.
Entries are dropped whenever the underlying tenant row changes.
"""

import time
from collections.abc import Hashable
from typing import Any

_cache: dict[Hashable, tuple[float, Any]] = {}

DEFAULT_TTL = 60


def get(key: Hashable, ttl: float = DEFAULT_TTL) -> Any | None:
    """Return the cached value if present and younger than ``ttl``."""
    entry = _cache.get(key)
    if entry is None:
        return None
    stored_at, value = entry
    if time.monotonic() - stored_at > ttl:
        _cache.pop(key, None)
        return None
    return value


def put(key: Hashable, value: Any) -> None:
    _cache[key] = (time.monotonic(), value)


def invalidate_where(namespace: str) -> int:
    """Drop every tuple key whose first element is ``namespace``."""
    stale = [k for k in _cache if isinstance(k, tuple) and k and k[0] == namespace]
    for key in stale:
        del _cache[key]
    return len(stale)


def clear() -> None:
    _cache.clear()
