#!/usr/bin/env python3
"""
cache.py

In-memory memoization for engine results.

Stores computed reports keyed by a deterministic hash of the specification
that produced them, so that re-rendering an unchanged parameter set does
not recompute the sweep.  The cache is owned by the caller; nothing is
shared between cache instances and nothing is written to disk.
"""

import hashlib
import json
from typing import Any, Callable, Dict, Optional


class ResponseCache:
    """Bounded in-memory cache for engine reports.

    Each entry is keyed by a truncated SHA-256 hash of the JSON form of the
    specification.  When ``max_entries`` is reached the oldest entry is
    evicted first.
    """

    DEFAULT_MAX_ENTRIES = 32

    def __init__(self, max_entries: int = DEFAULT_MAX_ENTRIES):
        self.max_entries = max_entries
        self._entries: Dict[str, Any] = {}

    def __len__(self) -> int:
        return len(self._entries)

    # ------------------------------------------------------------------ #
    #  Key generation                                                     #
    # ------------------------------------------------------------------ #

    def get_cache_key(self, spec, kind: str = "response") -> str:
        """Generate a deterministic cache key from a specification.

        Args:
            spec: Specification object exposing ``to_dict()``.
            kind: Result kind, so different entry points never collide.

        Returns:
            A 16-character hex string derived from SHA-256.
        """
        # numpy scalars (e.g. np.int64 order) serialise as their Python value
        config = json.dumps({"kind": kind, "spec": spec.to_dict()}, sort_keys=True,
                            default=lambda value: value.item())
        return hashlib.sha256(config.encode()).hexdigest()[:16]

    # ------------------------------------------------------------------ #
    #  Read / write / invalidate                                          #
    # ------------------------------------------------------------------ #

    def get(self, cache_key: str) -> Optional[Any]:
        """Return the cached result, or None if not found."""
        return self._entries.get(cache_key)

    def put(self, cache_key: str, result: Any) -> None:
        """Store *result*, evicting the oldest entry when full."""
        if cache_key not in self._entries and len(self._entries) >= self.max_entries:
            oldest = next(iter(self._entries))
            del self._entries[oldest]
        self._entries[cache_key] = result

    def get_or_compute(self, spec, compute: Callable[[Any], Any], kind: str = "response") -> Any:
        """Return the cached result for *spec*, computing and storing it on a miss."""
        cache_key = self.get_cache_key(spec, kind)
        cached = self.get(cache_key)
        if cached is not None:
            return cached
        result = compute(spec)
        self.put(cache_key, result)
        return result

    def invalidate(self, cache_key: Optional[str] = None) -> None:
        """Clear a specific cache entry or the entire cache.

        Args:
            cache_key: If provided, remove only that entry.
                       If None, remove everything.
        """
        if cache_key is not None:
            self._entries.pop(cache_key, None)
        else:
            self._entries.clear()
