"""
Foodies Backend — Listing Cache
=================================

What:  In-process cache of rendered view payloads, keyed by path ("/meals").
Why:   The listing is read far more often than meals are shared; a
       successful share invalidates the entry so the next read is fresh.
How:   Dict of path → (payload, stored_at). Optional TTL from settings;
       ttl=0 keeps an entry until it is invalidated.

Generations:
    Every invalidate() bumps a per-path generation counter. A reader that
    missed the cache takes generation() before querying the store and
    passes it to set(); if a share invalidated the path in the meantime,
    the payload it built is already stale and set() drops it.

Scope:
    One cache per process. With several workers, each worker invalidates
    only its own copy; the TTL bounds staleness in that setup.
"""

import logging
import time
from typing import Any, Dict, Optional, Tuple

from foodies.config import settings

logger = logging.getLogger(__name__)

LISTING_PATH = "/meals"


class ListingCache:
    """Path-keyed payload cache with explicit invalidation."""

    def __init__(self, ttl: Optional[int] = None):
        self.ttl = settings.listing_cache_ttl if ttl is None else ttl
        self._entries: Dict[str, Tuple[Any, float]] = {}
        self._generations: Dict[str, int] = {}

    def generation(self, path: str) -> int:
        return self._generations.get(path, 0)

    def get(self, path: str) -> Optional[Any]:
        entry = self._entries.get(path)
        if entry is None:
            return None
        payload, stored_at = entry
        if self.ttl and time.monotonic() - stored_at > self.ttl:
            del self._entries[path]
            return None
        return payload

    def set(self, path: str, payload: Any, generation: Optional[int] = None) -> bool:
        """
        Store `payload` for `path`. Returns False (and stores nothing) when
        `generation` is given and the path was invalidated since it was read.
        """
        if generation is not None and generation != self.generation(path):
            logger.info("Discarding stale payload for %s (generation %d)", path, generation)
            return False
        self._entries[path] = (payload, time.monotonic())
        return True

    def invalidate(self, path: str) -> bool:
        """Drop the entry for `path`. Returns True if something was cached."""
        self._generations[path] = self.generation(path) + 1
        dropped = self._entries.pop(path, None) is not None
        logger.info("Cache invalidated: %s (was_cached=%s)", path, dropped)
        return dropped

    def clear(self) -> None:
        self._entries.clear()


# ── Singleton Instance ────────────────────────────────────────────────────
listing_cache = ListingCache()
