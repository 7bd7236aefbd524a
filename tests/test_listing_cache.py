"""Tests for the in-process listing cache."""

from unittest.mock import patch

from foodies.services.listing_cache import LISTING_PATH, ListingCache


class TestListingCache:

    def test_get_on_cold_cache_is_none(self):
        assert ListingCache(ttl=0).get(LISTING_PATH) is None

    def test_set_then_get(self):
        cache = ListingCache(ttl=0)
        cache.set(LISTING_PATH, {"meals": []})
        assert cache.get(LISTING_PATH) == {"meals": []}

    def test_invalidate_drops_entry(self):
        cache = ListingCache(ttl=0)
        cache.set(LISTING_PATH, "payload")

        assert cache.invalidate(LISTING_PATH) is True
        assert cache.get(LISTING_PATH) is None
        assert cache.invalidate(LISTING_PATH) is False

    def test_invalidate_leaves_other_paths(self):
        cache = ListingCache(ttl=0)
        cache.set(LISTING_PATH, "listing")
        cache.set("/meals/big-burger", "detail")

        cache.invalidate(LISTING_PATH)
        assert cache.get("/meals/big-burger") == "detail"

    def test_ttl_expiry(self):
        cache = ListingCache(ttl=60)
        with patch("foodies.services.listing_cache.time.monotonic", return_value=1000.0):
            cache.set(LISTING_PATH, "payload")
        with patch("foodies.services.listing_cache.time.monotonic", return_value=1059.0):
            assert cache.get(LISTING_PATH) == "payload"
        with patch("foodies.services.listing_cache.time.monotonic", return_value=1061.0):
            assert cache.get(LISTING_PATH) is None

    def test_zero_ttl_never_expires(self):
        cache = ListingCache(ttl=0)
        with patch("foodies.services.listing_cache.time.monotonic", return_value=0.0):
            cache.set(LISTING_PATH, "payload")
        with patch("foodies.services.listing_cache.time.monotonic", return_value=10_000_000.0):
            assert cache.get(LISTING_PATH) == "payload"

    def test_clear(self):
        cache = ListingCache(ttl=0)
        cache.set(LISTING_PATH, "payload")
        cache.clear()
        assert cache.get(LISTING_PATH) is None

    def test_invalidate_bumps_generation(self):
        cache = ListingCache(ttl=0)
        before = cache.generation(LISTING_PATH)

        cache.invalidate(LISTING_PATH)

        assert cache.generation(LISTING_PATH) == before + 1
        assert cache.generation("/meals/big-burger") == 0

    def test_set_with_current_generation_stores(self):
        cache = ListingCache(ttl=0)
        cache.invalidate(LISTING_PATH)

        assert cache.set(LISTING_PATH, "fresh", cache.generation(LISTING_PATH)) is True
        assert cache.get(LISTING_PATH) == "fresh"

    def test_set_after_interleaved_invalidate_is_dropped(self):
        """A reader builds a payload, a share invalidates, the reader stores."""
        cache = ListingCache(ttl=0)
        generation = cache.generation(LISTING_PATH)

        cache.invalidate(LISTING_PATH)

        assert cache.set(LISTING_PATH, "stale", generation) is False
        assert cache.get(LISTING_PATH) is None
