"""Tests for the in-memory and null caches."""

from unittest.mock import MagicMock, patch

from ofp_uplink.adapters.cache import InMemoryCache, NullCache


def test_get_or_compute_computes_once():
    cache = InMemoryCache()
    compute = MagicMock(return_value=("DVR",))

    assert cache.get_or_compute("fix:DVR", compute) == ("DVR",)
    assert cache.get_or_compute("fix:DVR", compute) == ("DVR",)

    compute.assert_called_once()
    assert cache.stats()["hits"] == 1


def test_empty_values_are_cached():
    cache = InMemoryCache()
    compute = MagicMock(return_value=())

    cache.get_or_compute("fix:NOPE", compute)
    cache.get_or_compute("fix:NOPE", compute)

    compute.assert_called_once()


def test_max_size_evicts_oldest():
    cache = InMemoryCache(max_size=2)
    cache.set("a", 1)
    cache.set("b", 2)
    cache.set("c", 3)

    assert cache.get("a") is None
    assert cache.get("c") == 3
    assert cache.size() == 2


def test_entries_expire():
    cache = InMemoryCache(default_ttl_seconds=10)

    with patch("ofp_uplink.adapters.cache.memory_cache.time.time", return_value=1000.0):
        cache.set("a", 1)
    with patch("ofp_uplink.adapters.cache.memory_cache.time.time", return_value=1011.0):
        assert cache.get("a") is None


def test_null_cache_always_computes():
    cache = NullCache()
    compute = MagicMock(return_value=1)

    cache.get_or_compute("a", compute)
    cache.get_or_compute("a", compute)

    assert compute.call_count == 2
    assert cache.size() == 0
