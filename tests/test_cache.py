"""Tests for the in-memory cache."""

from nutrition_engine.services.cache import InMemoryCache, input_key


def test_cache_round_trip_and_expiry() -> None:
    cache = InMemoryCache()

    cache.set("fresh", 1, ttl_seconds=60)
    cache.set("stale", 2, ttl_seconds=0)

    assert cache.get("fresh") == 1
    assert cache.get("stale") is None
    assert cache.get("missing") is None


def test_input_key_normalizes_case_and_whitespace() -> None:
    assert input_key("resolve", "Brown  Rice ") == input_key("resolve", "brown rice")
    assert input_key("resolve", "rice") != input_key("barcode", "rice")


def test_set_drops_expired_entries() -> None:
    cache = InMemoryCache()
    for index in range(1000):
        cache.set(f"stale-{index}", index, ttl_seconds=0)

    cache.set("fresh", "kept", ttl_seconds=60)

    assert len(cache) == 1
    assert cache.get("fresh") == "kept"


def test_oldest_write_is_evicted_when_full() -> None:
    cache = InMemoryCache(max_entries=2)
    cache.set("banana", 1, ttl_seconds=60)
    cache.set("rice", 2, ttl_seconds=60)
    cache.set("banana", 3, ttl_seconds=60)

    cache.set("apple", 4, ttl_seconds=60)

    assert len(cache) == 2
    assert cache.get("rice") is None
    assert cache.get("banana") == 3
    assert cache.get("apple") == 4
