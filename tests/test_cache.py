"""Tests for the TTL cache implementation."""

import asyncio
import threading
import time

import pytest
from services.cache import SerializationError, TTLCache, memoize


class FakeClock:
    """Manually advanced clock, in seconds."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return TTLCache(capacity=100, default_ttl=60, clock=clock)


def test_cache_get_missing_key(cache):
    """Test that unknown keys come back absent."""
    assert cache.get("never_set") is None
    assert cache.get("never_set", "fallback") == "fallback"


def test_cache_set_and_get(cache):
    """Test setting and getting values from the cache."""
    value = {"supplier": "Pharma Chemicals Inc.", "materials": ["Solvents", "Reagents"]}
    cache.set("test_key", value, ttl_seconds=10)

    assert cache.get("test_key") == value


def test_cache_expiration(cache, clock):
    """Test that cache entries expire correctly."""
    cache.set("x", {"a": 1}, ttl_seconds=0.1)

    clock.advance(0.15)

    assert cache.get("x") is None
    assert cache.stats()["size"] == 0


def test_cache_entry_live_at_exact_ttl(cache, clock):
    cache.set("edge", 1, ttl_seconds=5)
    clock.advance(5)
    assert cache.get("edge") == 1


def test_cache_default_ttl(cache, clock):
    cache.set("default", "value")
    clock.advance(59)
    assert cache.get("default") == "value"
    clock.advance(2)
    assert cache.get("default") is None


def test_mutating_input_does_not_change_cached_value(cache):
    value = {"items": [1, 2, 3]}
    cache.set("k", value)

    value["items"].append(4)
    value["extra"] = True

    assert cache.get("k") == {"items": [1, 2, 3]}


def test_mutating_returned_value_does_not_change_cached_value(cache):
    cache.set("k", {"items": [1, 2, 3]})

    first = cache.get("k")
    first["items"].clear()

    assert cache.get("k") == {"items": [1, 2, 3]}


def test_unserializable_value_raises(cache):
    with pytest.raises(SerializationError):
        cache.set("bad", {"lock": threading.Lock()})

    assert "bad" not in cache
    assert len(cache) == 0


def test_failed_set_keeps_existing_entry(cache):
    cache.set("k", "old")
    with pytest.raises(SerializationError):
        cache.set("k", object())
    assert cache.get("k") == "old"


def test_hit_count_and_stats(cache):
    cache.set("y", 5, ttl_seconds=1)

    assert [cache.get("y") for _ in range(3)] == [5, 5, 5]

    stats = cache.stats()
    assert stats["size"] == 1
    assert stats["hits"] == 3
    assert cache.entry_info("y")["hit_count"] == 3


def test_set_refreshes_entry(cache, clock):
    cache.set("k", "v1", ttl_seconds=10)
    cache.get("k")
    cache.get("k")

    clock.advance(8)
    cache.set("k", "v2", ttl_seconds=20)

    info = cache.entry_info("k")
    assert info["hit_count"] == 0
    assert info["stored_at"] == clock.now
    assert info["ttl_seconds"] == 20

    clock.advance(15)
    assert cache.get("k") == "v2"


def test_cache_delete(cache):
    cache.set("key1", "value1")
    cache.delete("key1")
    cache.delete("missing")

    assert cache.get("key1") is None


def test_cache_clear(cache):
    """Test clearing all cache entries."""
    cache.set("key1", "value1", ttl_seconds=10)
    cache.set("key2", "value2", ttl_seconds=10)

    cache.clear()

    assert cache.get("key1") is None
    assert cache.get("key2") is None
    assert cache.stats()["size"] == 0


def test_cache_cleanup_expired(cache, clock):
    """Test cleaning up expired entries."""
    cache.set("permanent_key", "permanent_value", ttl_seconds=10)
    cache.set("expiring_key", "expiring_value", ttl_seconds=1)

    clock.advance(1.1)

    assert cache.cleanup_expired() == 1
    assert len(cache) == 1
    assert cache.get("permanent_key") == "permanent_value"
    assert cache.get("expiring_key") is None


def test_capacity_eviction_removes_least_used_in_insertion_order(clock):
    cache = TTLCache(capacity=5, clock=clock)

    for key in "abcdef":
        cache.set(key, key, ttl_seconds=60)

    assert cache.stats()["size"] <= 5
    assert "a" not in cache
    assert "b" not in cache
    assert all(key in cache for key in "cdef")


def test_capacity_eviction_keeps_frequently_read_entries(clock):
    cache = TTLCache(capacity=5, clock=clock)

    for key in "abcd":
        cache.set(key, key)
    cache.get("a")
    cache.get("a")
    cache.get("b")
    cache.set("e", "e")

    assert "a" in cache
    assert "c" not in cache
    assert len(cache) == 4


def test_capacity_eviction_prefers_expired_entries(clock):
    cache = TTLCache(capacity=5, clock=clock)

    cache.set("short1", 1, ttl_seconds=1)
    cache.set("short2", 2, ttl_seconds=1)
    cache.set("long1", 3, ttl_seconds=60)
    cache.set("long2", 4, ttl_seconds=60)
    clock.advance(2)
    cache.set("long3", 5, ttl_seconds=60)

    assert len(cache) == 3
    assert all(key in cache for key in ("long1", "long2", "long3"))
    assert cache.stats()["evictions"] == 0


def test_size_never_exceeds_capacity(clock):
    cache = TTLCache(capacity=10, clock=clock)

    for i in range(11):
        cache.set(f"key{i}", i)
        assert len(cache) <= 10

    assert cache.get("key10") == 10


def test_set_then_get_with_capacity_one(clock):
    cache = TTLCache(capacity=1, clock=clock)

    cache.set("k", "v")
    assert cache.get("k") == "v"

    cache.set("other", {"a": 1})
    assert cache.get("other") == {"a": 1}
    assert len(cache) <= 1


def test_new_entry_survives_eviction_when_older_entries_were_read(clock):
    cache = TTLCache(capacity=5, clock=clock)

    for key in "abcd":
        cache.set(key, key)
        cache.get(key)
    cache.set("e", "e")

    assert cache.get("e") == "e"
    assert "a" not in cache
    assert len(cache) == 4


def test_stats_usage_percent(clock):
    cache = TTLCache(capacity=8, clock=clock)
    for i in range(3):
        cache.set(f"k{i}", i)

    stats = cache.stats()
    assert stats["capacity"] == 8
    # 3 / 8 = 37.5% rounds half up
    assert stats["usage_percent"] == 38


def test_invalid_capacity():
    with pytest.raises(ValueError):
        TTLCache(capacity=0)


def test_sweep_removes_expired_entries(cache, clock):
    cache.set("stale", 1, ttl_seconds=1)
    cache.set("fresh", 2, ttl_seconds=100)
    clock.advance(5)

    assert cache.sweep() == 1
    assert cache.stats()["size"] == 1


def test_sweep_skipped_while_in_flight(cache, clock):
    cache.set("stale", 1, ttl_seconds=1)
    clock.advance(5)

    cache._sweep_lock.acquire()
    try:
        assert cache.sweep() == 0
    finally:
        cache._sweep_lock.release()
    assert cache.sweep() == 1


def test_background_sweeper_runs_and_stops():
    with TTLCache(capacity=10, sweep_interval=0.01) as cache:
        assert cache.sweeping
        cache.set("gone", 1, ttl_seconds=0.01)
        deadline = time.monotonic() + 2
        while cache.stats()["expirations"] == 0 and time.monotonic() < deadline:
            time.sleep(0.01)
        assert cache.stats()["expirations"] == 1
    assert not cache.sweeping


def test_memoize_sync(cache):
    calls = []

    @memoize(cache, "suppliers", ttl_seconds=30)
    def load(city):
        calls.append(city)
        return [{"city": city}]

    assert load("Boston") == [{"city": "Boston"}]
    assert load("Boston") == [{"city": "Boston"}]
    assert load("Chicago") == [{"city": "Chicago"}]
    assert calls == ["Boston", "Chicago"]


def test_memoize_async(cache):
    calls = []

    @memoize(cache, "inventory")
    async def load(warehouse):
        calls.append(warehouse)
        return {"warehouse": warehouse, "items": 3}

    async def run():
        first = await load("Main")
        second = await load("Main")
        return first, second

    first, second = asyncio.run(run())
    assert first == second == {"warehouse": "Main", "items": 3}
    assert calls == ["Main"]


def test_memoize_unserializable_result_is_not_cached(cache):
    calls = []

    @memoize(cache, "handles")
    def open_handle():
        calls.append(1)
        return object()

    open_handle()
    open_handle()
    assert len(calls) == 2
    assert len(cache) == 0
