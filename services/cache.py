"""TTL-based in-memory cache with bounded eviction and a background sweep."""

import functools
import inspect
import json
import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 300
DEFAULT_CAPACITY = 1000

# Occupancy above which the least-used pass kicks in, and the share of
# capacity it removes.
HIGH_WATER_PERCENT = 80
EVICT_PERCENT = 20


class CacheError(Exception):
    """Base class for cache errors."""


class SerializationError(CacheError):
    """Raised when a value cannot be deep-copied into the cache."""


@dataclass
class CacheEntry:
    key: str
    payload: str
    stored_at: float
    ttl_seconds: float
    hit_count: int = 0

    def is_expired(self, now: float) -> bool:
        return now - self.stored_at > self.ttl_seconds


def _serialize(value: Any) -> str:
    try:
        return json.dumps(value)
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Value of type {type(value).__name__} cannot be cached: {e}") from e


class TTLCache:
    """A dictionary-based TTL cache.

    Values are stored as JSON text, so every ``get`` hands back a fresh copy
    and nothing the caller holds is ever aliased with cache state. When an
    insert fills the cache, expired entries are dropped first and, if
    occupancy is still above the high-water mark, the least-hit entries go
    next.
    """

    def __init__(
        self,
        capacity: int = DEFAULT_CAPACITY,
        default_ttl: float = DEFAULT_TTL_SECONDS,
        sweep_interval: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self.default_ttl = default_ttl
        self._clock = clock
        self._cache: Dict[str, CacheEntry] = {}
        self._lock = threading.RLock()
        self._sweep_lock = threading.Lock()
        self._stop = threading.Event()
        self._sweeper: Optional[threading.Thread] = None

        self._hits = 0
        self._misses = 0
        self._evictions = 0
        self._expirations = 0

        if sweep_interval:
            self._start_sweeper(sweep_interval)

    def get(self, key: str, default: Any = None) -> Any:
        """Retrieve a copy of a value if it exists and hasn't expired."""
        with self._lock:
            entry = self._cache.get(key)
            if entry is None:
                self._misses += 1
                return default
            if entry.is_expired(self._clock()):
                # Remove expired entry
                del self._cache[key]
                self._expirations += 1
                self._misses += 1
                return default
            entry.hit_count += 1
            self._hits += 1
            payload = entry.payload
        return json.loads(payload)

    def set(self, key: str, value: Any, ttl_seconds: Optional[float] = None):
        """Store a copy of a value with a TTL (time-to-live) in seconds."""
        payload = _serialize(value)
        ttl = self.default_ttl if ttl_seconds is None else ttl_seconds
        with self._lock:
            # Refreshed keys move to the back of the eviction order
            self._cache.pop(key, None)
            self._cache[key] = CacheEntry(
                key=key,
                payload=payload,
                stored_at=self._clock(),
                ttl_seconds=ttl,
            )
            if len(self._cache) >= self.capacity:
                self._evict(exclude=key)

    def delete(self, key: str):
        """Remove a single entry, if present."""
        with self._lock:
            self._cache.pop(key, None)

    def clear(self):
        """Clear all entries from the cache."""
        with self._lock:
            self._cache.clear()

    def cleanup_expired(self) -> int:
        """Remove expired entries from the cache and return how many went."""
        with self._lock:
            now = self._clock()
            expired_keys = [
                key for key, entry in self._cache.items()
                if entry.is_expired(now)
            ]
            for key in expired_keys:
                del self._cache[key]
            self._expirations += len(expired_keys)
            return len(expired_keys)

    def _evict(self, exclude: Optional[str] = None):
        expired = self.cleanup_expired()

        removed = 0
        if len(self._cache) * 100 > self.capacity * HIGH_WATER_PERCENT:
            # The entry being inserted is never a candidate
            candidates = [entry for entry in self._cache.values() if entry.key != exclude]
            # sorted() is stable, so equal hit counts keep insertion order
            ranked = sorted(candidates, key=lambda entry: entry.hit_count)
            count = max(1, self.capacity * EVICT_PERCENT // 100)
            for entry in ranked[:count]:
                del self._cache[entry.key]
            removed = min(count, len(ranked))
            self._evictions += removed

        logger.debug(
            f"Cache eviction: {expired} expired, {removed} least-used removed, "
            f"{len(self._cache)}/{self.capacity} remaining"
        )

    def entry_info(self, key: str) -> Optional[Dict[str, Any]]:
        """Return metadata for a live entry without counting it as a hit."""
        with self._lock:
            entry = self._cache.get(key)
            now = self._clock()
            if entry is None or entry.is_expired(now):
                return None
            return {
                "key": entry.key,
                "hit_count": entry.hit_count,
                "stored_at": entry.stored_at,
                "ttl_seconds": entry.ttl_seconds,
                "expires_in": max(0.0, entry.stored_at + entry.ttl_seconds - now),
            }

    def stats(self) -> Dict[str, Any]:
        """Snapshot of occupancy and counters."""
        with self._lock:
            size = len(self._cache)
            return {
                "size": size,
                "capacity": self.capacity,
                # Half-up rounding of size / capacity * 100
                "usage_percent": (size * 200 + self.capacity) // (2 * self.capacity),
                "default_ttl": self.default_ttl,
                "hits": self._hits,
                "misses": self._misses,
                "evictions": self._evictions,
                "expirations": self._expirations,
            }

    def sweep(self) -> int:
        """Run one background sweep pass, skipping it if one is in flight."""
        if not self._sweep_lock.acquire(blocking=False):
            logger.debug("Cache sweep already running, skipping tick")
            return 0
        try:
            removed = self.cleanup_expired()
            if removed:
                logger.debug(f"Cache sweep removed {removed} expired entries")
            return removed
        finally:
            self._sweep_lock.release()

    def _start_sweeper(self, interval: float):
        def run():
            while not self._stop.wait(interval):
                try:
                    self.sweep()
                except Exception as e:
                    logger.error(f"Cache sweep failed: {e}")

        self._sweeper = threading.Thread(target=run, name="ttl-cache-sweeper", daemon=True)
        self._sweeper.start()
        logger.info(f"Started cache sweeper with {interval}s interval")

    @property
    def sweeping(self) -> bool:
        return self._sweeper is not None and self._sweeper.is_alive()

    def close(self):
        """Stop the background sweeper, if one is running."""
        self._stop.set()
        if self._sweeper is not None:
            self._sweeper.join()
            self._sweeper = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    def __contains__(self, key: str) -> bool:
        with self._lock:
            entry = self._cache.get(key)
            return entry is not None and not entry.is_expired(self._clock())


_MISSING = object()


def memoize(cache: TTLCache, key_prefix: str, ttl_seconds: Optional[float] = None):
    """Cache a function's JSON-serializable results keyed on its arguments.

    Works for both plain and ``async`` functions.
    """

    def make_key(args, kwargs) -> str:
        return f"{key_prefix}_{json.dumps([args, kwargs], sort_keys=True, default=str)}"

    def store(key: str, result: Any):
        try:
            cache.set(key, result, ttl_seconds)
        except SerializationError as e:
            logger.warning(f"Not caching result for {key_prefix}: {e}")

    def decorator(func):
        if inspect.iscoroutinefunction(func):
            @functools.wraps(func)
            async def async_wrapper(*args, **kwargs):
                key = make_key(args, kwargs)
                cached = cache.get(key, _MISSING)
                if cached is not _MISSING:
                    return cached
                result = await func(*args, **kwargs)
                store(key, result)
                return result

            return async_wrapper

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            key = make_key(args, kwargs)
            cached = cache.get(key, _MISSING)
            if cached is not _MISSING:
                return cached
            result = func(*args, **kwargs)
            store(key, result)
            return result

        return wrapper

    return decorator
