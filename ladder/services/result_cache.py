"""
TTL result cache for expensive recomputation over rosters and match sets.

Each data class (roster, profiles, match stats, rating-history deltas) gets
its own cache instance with its own TTL. Not thread-safe: callers must ensure
at most one recomputation per key is in flight.
"""

import time
from typing import Callable, Dict, Generic, Hashable, Tuple, TypeVar
from ladder.constants import CacheConstants
from ladder.utils.logger import setup_logger

logger = setup_logger(__name__)

K = TypeVar('K', bound=Hashable)
V = TypeVar('V')


class _Miss:
    def __repr__(self):
        return 'MISS'

    def __bool__(self):
        return False


MISS = _Miss()


class ResultCache(Generic[K, V]):
    """Key -> (computed_at, value) store with a fixed time-to-live."""

    def __init__(self, ttl_seconds: float, max_size: int = CacheConstants.DEFAULT_MAX_CACHE_SIZE,
                 clock: Callable[[], float] = time.monotonic, name: str = 'cache'):
        if ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be positive, got {ttl_seconds}")
        self.ttl = ttl_seconds
        self.name = name
        self._clock = clock
        self._cache: Dict[K, Tuple[float, V]] = {}  # key -> (timestamp, value)
        self._cache_max_size = max_size

    def get(self, key: K):
        """Return the cached value, or MISS when absent or expired."""
        if key in self._cache:
            timestamp, value = self._cache[key]
            if self._clock() - timestamp < self.ttl:
                logger.debug(f"[{self.name}] cache hit for {key}")
                return value
            self._cache.pop(key, None)
        logger.debug(f"[{self.name}] cache miss for {key}")
        return MISS

    def set(self, key: K, value: V) -> None:
        self._cache[key] = (self._clock(), value)

        # Cleanup old entries if cache too large
        if len(self._cache) > self._cache_max_size:
            self._cleanup_cache()

    def get_or_compute(self, key: K, compute: Callable[[], V]) -> V:
        """Return a fresh cached value or compute, store and return a new one."""
        value = self.get(key)
        if value is MISS:
            value = compute()
            self.set(key, value)
        return value

    def invalidate(self, key: K) -> None:
        """Invalidate cache for specific key."""
        if key in self._cache:
            logger.debug(f"[{self.name}] invalidating {key}")
            self._cache.pop(key, None)

    def invalidate_all(self) -> None:
        """Clear entire cache."""
        logger.info(f"Clearing entire {self.name} cache")
        self._cache.clear()

    def __contains__(self, key: K) -> bool:
        return self.get(key) is not MISS

    def __len__(self) -> int:
        return len(self._cache)

    def _cleanup_cache(self):
        """Remove oldest cache entries to stay within size limit."""
        # Sort by timestamp and keep newest entries
        sorted_items = sorted(self._cache.items(), key=lambda x: x[1][0], reverse=True)
        self._cache = dict(sorted_items[:self._cache_max_size])
        logger.debug(f"Cleaned {self.name} cache, kept {len(self._cache)} entries")
