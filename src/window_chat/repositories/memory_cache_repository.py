"""In-memory implementation of CacheStore.

Entries live in a dict for the lifetime of the process. The store is
bounded: after every ``put`` the least recently accessed entries are evicted
until at most ``max_size`` remain.
"""

import itertools
import logging
import time
from collections.abc import Callable

from window_chat.config import settings
from window_chat.entities import CacheEntryEntity, CacheKeyEntity

logger = logging.getLogger(__name__)


class InMemoryCacheRepository:
    """Bounded dict-backed cache store with least-recently-accessed eviction.

    This class satisfies the CacheStore protocol through structural
    typing - no explicit inheritance needed.

    Eviction order is ``(last_accessed_at, sequence)`` ascending, where
    ``sequence`` is the insertion number. Entries accessed at the same
    instant are therefore evicted in insertion order, independent of dict
    iteration order.
    """

    def __init__(
        self,
        max_size: int | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        """Initialize the repository.

        Args:
            max_size: Maximum number of entries. Defaults to settings.
            clock: Returns the current Unix time. Defaults to time.time.
        """
        self._max_size = max_size if max_size is not None else settings.cache_max_size
        if self._max_size < 1:
            raise ValueError(f"max_size must be at least 1, got {self._max_size}")

        self._clock = clock or time.time
        self._entries: dict[CacheKeyEntity, CacheEntryEntity] = {}
        self._sequence = itertools.count()

    @classmethod
    def create(
        cls,
        max_size: int | None = None,
        clock: Callable[[], float] | None = None,
    ) -> "InMemoryCacheRepository":
        """Factory method to create InMemoryCacheRepository with defaults.

        Args:
            max_size: Entry bound. If None, uses settings.
            clock: Time source. If None, uses time.time.

        Returns:
            Configured InMemoryCacheRepository
        """
        return cls(max_size=max_size, clock=clock)

    @property
    def max_size(self) -> int:
        return self._max_size

    def get(self, key: CacheKeyEntity) -> CacheEntryEntity | None:
        entry = self._entries.get(key)
        if entry is not None:
            entry.touch(self._clock())
        return entry

    def put(self, key: CacheKeyEntity, response: str) -> list[CacheKeyEntity]:
        now = self._clock()
        self._entries[key] = CacheEntryEntity(
            response=response,
            created_at=now,
            sequence=next(self._sequence),
        )
        return self._evict()

    def contains(self, key: CacheKeyEntity) -> bool:
        return key in self._entries

    def peek(self, key: CacheKeyEntity) -> CacheEntryEntity | None:
        """Return the entry for ``key`` without recording a hit."""
        return self._entries.get(key)

    def clear_all(self) -> int:
        count = len(self._entries)
        self._entries.clear()
        return count

    def count_all(self) -> int:
        return len(self._entries)

    def get_stats(self) -> dict:
        return {
            "total_entries": len(self._entries),
            "max_size": self._max_size,
            "total_hits": sum(entry.hit_count - 1 for entry in self._entries.values()),
        }

    def _evict(self) -> list[CacheKeyEntity]:
        """Drop least recently accessed entries until the bound holds."""
        overflow = len(self._entries) - self._max_size
        if overflow <= 0:
            return []

        ranked = sorted(self._entries, key=lambda k: self._entries[k].eviction_rank)
        evicted = ranked[:overflow]
        for key in evicted:
            del self._entries[key]
            logger.debug("Evicted cache entry for %r", key.message)
        return evicted
