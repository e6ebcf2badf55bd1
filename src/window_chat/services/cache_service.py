"""Response cache service.

Turns a user message plus the conversation so far into a cache key and
delegates storage to a CacheStore. Two messages share a cached reply only
when they are equal after trimming and case folding AND follow the same
last turns of conversation.
"""

import logging
from collections.abc import Sequence

from window_chat.config import settings
from window_chat.entities import CacheKeyEntity, CacheMetrics
from window_chat.protocols import CacheStore

from .context import extract_context, normalize_message

logger = logging.getLogger(__name__)


class CacheService:
    """Context-aware response cache.

    This service depends on the CacheStore PROTOCOL, not a concrete
    implementation, so the in-memory store can be swapped out.

    Example:
        ```python
        from window_chat.repositories import InMemoryCacheRepository
        from window_chat.services import CacheService

        cache = CacheService.create(repository=InMemoryCacheRepository.create(max_size=50))

        cache.store("Explain recursion", "Recursion is...", history=[])
        cache.lookup("  explain RECURSION ", history=[])  # "Recursion is..."
        cache.lookup("Explain recursion", history=["Hi", "Hello!"])  # None
        ```
    """

    def __init__(
        self,
        repository: CacheStore,
        context_turns: int | None = None,
    ) -> None:
        """Initialize the cache service.

        Args:
            repository: Cache storage backend (required).
            context_turns: Number of preceding turns in each key. Defaults to settings.
        """
        self._repository = repository
        self._context_turns = context_turns if context_turns is not None else settings.context_turns
        self._metrics = CacheMetrics()

    @classmethod
    def create(
        cls,
        repository: CacheStore,
        context_turns: int | None = None,
    ) -> "CacheService":
        """Factory method to create CacheService with sensible defaults.

        Args:
            repository: Cache storage backend (required).
            context_turns: Context window. If None, uses settings.

        Returns:
            Configured CacheService instance
        """
        return cls(repository=repository, context_turns=context_turns)

    def make_key(self, message: str, history: Sequence[str]) -> CacheKeyEntity:
        """Build the cache key for ``message`` following ``history``.

        Raises:
            TypeError: If ``message`` is not a string
        """
        if not isinstance(message, str):
            raise TypeError(f"message must be a str, got {type(message).__name__}")
        return CacheKeyEntity(
            message=normalize_message(message),
            context=extract_context(history, self._context_turns),
        )

    def lookup(self, message: str, history: Sequence[str]) -> str | None:
        """Return the cached reply for ``message`` in this context, or None.

        A hit bumps the entry's hit count and access time.

        Args:
            message: The user's message (any case, surrounding whitespace ignored)
            history: Prior message texts, oldest first

        Returns:
            The cached response text, or None on a miss
        """
        key = self.make_key(message, history)
        entry = self._repository.get(key)

        if entry is None:
            self._metrics.record_miss()
            logger.debug("Cache miss for %r", key.message)
            return None

        self._metrics.record_hit()
        logger.debug("Cache hit for %r (hits=%d)", key.message, entry.hit_count)
        return entry.response

    def store(self, message: str, response: str, history: Sequence[str]) -> CacheKeyEntity:
        """Cache ``response`` for ``message`` in this context.

        May evict the least recently accessed entries to stay within the
        repository's size bound.

        Args:
            message: The user's message
            response: Normalized display text
            history: Prior message texts, oldest first

        Returns:
            The key the response was stored under
        """
        if not isinstance(response, str):
            raise TypeError(f"response must be a str, got {type(response).__name__}")

        key = self.make_key(message, history)
        evicted = self._repository.put(key, response)
        if evicted:
            self._metrics.record_evictions(len(evicted))
            logger.debug("Evicted %d entries to stay within %d", len(evicted), self.max_size)
        return key

    def clear(self) -> int:
        """Clear all cache entries.

        Returns:
            Number of entries deleted
        """
        count = self._repository.clear_all()
        logger.info("Cleared %d cached responses", count)
        return count

    def get_stats(self) -> dict:
        """Get cache statistics.

        Returns:
            Dictionary with cache statistics
        """
        stats = self._repository.get_stats()
        stats["context_turns"] = self._context_turns
        stats.update(self._metrics.to_dict())
        return stats

    @property
    def size(self) -> int:
        return self._repository.count_all()

    @property
    def max_size(self) -> int:
        return self._repository.max_size

    @property
    def context_turns(self) -> int:
        return self._context_turns

    @property
    def metrics(self) -> CacheMetrics:
        return self._metrics

    @property
    def repository(self) -> CacheStore:
        """Get the underlying repository (for testing)."""
        return self._repository
