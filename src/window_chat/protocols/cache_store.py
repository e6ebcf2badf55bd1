"""Cache storage protocol.

Defines the interface for a bounded store of cached replies keyed by
``CacheKeyEntity``. Key computation (normalization, context extraction)
happens in the service layer; a store only deals with finished keys.
"""

from typing import Protocol, runtime_checkable

from window_chat.entities import CacheEntryEntity, CacheKeyEntity


@runtime_checkable
class CacheStore(Protocol):
    """Protocol for cache storage backends.

    Any type that implements these methods satisfies the protocol, no
    explicit inheritance needed.
    """

    @property
    def max_size(self) -> int:
        """Maximum number of entries kept after any ``put``."""
        ...

    def get(self, key: CacheKeyEntity) -> CacheEntryEntity | None:
        """Return the entry for ``key`` and record the hit, or None.

        Args:
            key: The exact key to look up

        Returns:
            The entry, with its access metadata updated, or None on a miss
        """
        ...

    def put(self, key: CacheKeyEntity, response: str) -> list[CacheKeyEntity]:
        """Insert a fresh entry and evict down to ``max_size``.

        Args:
            key: The key to store under (replaces any existing entry)
            response: The normalized reply text

        Returns:
            The keys evicted to make room, oldest first
        """
        ...

    def contains(self, key: CacheKeyEntity) -> bool:
        """Check for ``key`` without touching access metadata."""
        ...

    def clear_all(self) -> int:
        """Clear all entries.

        Returns:
            Number of entries deleted
        """
        ...

    def count_all(self) -> int:
        """Count entries currently stored."""
        ...

    def get_stats(self) -> dict:
        """Get store statistics (implementation-specific)."""
        ...
