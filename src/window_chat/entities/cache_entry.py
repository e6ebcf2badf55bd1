"""Cache entry domain entity."""

from dataclasses import dataclass, field


@dataclass
class CacheEntryEntity:
    """Domain entity for a cached reply.

    The response never changes once the entry exists (assigning it raises
    AttributeError); only the access metadata is updated by ``touch``.

    Attributes:
        response: The normalized display text
        created_at: Unix timestamp of creation
        last_accessed_at: Unix timestamp of the latest hit (or creation)
        hit_count: Number of times the entry was created or served (>= 1)
        sequence: Insertion number, used to break eviction ties
    """

    response: str
    created_at: float
    sequence: int
    last_accessed_at: float = field(default=0.0)
    hit_count: int = 1

    def __setattr__(self, name: str, value) -> None:
        if name == "response" and "response" in self.__dict__:
            raise AttributeError("response of a cache entry is read-only")
        super().__setattr__(name, value)

    def __post_init__(self) -> None:
        if self.last_accessed_at < self.created_at:
            self.last_accessed_at = self.created_at

    def touch(self, now: float) -> None:
        """Record a hit at ``now``."""
        self.hit_count += 1
        self.last_accessed_at = max(now, self.last_accessed_at)

    @property
    def eviction_rank(self) -> tuple[float, int]:
        """Sort key for eviction: least recently accessed, then earliest inserted."""
        return (self.last_accessed_at, self.sequence)
