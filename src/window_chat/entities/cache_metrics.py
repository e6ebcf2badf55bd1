"""Cache hit accounting."""

from dataclasses import dataclass


@dataclass
class CacheMetrics:
    """Track lookup outcomes and evictions for a response cache."""

    total_lookups: int = 0
    cache_hits: int = 0
    cache_misses: int = 0
    evictions: int = 0

    @property
    def hit_rate(self) -> float:
        """Calculate cache hit rate."""
        if self.total_lookups == 0:
            return 0.0
        return self.cache_hits / self.total_lookups

    def record_hit(self) -> None:
        self.total_lookups += 1
        self.cache_hits += 1

    def record_miss(self) -> None:
        self.total_lookups += 1
        self.cache_misses += 1

    def record_evictions(self, count: int) -> None:
        self.evictions += count

    def to_dict(self) -> dict[str, float | int]:
        """Convert metrics to dictionary."""
        return {
            "total_lookups": self.total_lookups,
            "cache_hits": self.cache_hits,
            "cache_misses": self.cache_misses,
            "evictions": self.evictions,
            "hit_rate": self.hit_rate,
        }
