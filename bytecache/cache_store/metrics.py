"""
Counters describing how a cache has been used.
"""

from dataclasses import dataclass


@dataclass
class CacheMetrics:
    """
    Snapshot of cache activity.

    Attributes:
        hits: Number of ``get`` calls that found their key
        misses: Number of ``get`` calls that did not
        evictions: Entries removed by the capacity loop, ``remove_oldest``,
            ``remove`` or ``clear``
        current_size: Live entries when the snapshot was taken
        current_bytes: Tracked bytes when the snapshot was taken
        max_bytes: Configured byte budget (0 means unbounded)
    """
    hits: int = 0
    misses: int = 0
    evictions: int = 0
    current_size: int = 0
    current_bytes: int = 0
    max_bytes: int = 0

    @property
    def total_lookups(self) -> int:
        return self.hits + self.misses

    @property
    def hit_rate(self) -> float:
        """Fraction of lookups that were hits, 0.0 when nothing was looked up."""
        total = self.total_lookups
        return self.hits / total if total > 0 else 0.0

    def to_dict(self) -> dict:
        """Convert metrics to a dictionary for easy serialization."""
        return {
            'hits': self.hits,
            'misses': self.misses,
            'evictions': self.evictions,
            'hit_rate': self.hit_rate,
            'current_size': self.current_size,
            'current_bytes': self.current_bytes,
            'max_bytes': self.max_bytes,
        }

    def __str__(self) -> str:
        budget = "unbounded" if self.max_bytes == 0 else str(self.max_bytes)
        return (
            f"CacheMetrics(hits={self.hits}, misses={self.misses}, "
            f"hit_rate={self.hit_rate:.1%}, entries={self.current_size}, "
            f"bytes={self.current_bytes}/{budget}, evictions={self.evictions})"
        )
