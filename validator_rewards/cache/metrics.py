"""Metrics collection for the snapshot cache."""

from dataclasses import dataclass, field
from threading import Lock


# Module-level singleton state
_metrics_instance: "CacheMetrics | None" = None
_metrics_lock: Lock = Lock()


@dataclass
class CacheMetrics:
    """Thread-safe metrics for snapshot cache operations.

    Request handlers run on a worker threadpool, so every update takes the
    instance lock. Use get_instance() for singleton access.

    Attributes:
        hits_total: Reads served from a fresh snapshot.
        misses_total: Reads that found the slot empty or stale.
        refreshes_total: Successful refreshes stored in the slot.
        refresh_failures_total: Refreshes that raised an upstream error.
        invalidations_total: Explicit invalidations.
    """

    _lock: Lock = field(default_factory=Lock, repr=False, compare=False)

    hits_total: int = 0
    misses_total: int = 0
    refreshes_total: int = 0
    refresh_failures_total: int = 0
    invalidations_total: int = 0

    @classmethod
    def get_instance(cls) -> "CacheMetrics":
        """Get the singleton instance (thread-safe).

        Returns:
            The shared CacheMetrics instance.
        """
        global _metrics_instance  # noqa: PLW0603
        if _metrics_instance is None:
            with _metrics_lock:
                if _metrics_instance is None:
                    _metrics_instance = cls()
        return _metrics_instance

    @classmethod
    def reset(cls) -> None:
        """Reset the singleton instance (for testing)."""
        global _metrics_instance  # noqa: PLW0603
        with _metrics_lock:
            _metrics_instance = None

    def record_hit(self) -> None:
        """Record a cache hit."""
        with self._lock:
            self.hits_total += 1

    def record_miss(self) -> None:
        """Record a cache miss."""
        with self._lock:
            self.misses_total += 1

    def record_refresh(self) -> None:
        """Record a stored refresh."""
        with self._lock:
            self.refreshes_total += 1

    def record_refresh_failure(self) -> None:
        """Record a failed refresh."""
        with self._lock:
            self.refresh_failures_total += 1

    def record_invalidation(self) -> None:
        """Record an invalidation."""
        with self._lock:
            self.invalidations_total += 1

    @property
    def hit_ratio(self) -> float:
        """Fraction of reads served from cache."""
        with self._lock:
            return self._hit_ratio()

    def _hit_ratio(self) -> float:
        reads = self.hits_total + self.misses_total
        if reads == 0:
            return 0.0
        return self.hits_total / reads

    def to_dict(self) -> dict[str, int | float]:
        """Convert metrics to dictionary.

        Returns:
            Dictionary of metric name to value.
        """
        with self._lock:
            return {
                "hits_total": self.hits_total,
                "misses_total": self.misses_total,
                "refreshes_total": self.refreshes_total,
                "refresh_failures_total": self.refresh_failures_total,
                "invalidations_total": self.invalidations_total,
                "hit_ratio": self._hit_ratio(),
            }
