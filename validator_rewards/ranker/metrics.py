"""Metrics collection for the ranker module."""

from dataclasses import dataclass, field
from threading import Lock


# Module-level singleton state
_metrics_instance: "RankerMetrics | None" = None
_metrics_lock: Lock = Lock()


@dataclass
class RankerMetrics:
    """Thread-safe metrics for classification and ranking.

    Partition sizes describe the most recent run; refreshes from concurrent
    cache misses update them under the instance lock.

    Attributes:
        validators_in: Validators in the most recent run.
        eligible_count: Eligible validators in the most recent run.
        ineligible_count: Ineligible validators in the most recent run.
        runs_total: Number of classify-and-rank runs.
        duration_ms: Duration of the most recent run.
    """

    _lock: Lock = field(default_factory=Lock, repr=False, compare=False)

    validators_in: int = 0
    eligible_count: int = 0
    ineligible_count: int = 0
    runs_total: int = 0
    duration_ms: float = 0.0

    @classmethod
    def get_instance(cls) -> "RankerMetrics":
        """Get the singleton instance (thread-safe)."""
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

    def record_partition(
        self, validators_in: int, eligible: int, ineligible: int
    ) -> None:
        """Record partition sizes for a run.

        Args:
            validators_in: Number of input validators.
            eligible: Number of eligible validators.
            ineligible: Number of ineligible validators.
        """
        with self._lock:
            self.validators_in = validators_in
            self.eligible_count = eligible
            self.ineligible_count = ineligible
            self.runs_total += 1

    def record_duration(self, duration_ms: float) -> None:
        """Record run duration.

        Args:
            duration_ms: Duration in milliseconds.
        """
        with self._lock:
            self.duration_ms = duration_ms

    def to_dict(self) -> dict[str, int | float]:
        """Convert metrics to dictionary."""
        with self._lock:
            return {
                "validators_in": self.validators_in,
                "eligible_count": self.eligible_count,
                "ineligible_count": self.ineligible_count,
                "runs_total": self.runs_total,
                "duration_ms": self.duration_ms,
            }
