"""Single-slot, time-bounded snapshot cache.

The slot holds at most one snapshot and the monotonic time it was stored.
The lock guards only reads and writes of the slot; the upstream refresh runs
outside it. Concurrent misses are not coalesced: each caller refreshes and
the last write wins.
"""

import threading
import time
from collections.abc import Callable
from enum import Enum
from typing import Protocol

import structlog

from validator_rewards.cache.metrics import CacheMetrics
from validator_rewards.constants import CACHE_TTL_SECONDS
from validator_rewards.data_model.snapshot import Snapshot
from validator_rewards.errors import UpstreamError


logger = structlog.get_logger()


class CacheState(str, Enum):
    """Slot states."""

    EMPTY = "EMPTY"
    POPULATED = "POPULATED"


class Refresher(Protocol):
    """Anything that can build a new snapshot."""

    def refresh(self) -> Snapshot:
        """Build a new snapshot or raise an upstream error."""
        ...


class SnapshotCache:
    """Holds the latest snapshot for a fixed freshness window.

    TTL is measured from when the snapshot was stored, not from last access.
    """

    def __init__(
        self,
        aggregator: Refresher,
        ttl_seconds: float = CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        metrics: CacheMetrics | None = None,
    ) -> None:
        """Initialize an empty cache.

        Args:
            aggregator: Builds snapshots on miss.
            ttl_seconds: Freshness window in seconds.
            clock: Monotonic clock in seconds.
            metrics: Optional metrics instance.
        """
        self._aggregator = aggregator
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._metrics = metrics or CacheMetrics.get_instance()
        self._lock = threading.Lock()
        self._slot: tuple[Snapshot, float] | None = None
        self._log = logger.bind(component="cache")

    @property
    def ttl_seconds(self) -> float:
        """Freshness window in seconds."""
        return self._ttl_seconds

    @property
    def state(self) -> CacheState:
        """Current slot state."""
        with self._lock:
            return CacheState.EMPTY if self._slot is None else CacheState.POPULATED

    def peek(self) -> Snapshot | None:
        """Return the stored snapshot without refreshing, fresh or not."""
        with self._lock:
            return self._slot[0] if self._slot is not None else None

    def get(self) -> Snapshot:
        """Return a fresh snapshot, refreshing on miss or expiry.

        Returns:
            The cached snapshot if within TTL, else a newly built one.

        Raises:
            UpstreamFetchError: If a needed refresh fails at transport level.
            UpstreamDecodeError: If a needed refresh gets a malformed response.
        """
        with self._lock:
            slot = self._slot

        if slot is not None:
            snapshot, created_at = slot
            age = self._clock() - created_at
            if age < self._ttl_seconds:
                self._metrics.record_hit()
                self._log.debug("cache_hit", age_seconds=round(age, 3))
                return snapshot

        self._metrics.record_miss()
        self._log.info(
            "cache_miss",
            reason="empty" if slot is None else "expired",
        )

        try:
            snapshot = self._aggregator.refresh()
        except UpstreamError:
            self._metrics.record_refresh_failure()
            raise

        created_at = self._clock()
        with self._lock:
            self._slot = (snapshot, created_at)
        self._metrics.record_refresh()
        self._log.info(
            "snapshot_refreshed",
            timestamp=snapshot.timestamp.isoformat(),
            total=snapshot.total,
        )
        return snapshot

    def invalidate(self) -> None:
        """Drop the stored snapshot; the next get() refreshes."""
        with self._lock:
            self._slot = None
        self._metrics.record_invalidation()
        self._log.info("cache_invalidated")
