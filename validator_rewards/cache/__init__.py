"""Time-bounded single-slot snapshot cache."""

from validator_rewards.cache.metrics import CacheMetrics
from validator_rewards.cache.snapshot_cache import CacheState, Refresher, SnapshotCache


__all__ = [
    "CacheMetrics",
    "CacheState",
    "Refresher",
    "SnapshotCache",
]
