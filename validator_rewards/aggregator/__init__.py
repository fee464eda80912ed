"""Refresh orchestration."""

from validator_rewards.aggregator.aggregator import EntitySource, SnapshotAggregator


__all__ = [
    "EntitySource",
    "SnapshotAggregator",
]
