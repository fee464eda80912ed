"""Normalization of raw explorer entities."""

from validator_rewards.normalizer.normalizer import (
    normalize_conditions,
    normalize_entities,
    normalize_entity,
    normalize_provider_stats,
    normalize_rewards,
)


__all__ = [
    "normalize_conditions",
    "normalize_entities",
    "normalize_entity",
    "normalize_provider_stats",
    "normalize_rewards",
]
