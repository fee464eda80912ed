"""Domain and upstream data models."""

from validator_rewards.data_model.base import StrictBaseModel, UpstreamModel
from validator_rewards.data_model.raw import (
    RawDenormalizedEntity,
    RawEntity,
    RawEntityList,
    RawMinimalConditions,
    RawProviderSuccessRate,
    RawRewards,
    RawSigningPolicy,
)
from validator_rewards.data_model.snapshot import Snapshot
from validator_rewards.data_model.validator import (
    Conditions,
    ProviderStats,
    RewardRates,
    Validator,
)


__all__ = [
    "Conditions",
    "ProviderStats",
    "RawDenormalizedEntity",
    "RawEntity",
    "RawEntityList",
    "RawMinimalConditions",
    "RawProviderSuccessRate",
    "RawRewards",
    "RawSigningPolicy",
    "RewardRates",
    "Snapshot",
    "StrictBaseModel",
    "UpstreamModel",
    "Validator",
]
