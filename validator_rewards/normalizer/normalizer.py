"""Map raw explorer entities onto the Validator domain model.

All defaulting of optional upstream fields happens here. A missing sub-record
means "condition not met" or "no data", never an error.
"""

from collections.abc import Iterable

from validator_rewards.constants import AVAILABILITY_SCALE, UNKNOWN_NAME
from validator_rewards.data_model.raw import (
    RawEntity,
    RawMinimalConditions,
    RawProviderSuccessRate,
    RawRewards,
)
from validator_rewards.data_model.validator import (
    Conditions,
    ProviderStats,
    RewardRates,
    Validator,
)


def normalize_conditions(raw: RawMinimalConditions) -> Conditions:
    """Default each minimal-condition flag independently.

    Args:
        raw: Raw minimal conditions sub-record.

    Returns:
        Conditions with absent flags set to False and passes to 0.
    """
    return Conditions(
        ftso_anchor_feeds=raw.ftso_scaling or False,
        ftso_block_latency_feeds=raw.ftso_fast_updates or False,
        fdc=raw.fdc or False,
        staking=raw.staking or False,
        passes=raw.passes_held or 0,
        eligible_for_reward=raw.eligible_for_reward or False,
    )


def normalize_rewards(raw: RawRewards) -> RewardRates:
    """Default missing rate components to 0.0 and compute the combined rate."""
    return RewardRates.from_components(
        wnat=raw.reward_rate_wnat if raw.reward_rate_wnat is not None else 0.0,
        mirror=raw.reward_rate_mirror if raw.reward_rate_mirror is not None else 0.0,
        pure=raw.reward_rate_pure if raw.reward_rate_pure is not None else 0.0,
    )


def normalize_provider_stats(raw: RawProviderSuccessRate) -> ProviderStats:
    """Convert provider success-rate counters; availability becomes a ratio."""
    availability = None
    if raw.availability is not None:
        availability = raw.availability / AVAILABILITY_SCALE
    return ProviderStats(
        primary=raw.primary,
        secondary=raw.secondary,
        availability=availability,
        active=raw.active,
    )


def normalize_entity(raw: RawEntity) -> Validator:
    """Produce exactly one Validator from a raw entity record.

    Args:
        raw: Raw entity; any field but the id may be absent.

    Returns:
        Fully defaulted Validator.
    """
    node_id = None
    if raw.denormalizedentity is not None and raw.denormalizedentity.node_ids:
        node_id = raw.denormalizedentity.node_ids[0]

    delegation_address = None
    if raw.denormalizedsigningpolicy is not None:
        delegation_address = raw.denormalizedsigningpolicy.delegation_address

    conditions = None
    if raw.entityminimalconditions is not None:
        conditions = normalize_conditions(raw.entityminimalconditions)

    reward_rates = None
    if raw.rewards is not None:
        reward_rates = normalize_rewards(raw.rewards)

    provider_stats = None
    if raw.providersuccessrate is not None:
        provider_stats = normalize_provider_stats(raw.providersuccessrate)

    return Validator(
        id=raw.id,
        name=raw.display_name if raw.display_name is not None else UNKNOWN_NAME,
        node_id=node_id,
        delegation_address=delegation_address,
        conditions=conditions,
        provider_stats=provider_stats,
        reward_rates=reward_rates,
    )


def normalize_entities(raws: Iterable[RawEntity]) -> list[Validator]:
    """Normalize every record, preserving upstream order."""
    return [normalize_entity(raw) for raw in raws]
