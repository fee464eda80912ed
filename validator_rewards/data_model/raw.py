"""Raw entity payloads as published by the Flare Systems Explorer API.

Every field except the entity id may be absent. Defaulting happens in the
normalizer, not here.
"""

from typing import Annotated

from pydantic import Field

from validator_rewards.data_model.base import UpstreamModel


class RawMinimalConditions(UpstreamModel):
    """``entityminimalconditions`` sub-record."""

    ftso_scaling: bool | None = None
    ftso_fast_updates: bool | None = None
    fdc: bool | None = None
    staking: bool | None = None
    passes_held: Annotated[int, Field(ge=0)] | None = None
    eligible_for_reward: bool | None = None


class RawRewards(UpstreamModel):
    """``rewards`` sub-record."""

    reward_rate_wnat: float | None = None
    reward_rate_mirror: float | None = None
    reward_rate_pure: float | None = None


class RawProviderSuccessRate(UpstreamModel):
    """``providersuccessrate`` sub-record. Availability is a percentage."""

    primary: int | None = None
    secondary: int | None = None
    availability: float | None = None
    active: bool | None = None


class RawDenormalizedEntity(UpstreamModel):
    """``denormalizedentity`` sub-record."""

    id: int | None = None
    node_ids: list[str] | None = None
    public_key: str | None = None
    submit_signatures_address: str | None = None
    submit_address: str | None = None
    signing_policy_address: str | None = None
    delegation_address: str | None = None
    rewards_signed: int | None = None
    uptime_signed: int | None = None


class RawSigningPolicy(UpstreamModel):
    """``denormalizedsigningpolicy`` sub-record."""

    delegation_address: str | None = None


class RawEntity(UpstreamModel):
    """One entity record from the ``/entity`` listing."""

    id: int
    display_name: str | None = None
    denormalizedentity: RawDenormalizedEntity | None = None
    entityminimalconditions: RawMinimalConditions | None = None
    rewards: RawRewards | None = None
    providersuccessrate: RawProviderSuccessRate | None = None
    denormalizedsigningpolicy: RawSigningPolicy | None = None


class RawEntityList(UpstreamModel):
    """Paged ``/entity`` response body."""

    results: list[RawEntity]
