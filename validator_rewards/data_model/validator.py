"""Domain models for a validator and its sub-records."""

from typing import Annotated

from pydantic import Field

from validator_rewards.data_model.base import StrictBaseModel


class Conditions(StrictBaseModel):
    """Minimal conditions a validator must meet to earn rewards.

    Attributes:
        ftso_anchor_feeds: Participates in FTSO anchor (scaling) feeds.
        ftso_block_latency_feeds: Participates in FTSO block-latency feeds.
        fdc: Participates in the Flare Data Connector.
        staking: Meets the staking condition.
        passes: Number of passes held.
        eligible_for_reward: Eligibility flag asserted by the upstream source.
    """

    ftso_anchor_feeds: bool = False
    ftso_block_latency_feeds: bool = False
    fdc: bool = False
    staking: bool = False
    passes: Annotated[int, Field(ge=0)] = 0
    eligible_for_reward: bool = False


class RewardRates(StrictBaseModel):
    """Reward rate components and their combined sum."""

    wnat: float = 0.0
    mirror: float = 0.0
    pure: float = 0.0
    combined: float = 0.0

    @classmethod
    def from_components(
        cls,
        wnat: float = 0.0,
        mirror: float = 0.0,
        pure: float = 0.0,
    ) -> "RewardRates":
        """Build rates with ``combined`` set to the sum of the components.

        Args:
            wnat: WNat reward rate.
            mirror: Mirror reward rate.
            pure: Pure reward rate.

        Returns:
            RewardRates instance.
        """
        return cls(wnat=wnat, mirror=mirror, pure=pure, combined=wnat + mirror + pure)


class ProviderStats(StrictBaseModel):
    """Provider success-rate counters. Informational only."""

    primary: int | None = None
    secondary: int | None = None
    availability: float | None = None
    active: bool | None = None


class Validator(StrictBaseModel):
    """A network validator as published by this service."""

    id: int
    name: str
    node_id: str | None = None
    delegation_address: str | None = None
    conditions: Conditions | None = None
    provider_stats: ProviderStats | None = None
    reward_rates: RewardRates | None = None

    @property
    def combined_rate(self) -> float:
        """Combined reward rate, 0.0 when no rates were published."""
        if self.reward_rates is None:
            return 0.0
        return self.reward_rates.combined
