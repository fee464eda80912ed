"""Data models for the classifier and ranker."""

from dataclasses import dataclass, field

from validator_rewards.data_model.validator import Validator


@dataclass
class Partition:
    """Validators split by reward eligibility.

    Attributes:
        eligible: Validators meeting every condition.
        ineligible: Validators failing at least one condition, upstream order.
    """

    eligible: list[Validator] = field(default_factory=list)
    ineligible: list[Validator] = field(default_factory=list)

    @property
    def total(self) -> int:
        """Number of validators across both partitions."""
        return len(self.eligible) + len(self.ineligible)
