"""Snapshot model: one fully classified view of all validators."""

from datetime import datetime
from typing import Annotated, Self

from pydantic import Field, model_validator

from validator_rewards.data_model.base import StrictBaseModel
from validator_rewards.data_model.validator import Validator


class Snapshot(StrictBaseModel):
    """Immutable result of one refresh.

    Attributes:
        timestamp: UTC creation time.
        total: Number of validators received from upstream.
        eligible: Eligible validators, combined reward rate descending.
        ineligible: Ineligible validators, upstream order.
        eligible_count: Length of ``eligible``.
        ineligible_count: Length of ``ineligible``.
    """

    timestamp: datetime
    total: Annotated[int, Field(ge=0)]
    eligible: tuple[Validator, ...] = ()
    ineligible: tuple[Validator, ...] = ()
    eligible_count: Annotated[int, Field(ge=0)] = 0
    ineligible_count: Annotated[int, Field(ge=0)] = 0

    @model_validator(mode="after")
    def check_counts(self) -> Self:
        """Ensure counts agree with the partitions."""
        if self.eligible_count != len(self.eligible):
            msg = f"eligible_count {self.eligible_count} != {len(self.eligible)}"
            raise ValueError(msg)
        if self.ineligible_count != len(self.ineligible):
            msg = f"ineligible_count {self.ineligible_count} != {len(self.ineligible)}"
            raise ValueError(msg)
        if self.total != self.eligible_count + self.ineligible_count:
            msg = (
                f"total {self.total} != eligible {self.eligible_count} "
                f"+ ineligible {self.ineligible_count}"
            )
            raise ValueError(msg)
        return self

    @classmethod
    def build(
        cls,
        eligible: list[Validator],
        ineligible: list[Validator],
        timestamp: datetime,
    ) -> "Snapshot":
        """Create a snapshot with counts derived from the partitions.

        Args:
            eligible: Sorted eligible validators.
            ineligible: Ineligible validators in upstream order.
            timestamp: Creation time.

        Returns:
            Snapshot instance.
        """
        return cls(
            timestamp=timestamp,
            total=len(eligible) + len(ineligible),
            eligible=tuple(eligible),
            ineligible=tuple(ineligible),
            eligible_count=len(eligible),
            ineligible_count=len(ineligible),
        )
