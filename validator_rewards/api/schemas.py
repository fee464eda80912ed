"""Response envelopes for the REST API."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from validator_rewards.data_model.snapshot import Snapshot
from validator_rewards.data_model.validator import Validator


class ApiModel(BaseModel):
    """Base model for API responses."""

    model_config = ConfigDict(frozen=True, extra="forbid")


class UsageResponse(ApiModel):
    """Service description served at the root path."""

    api_name: str
    version: str
    endpoints: list[str]
    timestamp: datetime


class HealthResponse(ApiModel):
    """Liveness check result."""

    status: str
    timestamp: datetime


class ValidatorResponse(ApiModel):
    """Full snapshot envelope."""

    timestamp: datetime
    total_validators: int
    eligible_count: int
    ineligible_count: int
    eligible_nodes: list[Validator] = Field(default_factory=list)
    ineligible_nodes: list[Validator] = Field(default_factory=list)

    @classmethod
    def from_snapshot(cls, snapshot: Snapshot) -> "ValidatorResponse":
        """Build the envelope from a snapshot.

        Args:
            snapshot: Snapshot to publish.

        Returns:
            ValidatorResponse instance.
        """
        return cls(
            timestamp=snapshot.timestamp,
            total_validators=snapshot.total,
            eligible_count=snapshot.eligible_count,
            ineligible_count=snapshot.ineligible_count,
            eligible_nodes=list(snapshot.eligible),
            ineligible_nodes=list(snapshot.ineligible),
        )


class ValidatorsListResponse(ApiModel):
    """A list of validators with its size and snapshot time."""

    timestamp: datetime
    count: int
    validators: list[Validator] = Field(default_factory=list)

    @classmethod
    def of(
        cls, timestamp: datetime, validators: list[Validator]
    ) -> "ValidatorsListResponse":
        """Build a list envelope; count is the length of ``validators``."""
        return cls(timestamp=timestamp, count=len(validators), validators=validators)


class RefreshResponse(ApiModel):
    """Result of a forced refresh."""

    success: bool
    message: str
    timestamp: datetime


class ErrorResponse(ApiModel):
    """Error body returned on failures."""

    error: str
