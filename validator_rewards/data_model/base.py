"""Shared Pydantic base models."""

from pydantic import BaseModel, ConfigDict


class StrictBaseModel(BaseModel):
    """Base model with strict, immutable defaults."""

    model_config = ConfigDict(frozen=True, extra="forbid")


class UpstreamModel(BaseModel):
    """Base model for raw upstream payloads.

    Unknown keys are ignored since the explorer API publishes many fields
    this service never reads.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")
