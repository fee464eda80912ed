"""Upstream fetch layer for the explorer entity listing.

This module provides a single bounded HTTP GET with:
- Fixed timeout and page size
- Maximum response size enforcement
- Typed transport and decode errors
- Metrics collection for observability
"""

from validator_rewards.fetch.client import UpstreamClient
from validator_rewards.fetch.config import FetchConfig
from validator_rewards.fetch.constants import (
    DEFAULT_MAX_RESPONSE_SIZE_BYTES,
    HTTP_STATUS_OK_MAX,
    HTTP_STATUS_OK_MIN,
)
from validator_rewards.fetch.metrics import FetchMetrics


__all__ = [
    # Client
    "UpstreamClient",
    # Config
    "FetchConfig",
    # Constants
    "DEFAULT_MAX_RESPONSE_SIZE_BYTES",
    "HTTP_STATUS_OK_MAX",
    "HTTP_STATUS_OK_MIN",
    # Metrics
    "FetchMetrics",
]
