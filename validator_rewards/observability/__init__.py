"""Observability module for logging."""

from validator_rewards.observability.logging import (
    bind_request_context,
    clear_request_context,
    configure_logging,
    parse_log_level,
)


__all__ = [
    "bind_request_context",
    "clear_request_context",
    "configure_logging",
    "parse_log_level",
]
