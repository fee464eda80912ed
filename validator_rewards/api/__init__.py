"""REST API over the snapshot cache."""

from validator_rewards.api.app import ApiError, create_app


__all__ = ["ApiError", "create_app"]
