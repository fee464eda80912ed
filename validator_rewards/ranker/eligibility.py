"""Reward eligibility predicate."""

from validator_rewards.constants import REQUIRED_PASSES
from validator_rewards.data_model.validator import Validator


def is_eligible(validator: Validator) -> bool:
    """Check whether a validator qualifies for rewards.

    Every condition must hold; passes must equal REQUIRED_PASSES exactly.
    A validator without conditions is never eligible.

    Args:
        validator: Normalized validator.

    Returns:
        True if the validator is reward eligible.
    """
    cond = validator.conditions
    if cond is None:
        return False
    return (
        cond.eligible_for_reward
        and cond.ftso_anchor_feeds
        and cond.ftso_block_latency_feeds
        and cond.fdc
        and cond.staking
        and cond.passes == REQUIRED_PASSES
    )
