"""Reward eligibility classification and ranking.

Validators are split into eligible and ineligible partitions by a strict
conjunction of conditions; the eligible partition is ordered by combined
reward rate, highest first.
"""

from validator_rewards.ranker.eligibility import is_eligible
from validator_rewards.ranker.metrics import RankerMetrics
from validator_rewards.ranker.models import Partition
from validator_rewards.ranker.ranker import (
    classify,
    classify_and_rank,
    compare_rates,
    rank,
)


__all__ = [
    "Partition",
    "RankerMetrics",
    "classify",
    "classify_and_rank",
    "compare_rates",
    "is_eligible",
    "rank",
]
