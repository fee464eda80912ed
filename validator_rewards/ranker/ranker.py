"""Partition validators by eligibility and rank the eligible ones."""

import math
import time
from collections.abc import Iterable
from functools import cmp_to_key

import structlog

from validator_rewards.data_model.validator import Validator
from validator_rewards.ranker.eligibility import is_eligible
from validator_rewards.ranker.metrics import RankerMetrics
from validator_rewards.ranker.models import Partition


logger = structlog.get_logger()


def compare_rates(a: float, b: float) -> int:
    """Total-order comparison of two reward rates.

    NaN sorts below every number and two NaNs compare equal.

    Args:
        a: First rate.
        b: Second rate.

    Returns:
        Negative if a < b, zero if equal, positive if a > b.
    """
    a_nan = math.isnan(a)
    b_nan = math.isnan(b)
    if a_nan or b_nan:
        return int(b_nan) - int(a_nan)
    if a < b:
        return -1
    if a > b:
        return 1
    return 0


def _by_rate_descending(a: Validator, b: Validator) -> int:
    return compare_rates(b.combined_rate, a.combined_rate)


def classify(validators: Iterable[Validator]) -> Partition:
    """Split validators into eligible and ineligible, preserving order.

    Args:
        validators: Normalized validators in upstream order.

    Returns:
        Partition with both lists in input order.
    """
    partition = Partition()
    for validator in validators:
        if is_eligible(validator):
            partition.eligible.append(validator)
        else:
            partition.ineligible.append(validator)
    return partition


def rank(eligible: Iterable[Validator]) -> list[Validator]:
    """Sort by combined reward rate, highest first.

    The sort is stable, so validators with equal (or NaN) rates keep their
    input order.

    Args:
        eligible: Eligible validators.

    Returns:
        New sorted list.
    """
    return sorted(eligible, key=cmp_to_key(_by_rate_descending))


def classify_and_rank(
    validators: list[Validator],
    metrics: RankerMetrics | None = None,
) -> Partition:
    """Classify validators and rank the eligible partition.

    The ineligible partition is never sorted.

    Args:
        validators: Normalized validators in upstream order.
        metrics: Optional metrics instance.

    Returns:
        Partition with the eligible list ranked.
    """
    metrics = metrics or RankerMetrics.get_instance()
    start = time.perf_counter()

    partition = classify(validators)
    partition.eligible = rank(partition.eligible)

    metrics.record_duration((time.perf_counter() - start) * 1000)
    metrics.record_partition(
        validators_in=len(validators),
        eligible=len(partition.eligible),
        ineligible=len(partition.ineligible),
    )
    logger.debug(
        "ranker_complete",
        component="ranker",
        validators_in=len(validators),
        eligible_count=len(partition.eligible),
        ineligible_count=len(partition.ineligible),
    )
    return partition
