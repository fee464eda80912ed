"""Read helpers over a snapshot."""

from itertools import chain

from validator_rewards.constants import DEFAULT_TOP_LIMIT
from validator_rewards.data_model.snapshot import Snapshot
from validator_rewards.data_model.validator import Validator
from validator_rewards.errors import NotFoundError


def top_validators(
    snapshot: Snapshot, limit: int = DEFAULT_TOP_LIMIT
) -> list[Validator]:
    """Return the highest ranked eligible validators.

    Args:
        snapshot: Snapshot to read.
        limit: Maximum number of validators; clamped to the partition size.

    Returns:
        Up to ``limit`` eligible validators in rank order.
    """
    return list(snapshot.eligible[: max(limit, 0)])


def find_validator(snapshot: Snapshot, validator_id: int) -> Validator:
    """Look up a validator by id across both partitions.

    Args:
        snapshot: Snapshot to search.
        validator_id: Upstream entity id.

    Returns:
        The matching validator.

    Raises:
        NotFoundError: If no validator has that id.
    """
    for validator in chain(snapshot.eligible, snapshot.ineligible):
        if validator.id == validator_id:
            return validator
    raise NotFoundError(validator_id)
