"""Builders for raw explorer entity records."""

from typing import Any

from validator_rewards.data_model.raw import RawEntity, RawEntityList
from validator_rewards.data_model.snapshot import Snapshot


def conditions_payload(**overrides: Any) -> dict[str, Any]:
    """Minimal conditions that satisfy every eligibility clause."""
    payload: dict[str, Any] = {
        "ftso_scaling": True,
        "ftso_fast_updates": True,
        "fdc": True,
        "staking": True,
        "passes_held": 3,
        "eligible_for_reward": True,
    }
    payload.update(overrides)
    return payload


def rewards_payload(
    wnat: float | None = 0.01,
    mirror: float | None = 0.02,
    pure: float | None = 0.0,
) -> dict[str, Any]:
    """Rewards sub-record; None omits the component."""
    payload: dict[str, Any] = {}
    if wnat is not None:
        payload["reward_rate_wnat"] = wnat
    if mirror is not None:
        payload["reward_rate_mirror"] = mirror
    if pure is not None:
        payload["reward_rate_pure"] = pure
    return payload


def entity_payload(
    entity_id: int = 7,
    name: str | None = "Validator 7",
    eligible: bool = True,
    rate: float | None = None,
    **extra: Any,
) -> dict[str, Any]:
    """Raw entity dict as the explorer API publishes it.

    Args:
        entity_id: Entity id.
        name: Display name, omitted when None.
        eligible: Whether to include conditions meeting every clause.
        rate: Put the whole combined rate into the wnat component.
        **extra: Additional top-level fields.

    Returns:
        JSON-compatible entity dict.
    """
    payload: dict[str, Any] = {"id": entity_id}
    if name is not None:
        payload["display_name"] = name
    if eligible:
        payload["entityminimalconditions"] = conditions_payload()
    if rate is not None:
        payload["rewards"] = rewards_payload(wnat=rate, mirror=0.0, pure=0.0)
    payload.update(extra)
    return payload


def make_raw(**kwargs: Any) -> RawEntity:
    """Build a validated RawEntity from ``entity_payload`` arguments."""
    return RawEntity.model_validate(entity_payload(**kwargs))


def listing_payload(*entities: dict[str, Any]) -> dict[str, Any]:
    """Wrap entity dicts in the paged listing envelope."""
    return {"count": len(entities), "results": list(entities)}


class StaticSource:
    """Entity source returning fixed records and counting calls."""

    def __init__(self, *entities: dict[str, Any]) -> None:
        """Initialize with raw entity dicts."""
        self.entities = list(entities)
        self.calls = 0
        self.error: Exception | None = None

    def fetch_entities(self) -> list[RawEntity]:
        """Return the configured records, or raise the configured error."""
        self.calls += 1
        if self.error is not None:
            raise self.error
        return RawEntityList.model_validate(listing_payload(*self.entities)).results


class StubAggregator:
    """Refresher returning prepared snapshots in order."""

    def __init__(self, *snapshots: Snapshot) -> None:
        """Initialize with snapshots to hand out."""
        self.snapshots = list(snapshots)
        self.calls = 0
        self.error: Exception | None = None

    def refresh(self) -> Snapshot:
        """Return the next snapshot, or raise the configured error."""
        self.calls += 1
        if self.error is not None:
            raise self.error
        index = min(self.calls - 1, len(self.snapshots) - 1)
        return self.snapshots[index]
