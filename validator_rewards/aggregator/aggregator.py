"""One full refresh: fetch, normalize, classify, rank, snapshot."""

import time
import uuid
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Protocol

import structlog

from validator_rewards.data_model.raw import RawEntity
from validator_rewards.data_model.snapshot import Snapshot
from validator_rewards.errors import UpstreamError
from validator_rewards.normalizer import normalize_entities
from validator_rewards.ranker import classify_and_rank


logger = structlog.get_logger()


class EntitySource(Protocol):
    """Protocol for the upstream data source.

    Abstracts the HTTP client to enable testing and alternative sources.
    """

    def fetch_entities(self) -> list[RawEntity]:
        """Fetch all raw entity records in one page.

        Returns:
            Raw entities in upstream order.

        Raises:
            UpstreamFetchError: On transport failure.
            UpstreamDecodeError: On a malformed response.
        """
        ...


def _utc_now() -> datetime:
    return datetime.now(UTC)


class SnapshotAggregator:
    """Builds a new Snapshot from the upstream source.

    Each refresh runs fetch, normalize, classify and snapshot in order and
    logs one event per phase under a shared refresh_id. Upstream errors
    propagate unchanged and no Snapshot is produced.
    """

    def __init__(
        self,
        source: EntitySource,
        now: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the aggregator.

        Args:
            source: Upstream entity source.
            now: Clock for snapshot timestamps (default: UTC now).
        """
        self._source = source
        self._now = now or _utc_now

    def refresh(self) -> Snapshot:
        """Perform one full refresh cycle.

        Returns:
            New Snapshot with a freshly captured timestamp.

        Raises:
            UpstreamFetchError: If the upstream request fails.
            UpstreamDecodeError: If the upstream response is malformed.
        """
        refresh_id = uuid.uuid4().hex[:12]
        log = logger.bind(component="aggregator", refresh_id=refresh_id)
        start_time_ns = time.perf_counter_ns()
        log.info("refresh_started")

        try:
            raws = self._source.fetch_entities()
        except UpstreamError as e:
            log.warning("refresh_failed", phase="fetch", **e.to_dict())
            raise
        log.debug("refresh_phase", phase="fetch", records=len(raws))

        validators = normalize_entities(raws)
        log.debug("refresh_phase", phase="normalize", validators=len(validators))

        partition = classify_and_rank(validators)
        log.debug(
            "refresh_phase",
            phase="classify",
            eligible=len(partition.eligible),
            ineligible=len(partition.ineligible),
        )

        snapshot = Snapshot.build(
            eligible=partition.eligible,
            ineligible=partition.ineligible,
            timestamp=self._now(),
        )

        duration_ms = (time.perf_counter_ns() - start_time_ns) / 1_000_000
        log.info(
            "refresh_complete",
            total=snapshot.total,
            eligible_count=snapshot.eligible_count,
            ineligible_count=snapshot.ineligible_count,
            duration_ms=round(duration_ms, 2),
        )
        return snapshot
