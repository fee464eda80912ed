"""HTTP client for the explorer entity listing."""

import time
from io import BytesIO

import httpx
import structlog
from pydantic import ValidationError

from validator_rewards.data_model.raw import RawEntity, RawEntityList
from validator_rewards.errors import (
    FetchErrorClass,
    UpstreamDecodeError,
    UpstreamFetchError,
)
from validator_rewards.fetch.config import FetchConfig
from validator_rewards.fetch.constants import (
    HTTP_STATUS_OK_MAX,
    HTTP_STATUS_OK_MIN,
)
from validator_rewards.fetch.metrics import FetchMetrics


logger = structlog.get_logger()


class UpstreamClient:
    """Fetches raw entity records from the explorer API.

    Performs exactly one GET per call with:
    - A fixed whole-request deadline
    - Maximum response size enforcement
    - Typed errors for transport and decode failures
    - Metrics collection

    No retries are attempted; a caller may simply call again.
    """

    def __init__(
        self,
        config: FetchConfig | None = None,
        transport: httpx.BaseTransport | None = None,
        metrics: FetchMetrics | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Fetch configuration.
            transport: Optional httpx transport, used to stub the network.
            metrics: Optional metrics instance.
        """
        self._config = config or FetchConfig()
        self._transport = transport
        self._metrics = metrics or FetchMetrics.get_instance()
        self._log = logger.bind(component="fetch", url=self._config.entity_url)

    @property
    def config(self) -> FetchConfig:
        """Get the fetch configuration."""
        return self._config

    def fetch_entities(self) -> list[RawEntity]:
        """Fetch one page of entity records.

        Returns:
            Raw entities in upstream order.

        Raises:
            UpstreamFetchError: On timeout, connection failure, non-2xx status
                or an oversized response. The timeout bounds the whole
                request, body included.
            UpstreamDecodeError: If the body is not the expected JSON shape.
        """
        start_time_ns = time.perf_counter_ns()
        try:
            body = self._request()
        finally:
            duration_ms = (time.perf_counter_ns() - start_time_ns) / 1_000_000
            self._metrics.record_duration(duration_ms)

        entities = self._decode(body)

        self._log.info(
            "fetch_complete",
            bytes=len(body),
            entities=len(entities),
            duration_ms=round(duration_ms, 2),
        )
        return entities

    def _request(self) -> bytes:
        """Execute the GET request and return the body.

        Returns:
            Response body bytes.

        Raises:
            UpstreamFetchError: On any transport-level failure.
        """
        url = self._config.entity_url
        headers = {
            "User-Agent": self._config.user_agent,
            "Accept": "application/json",
        }
        deadline = time.monotonic() + self._config.timeout_seconds

        try:
            with (
                httpx.Client(
                    timeout=httpx.Timeout(self._remaining(deadline)),
                    follow_redirects=True,
                    transport=self._transport,
                ) as client,
                client.stream(
                    "GET", url, params=self._config.query_params, headers=headers
                ) as response,
            ):
                self._check_deadline(deadline)
                body = self._read_body_with_limit(response, deadline)
                self._metrics.record_request(response.status_code, len(body))

                if not HTTP_STATUS_OK_MIN <= response.status_code < HTTP_STATUS_OK_MAX:
                    raise self._fail(
                        FetchErrorClass.HTTP_STATUS,
                        f"Upstream returned status {response.status_code}",
                        status_code=response.status_code,
                    )
                return body

        except httpx.TimeoutException as e:
            raise self._fail(
                FetchErrorClass.NETWORK_TIMEOUT, f"Request timed out: {e}"
            ) from e

        except httpx.ConnectError as e:
            raise self._fail(
                FetchErrorClass.CONNECTION_ERROR, f"Connection failed: {e}"
            ) from e

        except httpx.HTTPError as e:
            raise self._fail(
                FetchErrorClass.UNKNOWN, f"Unexpected transport error: {e}"
            ) from e

    @staticmethod
    def _remaining(deadline: float) -> float:
        """Seconds left before the deadline, never below a millisecond."""
        return max(deadline - time.monotonic(), 0.001)

    def _check_deadline(self, deadline: float) -> None:
        """Fail with NETWORK_TIMEOUT once the request deadline has passed."""
        if time.monotonic() >= deadline:
            raise self._fail(
                FetchErrorClass.NETWORK_TIMEOUT,
                f"Request exceeded {self._config.timeout_seconds}s timeout",
            )

    def _read_body_with_limit(self, response: httpx.Response, deadline: float) -> bytes:
        """Read response body with size limit and deadline.

        Args:
            response: Streaming HTTP response.
            deadline: ``time.monotonic()`` value the read must finish by.

        Returns:
            Response body bytes.

        Raises:
            UpstreamFetchError: If the size limit is exceeded or the
                deadline passes mid-body.
        """
        max_size = self._config.max_response_size_bytes

        content_length = response.headers.get("content-length")
        too_large = content_length is not None and content_length.isdigit() and (
            int(content_length) > max_size
        )
        if too_large:
            raise self._fail(
                FetchErrorClass.RESPONSE_SIZE_EXCEEDED,
                f"Response size {content_length} exceeds limit {max_size}",
                status_code=response.status_code,
            )

        buffer = BytesIO()
        total_read = 0
        for chunk in response.iter_bytes():
            self._check_deadline(deadline)
            total_read += len(chunk)
            if total_read > max_size:
                raise self._fail(
                    FetchErrorClass.RESPONSE_SIZE_EXCEEDED,
                    f"Response size exceeded limit of {max_size} bytes "
                    f"(read {total_read} bytes)",
                    status_code=response.status_code,
                )
            buffer.write(chunk)

        return buffer.getvalue()

    def _decode(self, body: bytes) -> list[RawEntity]:
        """Parse the response body into raw entities.

        Args:
            body: Response body bytes.

        Returns:
            Raw entities in upstream order.

        Raises:
            UpstreamDecodeError: If the body is not the expected shape.
        """
        try:
            entity_list = RawEntityList.model_validate_json(body)
        except ValidationError as e:
            loc = e.errors()[0]["loc"] if e.error_count() else ()
            field = ".".join(str(part) for part in loc) or None
            self._metrics.record_decode_failure()
            self._log.warning(
                "decode_failed",
                error_count=e.error_count(),
                field=field,
            )
            msg = f"Malformed entity listing: {e.error_count()} validation error(s)"
            raise UpstreamDecodeError(
                msg, url=self._config.entity_url, field=field
            ) from e

        return entity_list.results

    def _fail(
        self,
        error_class: FetchErrorClass,
        message: str,
        status_code: int | None = None,
    ) -> UpstreamFetchError:
        """Record and log a transport failure, returning the error to raise."""
        self._metrics.record_failure(error_class)
        self._log.warning(
            "fetch_failed",
            error_class=error_class.value,
            status_code=status_code,
            message=message,
        )
        return UpstreamFetchError(
            error_class,
            message,
            url=self._config.entity_url,
            status_code=status_code,
        )
