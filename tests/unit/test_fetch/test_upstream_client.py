"""Unit tests for the upstream entity client."""

import json
import time
from collections.abc import Iterator

import httpx
import pytest

from validator_rewards.errors import (
    FetchErrorClass,
    UpstreamDecodeError,
    UpstreamFetchError,
)
from validator_rewards.fetch import FetchConfig, FetchMetrics, UpstreamClient
from tests.helpers.entities import entity_payload, listing_payload


BASE_URL = "https://explorer.test/api/v0"


def _client(handler: httpx.MockTransport, **config: object) -> UpstreamClient:
    return UpstreamClient(
        config=FetchConfig.model_validate({"base_url": BASE_URL, **config}),
        transport=handler,
    )


def _json_transport(body: object, status_code: int = 200) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, json=body)

    return httpx.MockTransport(handler)


@pytest.fixture(autouse=True)
def _reset_metrics() -> None:
    FetchMetrics.reset()


class TestFetchConfig:
    """Tests for fetch configuration."""

    def test_defaults(self) -> None:
        """Defaults request the first 200 records with a 10s timeout."""
        config = FetchConfig()

        assert config.entity_url == (
            "https://flare-systems-explorer.flare.network/backend-url/api/v0/entity"
        )
        assert config.query_params == {"limit": 200, "offset": 0}
        assert config.timeout_seconds == 10.0

    def test_trailing_slash_is_stripped(self) -> None:
        """Base URL trailing slash does not double up."""
        config = FetchConfig(base_url=f"{BASE_URL}/")

        assert config.entity_url == f"{BASE_URL}/entity"

    def test_rejects_non_http_url(self) -> None:
        """Only http(s) base URLs are accepted."""
        with pytest.raises(ValueError, match="http"):
            FetchConfig(base_url="ftp://explorer.test")


class TestFetchEntities:
    """Tests for successful fetches."""

    def test_sends_paged_get(self) -> None:
        """One GET to /entity with limit and offset."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=listing_payload(entity_payload()))

        _client(httpx.MockTransport(handler)).fetch_entities()

        assert len(seen) == 1
        request = seen[0]
        assert request.method == "GET"
        assert request.url.path == "/api/v0/entity"
        assert request.url.params["limit"] == "200"
        assert request.url.params["offset"] == "0"
        assert request.headers["user-agent"] == "validator-rewards/1.0"

    def test_decodes_results_in_order(self) -> None:
        """Records are returned in upstream order."""
        body = listing_payload(
            entity_payload(entity_id=3),
            entity_payload(entity_id=1, name=None, eligible=False),
        )

        entities = _client(_json_transport(body)).fetch_entities()

        assert [e.id for e in entities] == [3, 1]
        assert entities[1].display_name is None
        assert entities[1].entityminimalconditions is None

    def test_ignores_unknown_fields(self) -> None:
        """Fields this service does not read are ignored."""
        body = listing_payload(entity_payload(entity_id=1, logo_url="x.png"))

        entities = _client(_json_transport(body)).fetch_entities()

        assert entities[0].id == 1

    def test_records_metrics(self) -> None:
        """Request status and bytes are recorded."""
        _client(_json_transport(listing_payload())).fetch_entities()

        metrics = FetchMetrics.get_instance()
        assert metrics.http_requests_total == {200: 1}
        assert metrics.http_bytes_total > 0


class TestFetchErrors:
    """Tests for transport failures."""

    def test_timeout(self) -> None:
        """Timeouts raise UpstreamFetchError(NETWORK_TIMEOUT)."""

        def handler(request: httpx.Request) -> httpx.Response:
            msg = "read timed out"
            raise httpx.ReadTimeout(msg, request=request)

        with pytest.raises(UpstreamFetchError) as exc_info:
            _client(httpx.MockTransport(handler)).fetch_entities()

        assert exc_info.value.error_class == FetchErrorClass.NETWORK_TIMEOUT
        assert FetchMetrics.get_instance().http_failures_total == {
            "NETWORK_TIMEOUT": 1
        }

    def test_connection_error(self) -> None:
        """Connection failures raise UpstreamFetchError(CONNECTION_ERROR)."""

        def handler(request: httpx.Request) -> httpx.Response:
            msg = "connection refused"
            raise httpx.ConnectError(msg, request=request)

        with pytest.raises(UpstreamFetchError) as exc_info:
            _client(httpx.MockTransport(handler)).fetch_entities()

        assert exc_info.value.error_class == FetchErrorClass.CONNECTION_ERROR

    def test_other_transport_error(self) -> None:
        """Other httpx errors raise UpstreamFetchError(UNKNOWN)."""

        def handler(request: httpx.Request) -> httpx.Response:
            msg = "peer closed connection"
            raise httpx.RemoteProtocolError(msg, request=request)

        with pytest.raises(UpstreamFetchError) as exc_info:
            _client(httpx.MockTransport(handler)).fetch_entities()

        assert exc_info.value.error_class == FetchErrorClass.UNKNOWN

    def test_slow_body_hits_deadline(self) -> None:
        """A body that keeps arriving past the timeout raises NETWORK_TIMEOUT."""
        body = json.dumps(listing_payload(entity_payload())).encode()

        def chunks() -> Iterator[bytes]:
            for i in range(len(body)):
                time.sleep(0.05)
                yield body[i : i + 1]

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=chunks())

        client = _client(httpx.MockTransport(handler), timeout_seconds=0.2)
        start = time.monotonic()

        with pytest.raises(UpstreamFetchError) as exc_info:
            client.fetch_entities()

        assert exc_info.value.error_class == FetchErrorClass.NETWORK_TIMEOUT
        assert time.monotonic() - start < 1.0

    @pytest.mark.parametrize("status_code", [404, 500, 503])
    def test_non_2xx_status(self, status_code: int) -> None:
        """Non-2xx responses raise UpstreamFetchError with the status."""
        transport = _json_transport({"detail": "nope"}, status_code=status_code)

        with pytest.raises(UpstreamFetchError) as exc_info:
            _client(transport).fetch_entities()

        assert exc_info.value.error_class == FetchErrorClass.HTTP_STATUS
        assert exc_info.value.status_code == status_code

    def test_response_too_large(self) -> None:
        """Bodies over the size limit raise RESPONSE_SIZE_EXCEEDED."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=b"x" * 4096)

        client = _client(httpx.MockTransport(handler), max_response_size_bytes=1024)

        with pytest.raises(UpstreamFetchError) as exc_info:
            client.fetch_entities()

        assert exc_info.value.error_class == FetchErrorClass.RESPONSE_SIZE_EXCEEDED


class TestDecodeErrors:
    """Tests for malformed responses."""

    def test_invalid_json(self) -> None:
        """A non-JSON body raises UpstreamDecodeError."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=b"<html>oops</html>")

        with pytest.raises(UpstreamDecodeError):
            _client(httpx.MockTransport(handler)).fetch_entities()

        assert FetchMetrics.get_instance().decode_failures_total == 1

    def test_missing_results(self) -> None:
        """A JSON object without results raises UpstreamDecodeError."""
        with pytest.raises(UpstreamDecodeError) as exc_info:
            _client(_json_transport({"count": 0})).fetch_entities()

        assert exc_info.value.field == "results"

    def test_entity_without_id(self) -> None:
        """An entity lacking its id is malformed."""
        body = {"results": [{"display_name": "no id"}]}

        with pytest.raises(UpstreamDecodeError) as exc_info:
            _client(_json_transport(body)).fetch_entities()

        assert exc_info.value.field == "results.0.id"

    def test_wrong_field_type(self) -> None:
        """A sub-record of the wrong type is malformed."""
        body = {"results": [{"id": 1, "rewards": "lots"}]}

        with pytest.raises(UpstreamDecodeError):
            _client(_json_transport(body)).fetch_entities()

    def test_error_is_serializable(self) -> None:
        """Decode errors convert to a log-friendly dict."""
        with pytest.raises(UpstreamDecodeError) as exc_info:
            _client(_json_transport([])).fetch_entities()

        payload = exc_info.value.to_dict()
        assert payload["error_type"] == "UpstreamDecodeError"
        assert payload["url"] == f"{BASE_URL}/entity"
        json.dumps(payload)
