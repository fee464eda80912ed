"""Unit tests for CLI commands."""

import json
import logging
from collections.abc import Generator
from typing import Any

import pytest
import structlog
from click.testing import CliRunner

from validator_rewards.cli import main as cli_main
from validator_rewards.errors import FetchErrorClass, UpstreamFetchError
from tests.helpers.entities import StaticSource, entity_payload


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Keep log output out of captured command output."""
    monkeypatch.setattr(cli_main, "configure_logging", lambda **_: None)
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(logging.CRITICAL)
    )
    yield
    structlog.reset_defaults()


@pytest.fixture
def source(monkeypatch: pytest.MonkeyPatch) -> StaticSource:
    """Replace the HTTP client with a static source."""
    static = StaticSource(
        entity_payload(entity_id=1, name="A", rate=0.02),
        entity_payload(entity_id=2, name="B", rate=0.08),
        entity_payload(entity_id=3, name="C", eligible=False),
    )
    monkeypatch.setattr(cli_main, "UpstreamClient", lambda **_: static)
    return static


class TestSnapshotCommand:
    """Tests for the snapshot command."""

    def test_prints_summary(self, source: StaticSource) -> None:
        """Summary includes counts and the ranked top list."""
        result = CliRunner().invoke(cli_main.cli, ["snapshot", "--top", "1"])

        assert result.exit_code == 0, result.output
        summary = json.loads(result.output)
        assert summary["total_validators"] == 3
        assert summary["eligible_count"] == 2
        assert summary["ineligible_count"] == 1
        assert [v["id"] for v in summary["top"]] == [2]

    def test_upstream_failure_exits_nonzero(self, source: StaticSource) -> None:
        """Upstream errors exit with status 1."""
        source.error = UpstreamFetchError(FetchErrorClass.NETWORK_TIMEOUT, "slow")

        result = CliRunner().invoke(cli_main.cli, ["snapshot"])

        assert result.exit_code == 1
        assert "Refresh failed: slow" in result.output

    def test_rejects_unknown_log_level(self, source: StaticSource) -> None:
        """Unknown log levels are a usage error."""
        result = CliRunner().invoke(cli_main.cli, ["snapshot", "--log-level", "LOUD"])

        assert result.exit_code == 2


class TestServeCommand:
    """Tests for the serve command."""

    def test_runs_uvicorn(
        self, source: StaticSource, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """serve prints the banner and hands the app to uvicorn."""
        calls: list[dict[str, Any]] = []

        def fake_run(app: object, **kwargs: Any) -> None:
            calls.append({"app": app, **kwargs})

        monkeypatch.setattr(cli_main.uvicorn, "run", fake_run)

        result = CliRunner().invoke(
            cli_main.cli, ["serve", "--host", "127.0.0.1", "--port", "8123"]
        )

        assert result.exit_code == 0, result.output
        assert "Flare Validator API" in result.output
        assert "POST /api/refresh" in result.output
        assert calls[0]["host"] == "127.0.0.1"
        assert calls[0]["port"] == 8123
        assert source.calls == 0
