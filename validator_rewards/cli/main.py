"""CLI commands for the validator rewards service."""

import json
import sys

import click
import structlog
import uvicorn

from validator_rewards.aggregator import SnapshotAggregator
from validator_rewards.api import create_app
from validator_rewards.api.app import ENDPOINTS
from validator_rewards.cache import SnapshotCache
from validator_rewards.constants import API_NAME, DEFAULT_TOP_LIMIT
from validator_rewards.errors import UpstreamError
from validator_rewards.fetch import UpstreamClient
from validator_rewards.observability.logging import configure_logging, parse_log_level
from validator_rewards.queries import top_validators
from validator_rewards.settings import AppSettings, get_settings


logger = structlog.get_logger()


def build_cache(settings: AppSettings) -> SnapshotCache:
    """Wire client, aggregator and cache from settings.

    Args:
        settings: Application settings.

    Returns:
        An empty SnapshotCache ready to serve.
    """
    client = UpstreamClient(config=settings.fetch_config())
    return SnapshotCache(SnapshotAggregator(client))


def print_banner(host: str, port: int) -> None:
    """Print the startup usage banner."""
    click.echo(API_NAME)
    click.echo(f"Listening on http://{host}:{port}")
    click.echo("Endpoints:")
    click.echo("  GET  /")
    for endpoint in ENDPOINTS:
        method = "POST" if endpoint == "/api/refresh" else "GET"
        click.echo(f"  {method:<4} {endpoint}")


def _setup_logging(settings: AppSettings, log_level: str | None) -> None:
    try:
        level = parse_log_level(log_level or settings.log_level)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--log-level") from e
    configure_logging(level=level, json_format=settings.log_json)


@click.group()
def cli() -> None:
    """Flare validator reward data service."""


@cli.command()
@click.option("--host", default=None, help="Bind address (default: $HOST or 0.0.0.0).")
@click.option("--port", type=int, default=None, help="Port (default: $PORT or 3000).")
@click.option("--log-level", default=None, help="Log level (default: $LOG_LEVEL).")
def serve(host: str | None, port: int | None, log_level: str | None) -> None:
    """Serve the REST API."""
    settings = get_settings()
    _setup_logging(settings, log_level)

    bind_host = host or settings.host
    bind_port = port or settings.port
    app = create_app(build_cache(settings))

    print_banner(bind_host, bind_port)
    logger.info("server_starting", host=bind_host, port=bind_port)
    uvicorn.run(app, host=bind_host, port=bind_port, log_config=None)


@cli.command()
@click.option(
    "--top",
    "top_n",
    type=click.IntRange(min=0),
    default=DEFAULT_TOP_LIMIT,
    show_default=True,
    help="Number of top eligible validators to include.",
)
@click.option("--log-level", default="WARNING", show_default=True)
def snapshot(top_n: int, log_level: str) -> None:
    """Fetch once and print a JSON summary."""
    settings = get_settings()
    _setup_logging(settings, log_level)

    aggregator = SnapshotAggregator(UpstreamClient(config=settings.fetch_config()))
    try:
        result = aggregator.refresh()
    except UpstreamError as e:
        click.echo(f"Refresh failed: {e.message}", err=True)
        sys.exit(1)

    summary = {
        "timestamp": result.timestamp.isoformat(),
        "total_validators": result.total,
        "eligible_count": result.eligible_count,
        "ineligible_count": result.ineligible_count,
        "top": [
            {"id": v.id, "name": v.name, "combined_rate": v.combined_rate}
            for v in top_validators(result, top_n)
        ],
    }
    click.echo(json.dumps(summary, indent=2))


def main() -> None:
    """Entry point for the validator-rewards console script."""
    cli()


if __name__ == "__main__":
    main()
