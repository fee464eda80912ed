"""FastAPI application exposing the cached validator snapshot."""

import uuid
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime
from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, FastAPI, Request, Response
from fastapi.responses import JSONResponse

from validator_rewards.api.schemas import (
    ErrorResponse,
    HealthResponse,
    RefreshResponse,
    UsageResponse,
    ValidatorResponse,
    ValidatorsListResponse,
)
from validator_rewards.cache import SnapshotCache
from validator_rewards.constants import API_NAME, API_VERSION, DEFAULT_TOP_LIMIT
from validator_rewards.data_model.snapshot import Snapshot
from validator_rewards.data_model.validator import Validator
from validator_rewards.errors import NotFoundError, UpstreamError
from validator_rewards.observability.logging import (
    bind_request_context,
    clear_request_context,
)
from validator_rewards.queries import find_validator, top_validators


logger = structlog.get_logger()

ENDPOINTS: list[str] = [
    "/health",
    "/api/validators",
    "/api/validators/eligible",
    "/api/validators/ineligible",
    "/api/validators/top?limit=N",
    "/api/validators/{id}",
    "/api/refresh",
]


class ApiError(Exception):
    """Raised by handlers to return a JSON error body."""

    def __init__(self, status_code: int, message: str) -> None:
        """Initialize the error.

        Args:
            status_code: HTTP status code to return.
            message: Value of the ``error`` field.
        """
        super().__init__(message)
        self.status_code = status_code
        self.message = message


def get_cache(request: Request) -> SnapshotCache:
    """Dependency returning the cache attached to the application."""
    cache: SnapshotCache = request.app.state.cache
    return cache


CacheDep = Annotated[SnapshotCache, Depends(get_cache)]


def _load_snapshot(cache: SnapshotCache, failure_message: str) -> Snapshot:
    """Get the current snapshot, mapping upstream errors to HTTP 500."""
    try:
        return cache.get()
    except UpstreamError as e:
        logger.warning("snapshot_unavailable", component="api", **e.to_dict())
        raise ApiError(500, failure_message) from e


def _parse_non_negative(value: str | None) -> int | None:
    """Parse a decimal non-negative integer, None if it is not one."""
    if value is None or not value.isascii() or not value.isdigit():
        return None
    return int(value)


router = APIRouter()


@router.get("/", response_model=UsageResponse)
def usage() -> UsageResponse:
    """Describe the API."""
    return UsageResponse(
        api_name=API_NAME,
        version=API_VERSION,
        endpoints=["/", *ENDPOINTS],
        timestamp=datetime.now(UTC),
    )


@router.get("/health", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Liveness check; never touches the upstream API."""
    return HealthResponse(status="ok", timestamp=datetime.now(UTC))


@router.get("/api/validators", response_model=ValidatorResponse)
def get_all_validators(cache: CacheDep) -> ValidatorResponse:
    """Return the full snapshot."""
    snapshot = _load_snapshot(cache, "Failed to fetch validator data")
    return ValidatorResponse.from_snapshot(snapshot)


@router.get("/api/validators/eligible", response_model=ValidatorsListResponse)
def get_eligible_validators(cache: CacheDep) -> ValidatorsListResponse:
    """Return the ranked eligible partition."""
    snapshot = _load_snapshot(cache, "Failed to fetch eligible validators")
    return ValidatorsListResponse.of(snapshot.timestamp, list(snapshot.eligible))


@router.get("/api/validators/ineligible", response_model=ValidatorsListResponse)
def get_ineligible_validators(cache: CacheDep) -> ValidatorsListResponse:
    """Return the ineligible partition in upstream order."""
    snapshot = _load_snapshot(cache, "Failed to fetch ineligible validators")
    return ValidatorsListResponse.of(snapshot.timestamp, list(snapshot.ineligible))


@router.get("/api/validators/top", response_model=ValidatorsListResponse)
def get_top_validators(
    cache: CacheDep,
    limit: str | None = None,
) -> ValidatorsListResponse:
    """Return the first ``limit`` eligible validators.

    A missing or unparseable ``limit`` falls back to the default of 50.
    """
    snapshot = _load_snapshot(cache, "Failed to fetch top validators")
    count = _parse_non_negative(limit)
    if count is None:
        count = DEFAULT_TOP_LIMIT
    top = top_validators(snapshot, count)
    return ValidatorsListResponse.of(snapshot.timestamp, top)


@router.get("/api/validators/{validator_id}", response_model=Validator)
def get_validator_by_id(validator_id: str, cache: CacheDep) -> Validator:
    """Return one validator by upstream id.

    Ids that are not non-negative integers cannot match and return 404.
    """
    entity_id = _parse_non_negative(validator_id)
    if entity_id is None:
        raise ApiError(404, "Validator not found")
    snapshot = _load_snapshot(cache, "Failed to fetch validator details")
    try:
        return find_validator(snapshot, entity_id)
    except NotFoundError as e:
        raise ApiError(404, "Validator not found") from e


@router.post("/api/refresh", response_model=RefreshResponse)
def force_refresh(cache: CacheDep) -> RefreshResponse:
    """Drop the cached snapshot and fetch a new one."""
    cache.invalidate()
    snapshot = _load_snapshot(cache, "Failed to refresh cache")
    return RefreshResponse(
        success=True,
        message="Cache refreshed successfully",
        timestamp=snapshot.timestamp,
    )


async def _handle_api_error(request: Request, exc: Exception) -> JSONResponse:
    """Render an ApiError as ``{"error": message}``."""
    if not isinstance(exc, ApiError):
        raise exc
    body = ErrorResponse(error=exc.message)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


async def _request_context(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    """Bind a request id to every log line emitted while serving a request."""
    bind_request_context(uuid.uuid4().hex[:12])
    try:
        response = await call_next(request)
        logger.debug(
            "request_complete",
            component="api",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
        )
        return response
    finally:
        clear_request_context()


def create_app(cache: SnapshotCache) -> FastAPI:
    """Build the FastAPI application around a cache.

    Args:
        cache: Snapshot cache shared by all request handlers.

    Returns:
        Configured FastAPI application.
    """
    app = FastAPI(title=API_NAME, version=API_VERSION)
    app.state.cache = cache
    app.include_router(router)
    app.add_exception_handler(ApiError, _handle_api_error)
    app.middleware("http")(_request_context)
    return app
