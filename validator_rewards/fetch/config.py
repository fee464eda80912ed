"""Configuration model for the upstream fetch layer."""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator

from validator_rewards.constants import (
    DEFAULT_TIMEOUT_SECONDS,
    ENTITY_PATH,
    FLARE_API_BASE_URL,
    PAGE_LIMIT,
    PAGE_OFFSET,
)
from validator_rewards.fetch.constants import (
    DEFAULT_MAX_RESPONSE_SIZE_BYTES,
    DEFAULT_USER_AGENT,
)


class FetchConfig(BaseModel):
    """Configuration for requests against the explorer API.

    The page is requested in one call; limit and offset are fixed
    by default so a refresh is always a single bounded request.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    base_url: Annotated[str, Field(min_length=1)] = FLARE_API_BASE_URL
    page_limit: Annotated[int, Field(ge=1, le=1000)] = PAGE_LIMIT
    page_offset: Annotated[int, Field(ge=0)] = PAGE_OFFSET
    timeout_seconds: Annotated[float, Field(gt=0.0, le=300.0)] = (
        DEFAULT_TIMEOUT_SECONDS
    )
    user_agent: Annotated[str, Field(min_length=1, max_length=500)] = (
        DEFAULT_USER_AGENT
    )
    max_response_size_bytes: Annotated[int, Field(ge=1024, le=100 * 1024 * 1024)] = (
        DEFAULT_MAX_RESPONSE_SIZE_BYTES
    )

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Require an http(s) URL without a trailing slash."""
        if not v.startswith(("http://", "https://")):
            msg = f"base_url must be an http(s) URL: {v}"
            raise ValueError(msg)
        return v.rstrip("/")

    @property
    def entity_url(self) -> str:
        """URL of the entity listing endpoint."""
        return f"{self.base_url}{ENTITY_PATH}"

    @property
    def query_params(self) -> dict[str, int]:
        """Paging parameters for the entity listing."""
        return {"limit": self.page_limit, "offset": self.page_offset}
