"""Application settings powered by Pydantic BaseSettings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from validator_rewards.constants import DEFAULT_TIMEOUT_SECONDS, FLARE_API_BASE_URL
from validator_rewards.fetch.config import FetchConfig


class AppSettings(BaseSettings):
    """Centralized environment configuration."""

    model_config = SettingsConfigDict(
        env_prefix="", case_sensitive=False, env_file=".env", env_file_encoding="utf-8"
    )

    host: str = Field(default="0.0.0.0", validation_alias="HOST")  # noqa: S104
    port: int = Field(default=3000, ge=1, le=65535, validation_alias="PORT")
    flare_api_url: str = Field(
        default=FLARE_API_BASE_URL, validation_alias="FLARE_API_URL"
    )
    upstream_timeout_seconds: float = Field(
        default=DEFAULT_TIMEOUT_SECONDS,
        gt=0.0,
        validation_alias="UPSTREAM_TIMEOUT_SECONDS",
    )
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_json: bool = Field(default=True, validation_alias="LOG_JSON")

    def fetch_config(self) -> FetchConfig:
        """Build the upstream fetch configuration."""
        return FetchConfig(
            base_url=self.flare_api_url,
            timeout_seconds=self.upstream_timeout_seconds,
        )


def get_settings() -> AppSettings:
    """Get a settings instance."""
    return AppSettings()
