"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        description="Database connection URL used by SQLAlchemy to connect to the store",
        min_length=1,
    )
    secret_key: str = Field(
        description="Secret key used to verify bearer tokens", min_length=1
    )
    access_token_algorithm: str = Field(
        default="HS256", description="Algorithm used to sign bearer tokens"
    )
    access_token_expire_minutes: int = Field(
        default=60,
        description="Number of minutes before access tokens expire",
        gt=0,
    )
    app_timezone: str = Field(
        default="UTC",
        description="Timezone used to localize timestamps read from the store",
    )
    single_row_timeout_seconds: float = Field(
        default=5.0,
        description="Deadline for single-row store operations issued by a request",
        gt=0,
    )
    list_timeout_seconds: float = Field(
        default=10.0,
        description="Deadline for list store operations issued by a request",
        gt=0,
    )
    notification_timeout_seconds: float = Field(
        default=10.0,
        description="Deadline for detached like notification delivery and cleanup",
        gt=0,
    )
    follow_notification_timeout_seconds: float = Field(
        default=5.0,
        description="Deadline for detached follow notification delivery and cleanup",
        gt=0,
    )
    fanout_timeout_seconds: float = Field(
        default=30.0,
        description="Deadline for a complete new-post fan-out run",
        gt=0,
    )
    fanout_max_workers: int = Field(
        default=4,
        description="Size of the worker pool that runs detached notification work",
        gt=0,
    )
    redis_url: str | None = Field(
        default=None,
        description="Redis URL used to publish social events; publishing is disabled when empty",
    )
    event_stream: str = Field(
        default="social_events",
        description="Redis stream that receives published social events",
        min_length=1,
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000"],
        description="Origins allowed to call the HTTP API from a browser",
    )
    log_level: str = Field(default="INFO", description="Root logging level")

    @model_validator(mode="after")
    def _validate_deadlines(self) -> "Settings":
        if self.list_timeout_seconds < self.single_row_timeout_seconds:
            raise ValueError(
                "LIST_TIMEOUT_SECONDS must not be shorter than SINGLE_ROW_TIMEOUT_SECONDS"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
