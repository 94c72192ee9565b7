"""Sender configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from gcm_sender.core.constants import (
    BACKOFF_INITIAL_DELAY,
    GCM_SEND_URI,
    MAX_BACKOFF_DELAY,
    SOCKET_TIMEOUT,
)


class Settings(BaseSettings):
    """Sender settings loaded from ``GCM_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="GCM_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    api_key: str = ""                   # Empty = sender not configured
    send_uri: str = GCM_SEND_URI
    timeout: float = SOCKET_TIMEOUT     # Per HTTP round trip
    proxy: str = ""                     # Empty = direct connection

    # Retry backoff
    backoff_initial_delay: float = BACKOFF_INITIAL_DELAY
    max_backoff_delay: float = MAX_BACKOFF_DELAY

    # Logging
    log_level: str = "INFO"

    @field_validator("timeout", "backoff_initial_delay", "max_backoff_delay")
    @classmethod
    def must_be_positive(cls, v: float) -> float:
        """Reject zero or negative durations."""
        if v <= 0:
            raise ValueError("must be positive")
        return v


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
