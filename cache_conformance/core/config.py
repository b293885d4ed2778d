"""Suite configuration using Pydantic Settings.

Environment variables are loaded with the CACHE_CONFORMANCE_ prefix, and
from a local .env file when present.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from cache_conformance.core.constants import Timing


class Settings(BaseSettings):
    """Suite settings loaded from environment variables."""

    suite_name: str = "cache-conformance"
    environment: str = Field(default="development", description="Runtime environment")
    log_level: str = Field(default="INFO", description="Logging level")

    # Expiration
    observation_delay_seconds: float = Field(
        default=Timing.OBSERVATION_DELAY,
        gt=0,
        description="Seconds to wait between writing with a TTL and re-reading",
    )
    clock: Literal["system", "fake"] = Field(
        default="system",
        description="Default time source for contract test classes",
    )

    # Optional contract guarantees
    atomic_batches: bool = Field(
        default=False,
        description="Also verify that a failing batch write mutates nothing",
    )

    # Corpus
    large_value_bytes: int = Field(
        default=1024 * 1024,
        ge=1,
        description="Length of the large string in the value corpus",
    )

    model_config = SettingsConfigDict(
        env_prefix="CACHE_CONFORMANCE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings: Suite settings singleton
    """
    return Settings()
