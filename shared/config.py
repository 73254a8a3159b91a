"""
Notifier settings.

Loaded from environment variables with the ``SYNDICATION_`` prefix (or a
``.env`` file), e.g. ``SYNDICATION_SINK=memory``.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings for wiring the notifier to its collaborators."""

    model_config = SettingsConfigDict(
        env_prefix="SYNDICATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    data_dir: Path = Field(
        default=Path(__file__).parent.parent / "data",
        description="Directory holding posts.json and sites.json",
    )
    sink: Literal["log", "memory"] = Field(
        default="log",
        description="Where notifications are delivered",
    )
    sink_fail_rate: float = Field(
        default=0.0,
        ge=0.0,
        le=1.0,
        description="Simulated rejection rate for the memory sink",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
