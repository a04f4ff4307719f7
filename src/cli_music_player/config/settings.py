"""Application Settings and Configuration

Pydantic-based settings management using environment variables.
Settings are loaded from environment variables with support for .env files,
type validation, and sensible defaults. All settings are frozen and immutable
after initialization.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..domain.shared.messages import ErrorMessages
from ..domain.shared.types import DelaySeconds

DEFAULT_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"


class PlayerSettings(BaseModel):
    """External player (mpv) configuration and playback timings."""

    model_config = SettingsConfigDict(frozen=True, populate_by_name=True)

    executable: str = Field(
        default="mpv",
        validation_alias=AliasChoices("executable", "mpv_path", "player"),
    )
    user_agent: str = Field(default=DEFAULT_USER_AGENT, min_length=1)
    extra_args: tuple[str, ...] = Field(default_factory=tuple)
    transition_guard_seconds: DelaySeconds = 1.0
    auto_advance_delay_seconds: DelaySeconds = 0.5
    error_advance_delay_seconds: DelaySeconds = 1.0
    kill_grace_seconds: DelaySeconds = 2.0

    @field_validator("executable")
    @classmethod
    def validate_executable(cls, v: str) -> str:
        if not v.strip():
            raise ValueError(ErrorMessages.EMPTY_EXECUTABLE)
        return v.strip()

    @field_validator("extra_args", mode="before")
    @classmethod
    def validate_extra_args(cls, v: tuple[str, ...] | list[str] | str) -> tuple[str, ...]:
        """Accept a whitespace-separated string as well as a sequence of flags."""
        if isinstance(v, str):
            return tuple(v.split())
        if isinstance(v, list):
            return tuple(v)
        return v


class SearchSettings(BaseModel):
    """Catalog search (yt-dlp) configuration."""

    model_config = SettingsConfigDict(frozen=True, populate_by_name=True)

    result_limit: int = Field(
        default=10,
        ge=1,
        le=50,
        validation_alias=AliasChoices("result_limit", "limit"),
    )
    socket_timeout: int = Field(default=10, ge=1, le=120)
    retries: int = Field(default=3, ge=0, le=10)


class LifecycleSettings(BaseModel):
    """Shutdown behaviour."""

    model_config = SettingsConfigDict(frozen=True)

    exit_delay_seconds: DelaySeconds = 1.0


class Settings(BaseSettings):
    """Application settings container.

    Automatically loads configuration from environment variables.

    Environment variable naming:
    - ENVIRONMENT, DEBUG, LOG_LEVEL (top-level)
    - PLAYER__EXECUTABLE, PLAYER__KILL_GRACE_SECONDS, etc. (nested with prefix)
    - SEARCH__RESULT_LIMIT, SEARCH__SOCKET_TIMEOUT
    - LIFECYCLE__EXIT_DELAY_SECONDS
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    environment: Literal["development", "production", "test"] = "development"
    debug: bool = False
    log_level: str = "INFO"

    player: PlayerSettings = Field(default_factory=PlayerSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)
    lifecycle: LifecycleSettings = Field(default_factory=LifecycleSettings)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(
                ErrorMessages.INVALID_LOG_LEVEL.format(level=v, valid_levels=sorted(valid_levels))
            )
        return v_upper


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached application settings.

    Settings are automatically loaded from:
    1. .env file (if present)
    2. Environment variables
    3. Default values
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing)."""
    get_settings.cache_clear()
