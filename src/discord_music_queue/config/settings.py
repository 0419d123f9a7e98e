"""Application Settings and Configuration

Pydantic-based settings management using environment variables.
Settings are loaded from environment variables with support for .env files,
type validation, and sensible defaults. All settings are frozen after
initialization.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, BaseModel, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..domain.shared.constants import AudioConstants, DatabaseURLSchemes, LimitConstants
from ..domain.shared.messages import ErrorMessages
from ..domain.shared.validators import validate_discord_snowflake


class DatabaseSettings(BaseModel):
    """Database configuration (blacklist storage)."""

    model_config = SettingsConfigDict(frozen=True, populate_by_name=True)

    url: str = Field(
        default="sqlite:///data/bot.db",
        validation_alias=AliasChoices("url", "database_url", "db_url"),
    )
    busy_timeout_ms: int = Field(
        default=5000,
        ge=1000,
        le=30000,
        validation_alias=AliasChoices("busy_timeout_ms", "busy_timeout"),
    )
    connection_timeout_s: int = Field(
        default=10,
        ge=1,
        le=60,
        validation_alias=AliasChoices("connection_timeout_s", "connection_timeout"),
    )

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        if not v.startswith(DatabaseURLSchemes.SQLITE) and v != DatabaseURLSchemes.MEMORY:
            raise ValueError(ErrorMessages.INVALID_DATABASE_URL)
        return v


class DiscordSettings(BaseModel):
    """Discord bot configuration."""

    model_config = SettingsConfigDict(frozen=True, populate_by_name=True)

    token: SecretStr = Field(
        default=SecretStr(""), validation_alias=AliasChoices("token", "bot_token", "discord_token")
    )
    command_prefix: str = Field(
        default="!",
        min_length=1,
        max_length=5,
        validation_alias=AliasChoices("command_prefix", "prefix"),
    )
    owner_ids: tuple[int, ...] = Field(
        default_factory=tuple, validation_alias=AliasChoices("owner_ids", "owners")
    )
    guild_ids: tuple[int, ...] = Field(
        default_factory=tuple, validation_alias=AliasChoices("guild_ids", "guilds")
    )
    sync_on_startup: bool = False

    @field_validator("owner_ids", "guild_ids", mode="before")
    @classmethod
    def validate_snowflake_ids(cls, v: tuple[int, ...] | list[int] | str) -> tuple[int, ...]:
        """Accept a JSON array, a list/tuple, or a comma-separated string of IDs."""
        if isinstance(v, str):
            v = tuple(int(part) for part in v.split(",") if part.strip())
        if isinstance(v, list):
            v = tuple(v)
        for snowflake in v:
            validate_discord_snowflake(snowflake)
        return v


class AudioSettings(BaseModel):
    """Audio playback and resolution configuration."""

    model_config = SettingsConfigDict(frozen=True, populate_by_name=True)

    default_volume_percent: int = Field(
        default=LimitConstants.DEFAULT_VOLUME_PERCENT,
        ge=LimitConstants.MIN_PERCENT,
        le=LimitConstants.MAX_PERCENT,
        validation_alias=AliasChoices("default_volume_percent", "default_volume"),
    )
    ffmpeg_options: dict[str, str] = Field(
        default_factory=lambda: {
            "before_options": AudioConstants.FFMPEG_BEFORE_OPTIONS_DEFAULT,
            "options": AudioConstants.FFMPEG_OPTIONS_DEFAULT,
        }
    )
    ytdlp_format: str = AudioConstants.YTDLP_FORMAT_DEFAULT
    resolve_timeout_seconds: float = Field(default=30.0, gt=0.0, le=300.0)
    connect_timeout_seconds: float = Field(
        default=AudioConstants.CONNECT_TIMEOUT_SECONDS, gt=0.0, le=60.0
    )


class CleanupSettings(BaseModel):
    """Idle session eviction configuration."""

    model_config = SettingsConfigDict(frozen=True)

    idle_session_minutes: int = Field(default=15, ge=1)
    interval_seconds: int = Field(default=60, ge=5)


class Settings(BaseSettings):
    """Application settings container.

    Environment variable naming:
    - ENVIRONMENT, DEBUG, LOG_LEVEL (top-level)
    - DISCORD__TOKEN, DISCORD__COMMAND_PREFIX, DISCORD__OWNER_IDS, ... (nested)
    - DATABASE__URL, AUDIO__RESOLVE_TIMEOUT_SECONDS, CLEANUP__IDLE_SESSION_MINUTES, ...
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

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    discord: DiscordSettings = Field(default_factory=DiscordSettings)
    audio: AudioSettings = Field(default_factory=AudioSettings)
    cleanup: CleanupSettings = Field(default_factory=CleanupSettings)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
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

    Settings are loaded from:
    1. .env file (if present)
    2. Environment variables
    3. Default values
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing)."""
    get_settings.cache_clear()
