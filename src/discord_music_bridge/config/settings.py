"""Application Settings and Configuration

Pydantic-based settings management using environment variables.
Settings are loaded from environment variables with support for .env files,
type validation, and sensible defaults. All settings are frozen and immutable
after initialization.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, BaseModel, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..domain.shared.messages import ErrorMessages


class DiscordSettings(BaseModel):
    """Discord bot configuration."""

    model_config = SettingsConfigDict(frozen=True, populate_by_name=True)

    token: SecretStr = Field(
        default=SecretStr(""), validation_alias=AliasChoices("token", "bot_token", "discord_token")
    )
    client_id: int | None = Field(
        default=None,
        gt=0,
        validation_alias=AliasChoices("client_id", "application_id", "discord_client_id"),
    )
    # Deployment scope: when set, commands are registered to this guild only
    guild_id: int | None = Field(
        default=None,
        gt=0,
        validation_alias=AliasChoices("guild_id", "discord_guild_id"),
    )
    shutdown_timeout_s: float = Field(default=30.0, gt=0)


class PlaybackSettings(BaseModel):
    """Playback controller configuration."""

    model_config = SettingsConfigDict(frozen=True, populate_by_name=True)

    default_volume: int = Field(default=80, ge=0, le=100)
    search_limit: int = Field(default=10, ge=1, le=10)
    ytdlp_format: str = "bestaudio/best"
    socket_timeout_s: int = Field(default=10, ge=1, le=60)


class LyricsSettings(BaseModel):
    """Lyrics provider configuration."""

    model_config = SettingsConfigDict(frozen=True, populate_by_name=True)

    base_url: str = "https://lrclib.net"
    timeout_s: float = Field(default=10.0, gt=0, le=60)

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("Lyrics base URL must start with http:// or https://")
        return v.rstrip("/")


class Settings(BaseSettings):
    """Application settings container.

    Environment variable naming:
    - ENVIRONMENT, DEBUG, LOG_LEVEL (top-level)
    - DISCORD_TOKEN, DISCORD_CLIENT_ID, DISCORD_GUILD_ID (flat aliases)
    - DISCORD__TOKEN, PLAYBACK__DEFAULT_VOLUME, LYRICS__BASE_URL (nested)
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

    # Flat credentials, merged into ``discord`` below
    discord_token: SecretStr | None = None
    discord_client_id: int | None = None
    discord_guild_id: int | None = None

    discord: DiscordSettings = Field(default_factory=DiscordSettings)
    playback: PlaybackSettings = Field(default_factory=PlaybackSettings)
    lyrics: LyricsSettings = Field(default_factory=LyricsSettings)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(
                ErrorMessages.INVALID_LOG_LEVEL.format(level=v, valid_levels=valid_levels)
            )
        return v_upper

    @property
    def effective_log_level(self) -> str:
        """``DEBUG`` when the debug flag is on, otherwise the configured level."""
        return "DEBUG" if self.debug else self.log_level

    def model_post_init(self, __context: object) -> None:
        overrides: dict[str, object] = {}
        if self.discord_token is not None and not self.discord.token.get_secret_value():
            overrides["token"] = self.discord_token
        if self.discord_client_id is not None and self.discord.client_id is None:
            overrides["client_id"] = self.discord_client_id
        if self.discord_guild_id is not None and self.discord.guild_id is None:
            overrides["guild_id"] = self.discord_guild_id
        if overrides:
            self.discord = self.discord.model_copy(update=overrides)


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
