"""Configuration management using Pydantic Settings.

This module provides type-safe configuration management with automatic
environment variable loading and validation using Pydantic Settings v2.

The configuration is organized into logical groups:
- LoggingConfig: Logging levels and files
- CredentialsConfig: Spotify client credentials
- LavalinkConfig: Audio backend node address, shared secret and search source
- APIConfig: Endpoint URLs, timeouts and token renewal tuning
- MatchingConfig: Defaults applied when a resolution call passes no options
"""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingConfig(BaseModel):
    """Logging configuration for console and file output."""

    console_level: str = "INFO"
    file_level: str = "DEBUG"
    log_file: Path = Path("logs/trackbridge.log")


class CredentialsConfig(BaseModel):
    """Spotify client-credentials pair."""

    spotify_client_id: str = ""
    spotify_client_secret: str = ""


class LavalinkConfig(BaseModel):
    """Lavalink node used for track searches."""

    host: str = "localhost"
    port: int = 2333
    password: str = "youshallnotpass"
    search_prefix: str = "ytsearch"  # e.g. "scsearch" for SoundCloud


class APIConfig(BaseModel):
    """External API endpoints and request tuning."""

    spotify_token_url: str = "https://accounts.spotify.com/api/token"
    spotify_api_base_url: str = "https://api.spotify.com/v1/"
    spotify_market: str | None = None

    # None means requests wait indefinitely
    request_timeout: float | None = None

    # Seconds subtracted from expires_in before the next renewal fires
    token_renewal_margin_seconds: float = 0.0


class MatchingConfig(BaseModel):
    """Defaults for resolution calls made without explicit MatchOptions."""

    prioritize_same_duration: bool = False
    duration_tolerance_ms: int = 1500


class Settings(BaseSettings):
    """Main application settings with environment variable support.

    Environment variables can be set using flat naming or nested naming:
    - Flat: SPOTIFY_CLIENT_ID, LAVALINK_HOST, CONSOLE_LOG_LEVEL
    - Nested: CREDENTIALS__SPOTIFY_CLIENT_ID, LAVALINK__HOST, LOGGING__CONSOLE_LEVEL

    The .env file is automatically loaded for development convenience.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    # Nested configuration groups
    logging: LoggingConfig = LoggingConfig()
    credentials: CredentialsConfig = CredentialsConfig()
    lavalink: LavalinkConfig = LavalinkConfig()
    api: APIConfig = APIConfig()
    matching: MatchingConfig = MatchingConfig()

    @model_validator(mode="before")
    @classmethod
    def transform_flat_env_vars(cls, data: Any) -> Any:
        """Transform flat environment variables to nested structure.

        Handles flat env vars (LAVALINK_HOST) and maps them to the
        nested structure expected by the models (lavalink.host).
        """
        if not isinstance(data, dict):
            return data

        transformed = {}

        mappings = {
            "logging": {
                "console_log_level": "console_level",
                "file_log_level": "file_level",
                "log_file": "log_file",
            },
            "credentials": {
                "spotify_client_id": "spotify_client_id",
                "spotify_client_secret": "spotify_client_secret",
            },
            "lavalink": {
                "lavalink_host": "host",
                "lavalink_port": "port",
                "lavalink_password": "password",
                "lavalink_search_prefix": "search_prefix",
            },
        }
        for group, mapping in mappings.items():
            for env_key, field_key in mapping.items():
                if env_key in data:
                    transformed.setdefault(group, {})[field_key] = data.pop(env_key)

        # Merge transformed nested structure back into data
        for group, values in transformed.items():
            existing = data.get(group)
            if isinstance(existing, dict):
                values = {**existing, **values}
            data[group] = values

        return data


# Singleton instance for application use
settings = Settings()
