"""
Configuration Models

Pydantic model for runtime configuration, populated from environment
variables (optionally loaded from a .env file).
"""

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from .mood_models import MoodCategory


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class MoodifyConfig(BaseModel):
    """Runtime configuration for the Moodify service."""

    # Logging
    log_level: str = Field(default="INFO", description="Root log level")
    log_dir: str = Field(default="logs", description="Directory for rotating log files")
    enable_console_logging: bool = Field(default=True, description="Log to stdout as well as files")

    # Caching
    cache_enabled: bool = Field(default=True, description="Cache provider results on disk")
    cache_directory: str = Field(default="data/cache", description="Cache directory path")
    mood_cache_ttl_hours: int = Field(default=24, ge=0, description="TTL for mood playlist queries")
    search_cache_ttl_hours: int = Field(default=1, ge=0, description="TTL for free-text searches")

    # Playlist behaviour
    max_playlist_items: int = Field(default=20, ge=1, le=50, description="Maximum items per playlist")
    default_mood: MoodCategory = Field(default=MoodCategory.HAPPY, description="Mood selected on startup")

    # Classifier presets
    strict_minimum_score: int = Field(default=5, ge=0, description="Score gate for the main search")
    lenient_minimum_score: int = Field(default=0, ge=0, description="Score gate for voice search")

    # Server
    host: str = Field(default="127.0.0.1", description="Backend bind host")
    port: int = Field(default=8000, description="Backend bind port")

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid log level: {value}")
        return level

    @field_validator("default_mood", mode="before")
    @classmethod
    def _parse_mood(cls, value):
        if isinstance(value, str):
            return MoodCategory.from_name(value)
        return value

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "MoodifyConfig":
        """
        Build configuration from environment variables.

        Args:
            env_file: Optional path to a .env file; the default lookup is used if None

        Returns:
            Validated configuration
        """
        load_dotenv(env_file)

        return cls(
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_dir=os.getenv("LOG_DIR", "logs"),
            enable_console_logging=_env_bool("LOG_CONSOLE", True),
            cache_enabled=_env_bool("CACHE_ENABLED", True),
            cache_directory=os.getenv("CACHE_DIR", "data/cache"),
            mood_cache_ttl_hours=int(os.getenv("MOOD_CACHE_TTL_HOURS", "24")),
            search_cache_ttl_hours=int(os.getenv("SEARCH_CACHE_TTL_HOURS", "1")),
            max_playlist_items=int(os.getenv("MAX_PLAYLIST_ITEMS", "20")),
            default_mood=os.getenv("DEFAULT_MOOD", "happy"),
            strict_minimum_score=int(os.getenv("STRICT_MINIMUM_SCORE", "5")),
            lenient_minimum_score=int(os.getenv("LENIENT_MINIMUM_SCORE", "0")),
            host=os.getenv("BACKEND_HOST", "127.0.0.1"),
            port=int(os.getenv("BACKEND_PORT", "8000")),
        )
