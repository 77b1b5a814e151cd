"""
Configuration management for sportradar-stats.

Uses Pydantic settings for type-safe configuration with environment variable support.
All settings can be overridden via environment variables or a local .env file.
The variable names match the ones the SportRadar trial setup documents
(SPORT_RADAR_API_KEY, ALLOWED_COMPETITIONS, ...).
"""

import logging
from functools import lru_cache
from typing import Annotated, Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

DEFAULT_ALLOWED_COMPETITIONS = [
    "Premier League",
    "Bundesliga",
    "Serie A",
    "LaLiga",
    "UEFA Champions League",
    "MLS",
]
DEFAULT_ALLOWED_COUNTRIES = ["England", "Germany", "Italy", "Spain", "USA", "Austria"]


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    Construct once at startup (see get_settings) and pass the instance to
    the API client and the wizard; nothing reads the environment ad hoc.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # ==========================================================================
    # SportRadar API
    # ==========================================================================
    api_base_url: str = Field(
        default="https://api.sportradar.com",
        validation_alias=AliasChoices("SPORT_RADAR_API_BASE_URL", "api_base_url"),
    )
    api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("SPORT_RADAR_API_KEY", "api_key"),
        description="SportRadar API key",
    )
    access_level: str = Field(
        default="trial",
        validation_alias=AliasChoices("SPORT_RADAR_API_ACCESS_LEVEL", "access_level"),
        description="trial or production",
    )
    api_version: str = Field(
        default="v4",
        validation_alias=AliasChoices("SPORT_RADAR_API_VERSION", "api_version"),
        description="Version path segment; empty string drops the segment",
    )
    language_code: str = Field(
        default="en",
        validation_alias=AliasChoices("SPORT_RADAR_API_LANGUAGE_CODE", "language_code"),
    )
    response_format: str = Field(
        default="json",
        validation_alias=AliasChoices("SPORT_RADAR_API_FORMAT", "response_format"),
    )

    # ==========================================================================
    # Transport
    # ==========================================================================
    requests_per_minute: int = Field(
        default=60,
        ge=1,
        validation_alias=AliasChoices("SPORT_RADAR_REQUESTS_PER_MINUTE", "requests_per_minute"),
        description="Trial keys allow one request per second",
    )
    request_timeout: float = Field(
        default=30.0,
        gt=0,
        validation_alias=AliasChoices("SPORT_RADAR_REQUEST_TIMEOUT", "request_timeout"),
    )
    max_retries: int = Field(
        default=3,
        ge=1,
        le=10,
        validation_alias=AliasChoices("SPORT_RADAR_MAX_RETRIES", "max_retries"),
    )

    # ==========================================================================
    # Allow-lists & display
    # ==========================================================================
    allowed_competitions: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: list(DEFAULT_ALLOWED_COMPETITIONS),
        validation_alias=AliasChoices("ALLOWED_COMPETITIONS", "allowed_competitions"),
    )
    allowed_countries: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: list(DEFAULT_ALLOWED_COUNTRIES),
        validation_alias=AliasChoices("ALLOWED_COUNTRIES", "allowed_countries"),
    )
    display_limit: int = Field(
        default=10,
        ge=1,
        validation_alias=AliasChoices("DISPLAY_LIMIT", "display_limit"),
        description="Fallback number of ranked players when none was requested",
    )

    log_level: str = Field(default="WARNING", validation_alias=AliasChoices("LOG_LEVEL", "log_level"))

    @field_validator("allowed_competitions", "allowed_countries", mode="before")
    @classmethod
    def _split_csv(cls, value):
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        return value

    @property
    def competition_allowlist(self) -> frozenset[str]:
        return frozenset(self.allowed_competitions)

    @property
    def country_allowlist(self) -> frozenset[str]:
        return frozenset(self.allowed_countries)

    def is_configured(self) -> bool:
        """Whether an API key is available."""
        return bool(self.api_key)

    def setup_logging(self, level: Optional[str] = None) -> None:
        """Configure logging based on config."""
        logging.basicConfig(
            level=getattr(logging, (level or self.log_level).upper(), logging.WARNING),
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
