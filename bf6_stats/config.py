"""Configuration management for the bf6-stats card renderer."""

import re
from dataclasses import dataclass
from enum import Enum

from decouple import Choices
from decouple import config

from bf6_stats.core.entities import RenderConfig
from bf6_stats.core.enums import Platform

DEFAULT_ACCENT_COLOR = "#2563eb"

_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


class Environment(Enum):
    """Supported deployment environments."""

    DEVELOPMENT = "development"
    CI = "CI"
    PRODUCTION = "production"


def normalize_accent_color(value: str, default: str = DEFAULT_ACCENT_COLOR) -> str:
    """Return ``value`` if it is a ``#rgb``/``#rrggbb`` color, otherwise ``default``."""
    value = (value or "").strip()
    if _HEX_COLOR.match(value):
        return value.lower()
    return default


@dataclass
class Config:
    """Configuration for the bf6-stats card renderer."""

    # Environment configuration
    environment: Environment = Environment.DEVELOPMENT

    # Stats API configuration
    stats_api_url: str = "https://api.gametools.network/bf6/stats/"
    stats_api_timeout_seconds: int = 10
    default_platform: str = "pc"
    language: str = "en-us"

    # Card configuration
    accent_color: str = DEFAULT_ACCENT_COLOR
    card_width: int = 940
    card_height: int = 860
    primary_columns: int = 3
    secondary_columns: int = 3
    weapon_count: int = 3

    # Remote image limits
    asset_timeout_seconds: float = 10.0
    asset_max_bytes: int = 5 * 1024 * 1024

    # Logging configuration
    log_level: str = "INFO"
    log_format: str = "text"

    @classmethod
    def from_env(cls) -> "Config":
        """Create configuration from environment variables."""
        env = Environment(
            config("ENVIRONMENT", default="development", cast=Choices(["development", "CI", "production"]))
        )

        return cls(
            # Environment
            environment=env,
            # Stats API
            stats_api_url=config("STATS_API_URL", default="https://api.gametools.network/bf6/stats/"),
            stats_api_timeout_seconds=config("STATS_API_TIMEOUT_SECONDS", default=10, cast=int),
            default_platform=config("DEFAULT_PLATFORM", default="pc", cast=Choices(["pc", "ps", "xbox"])),
            language=config("LANGUAGE", default="en-us"),
            # Card
            accent_color=normalize_accent_color(config("ACCENT_COLOR", default=DEFAULT_ACCENT_COLOR)),
            card_width=config("CARD_WIDTH", default=940, cast=int),
            card_height=config("CARD_HEIGHT", default=860, cast=int),
            primary_columns=config("PRIMARY_COLUMNS", default=3, cast=int),
            secondary_columns=config("SECONDARY_COLUMNS", default=3, cast=int),
            weapon_count=config("WEAPON_COUNT", default=3, cast=int),
            # Remote images
            asset_timeout_seconds=config("ASSET_TIMEOUT_SECONDS", default=10.0, cast=float),
            asset_max_bytes=config("ASSET_MAX_BYTES", default=5 * 1024 * 1024, cast=int),
            # Logging
            log_level=config(
                "LOG_LEVEL", default="INFO", cast=Choices(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])
            ),
            log_format=config("LOG_FORMAT", default="text", cast=Choices(["json", "text"])),
        )

    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == Environment.DEVELOPMENT

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == Environment.PRODUCTION

    def get_default_platform(self) -> Platform:
        """Default platform as an enum member."""
        return Platform(self.default_platform)

    def render_config(self, platform: Platform, player_name: str) -> RenderConfig:
        """Build the per-request render options for a player."""
        return RenderConfig(
            accent_color=self.accent_color,
            width=self.card_width,
            height=self.card_height,
            primary_columns=self.primary_columns,
            secondary_columns=self.secondary_columns,
            weapon_count=self.weapon_count,
            platform=platform.label,
            player_name=player_name,
        )
