"""Main service class for bf6-stats."""

import logging
from typing import Optional

from bf6_stats.adapters.assets import AssetLoader
from bf6_stats.adapters.stats_api import StatsAPIClient
from bf6_stats.config import Config
from bf6_stats.core.enums import Platform
from bf6_stats.core.errors import InvalidInputError, StatsCardError
from bf6_stats.rendering import CardCompositor

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR_MESSAGE = "Lookup failed, please try again later."


def user_message(error: BaseException) -> str:
    """Message to show the end user for any failure."""
    if isinstance(error, StatsCardError):
        return error.user_message
    return UNEXPECTED_ERROR_MESSAGE


class StatsCardService:
    """Looks up a player and renders their stats card.

    Dependencies can be injected for tests; otherwise they are built from the
    configuration and closed by ``close``.
    """

    def __init__(
        self,
        config: Config,
        stats_client: Optional[StatsAPIClient] = None,
        asset_loader: Optional[AssetLoader] = None,
        compositor: Optional[CardCompositor] = None,
    ):
        """Initialize the service.

        Args:
            config: Service configuration
            stats_client: Optional stats API client
            asset_loader: Optional image loader used by the default compositor
            compositor: Optional card compositor
        """
        self.config = config
        self._stats_client = stats_client or StatsAPIClient(
            base_url=config.stats_api_url,
            request_timeout=config.stats_api_timeout_seconds,
        )
        self._asset_loader = asset_loader or AssetLoader(
            timeout=config.asset_timeout_seconds,
            max_bytes=config.asset_max_bytes,
        )
        self._compositor = compositor or CardCompositor(self._asset_loader)

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    async def close(self):
        """Close HTTP clients."""
        await self._stats_client.close()
        await self._asset_loader.close()

    def resolve_platform(self, alias: Optional[str]) -> Platform:
        """Resolve a platform alias, falling back to the configured default.

        Raises:
            InvalidInputError: If the alias is unknown
        """
        platform = Platform.from_alias(alias, default=self.config.get_default_platform())
        if platform is None:
            raise InvalidInputError("Unknown platform. Choose from: pc / ps / xbox.")
        return platform

    async def render_player_card(self, player: Optional[str], platform: Optional[str] = None) -> bytes:
        """Fetch a player's stats and render the card as PNG bytes.

        Raises:
            InvalidInputError: If the player id is missing or the platform unknown
            PlayerNotFoundError: If the stats API has no results
            StatsAPIError: If the stats API fails
            RenderUnavailableError: If the card surface cannot be allocated
            RenderFailedError: If drawing the card fails
        """
        player = (player or "").strip()
        if not player:
            raise InvalidInputError("Please provide the EA ID to look up.")
        resolved = self.resolve_platform(platform)

        logger.info(f"Rendering stats card for {player} on {resolved.value}")

        snapshot = await self._stats_client.get_stats(player, resolved, self.config.language)
        render_config = self.config.render_config(resolved, player)
        return await self._compositor.render(snapshot, render_config)
