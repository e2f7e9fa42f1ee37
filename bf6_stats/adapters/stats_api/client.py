"""gametools Battlefield 6 stats API client with error mapping."""

from typing import Any, Dict, Optional

import httpx
import structlog

from bf6_stats.core.entities import StatsSnapshot
from bf6_stats.core.enums import Platform
from bf6_stats.core.errors import PlayerNotFoundError, StatsAPIError

logger = structlog.get_logger()

DEFAULT_STATS_API_URL = "https://api.gametools.network/bf6/stats/"


def _first_error(payload: Any) -> Optional[str]:
    """Return the first API-reported error message in a response body, if any."""
    if not isinstance(payload, dict):
        return None
    errors = payload.get("errors")
    if isinstance(errors, list) and errors:
        first = errors[0]
        return str(first) if first else ""
    return None


class StatsAPIClient:
    """Client for the gametools stats endpoint."""

    def __init__(
        self,
        base_url: str = DEFAULT_STATS_API_URL,
        request_timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize the stats API client.

        Args:
            base_url: Stats endpoint URL
            request_timeout: Request timeout in seconds
            client: Optional pre-built HTTP client (used by tests)
        """
        self.base_url = base_url
        self.request_timeout = request_timeout
        self.client = client or httpx.AsyncClient(timeout=request_timeout)

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.client.aclose()

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()

    async def _make_request(self, params: Dict[str, str]) -> Any:
        """GET the stats endpoint and translate failures into service errors."""
        headers = {"Accept": "application/json"}

        try:
            response = await self.client.get(self.base_url, params=params, headers=headers)
        except httpx.RequestError as e:
            logger.error("HTTP request failed", error=str(e))
            raise StatsAPIError() from e

        if response.status_code >= 400:
            body = None
            try:
                body = response.json()
            except ValueError:
                pass

            message = _first_error(body)
            logger.warning(
                "Stats API error",
                status_code=response.status_code,
                api_error=message,
            )
            if message:
                raise StatsAPIError(message)
            if response.status_code == 404:
                raise PlayerNotFoundError()
            raise StatsAPIError()

        try:
            return response.json()
        except ValueError as e:
            logger.error("Stats API returned invalid JSON", error=str(e))
            raise StatsAPIError() from e

    async def get_stats(self, player: str, platform: Platform, language: str) -> StatsSnapshot:
        """Fetch the stats snapshot for a player.

        Args:
            player: EA ID of the player
            platform: Platform to query
            language: API language code (``lang`` parameter)

        Returns:
            StatsSnapshot parsed from the response

        Raises:
            PlayerNotFoundError: If the API has no results for the player
            StatsAPIError: For API-reported errors and transport failures
        """
        logger.info("Fetching player stats", player=player, platform=platform.value)

        data = await self._make_request(
            {"name": player, "platform": platform.value, "lang": language}
        )

        if not data or not isinstance(data, dict) or data.get("hasResults") is False:
            logger.info("No stats found", player=player, platform=platform.value)
            raise PlayerNotFoundError()

        message = _first_error(data)
        if message is not None:
            logger.warning("Stats API reported errors", player=player, api_error=message)
            raise StatsAPIError(message)

        snapshot = StatsSnapshot.from_api(data)
        logger.info(
            "Successfully fetched player stats",
            player=player,
            weapons=len(snapshot.weapons),
        )
        return snapshot
