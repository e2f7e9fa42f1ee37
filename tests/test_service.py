"""Tests for the stats card service facade."""

import io
from unittest.mock import AsyncMock

import httpx
import pytest
from PIL import Image

from bf6_stats.adapters.stats_api import StatsAPIClient
from bf6_stats.config import Config
from bf6_stats.core.entities import RenderConfig
from bf6_stats.core.enums import Platform
from bf6_stats.core.errors import (
    InvalidInputError,
    PlayerNotFoundError,
    RenderFailedError,
    StatsAPIError,
)
from bf6_stats.rendering import CardCompositor
from bf6_stats.service import StatsCardService, user_message
from tests.factories import FakeAssetLoader, SnapshotFactory


@pytest.fixture
def stats_client():
    """Stats client double returning a populated snapshot."""
    client = AsyncMock(spec=StatsAPIClient)
    client.get_stats.return_value = SnapshotFactory.create()
    return client


@pytest.fixture
def compositor():
    """Compositor double returning fixed bytes."""
    compositor = AsyncMock(spec=CardCompositor)
    compositor.render.return_value = b"png"
    return compositor


class TestStatsCardService:
    """Test cases for StatsCardService."""

    @pytest.mark.asyncio
    async def test_render_player_card(self, test_config, stats_client, compositor):
        """Test the happy path wires lookup, config and rendering together."""
        service = StatsCardService(test_config, stats_client=stats_client, compositor=compositor)

        result = await service.render_player_card("  TestSoldier ", "psn")

        assert result == b"png"
        stats_client.get_stats.assert_awaited_once_with("TestSoldier", Platform.PLAYSTATION, "en-us")
        snapshot, render_config = compositor.render.await_args.args
        assert snapshot.user_name == "TestSoldier"
        assert render_config == RenderConfig(platform="PS", player_name="TestSoldier")

    @pytest.mark.asyncio
    async def test_default_platform(self, stats_client, compositor):
        """Test a missing platform uses the configured default."""
        service = StatsCardService(
            Config(default_platform="xbox"), stats_client=stats_client, compositor=compositor
        )

        await service.render_player_card("TestSoldier")

        assert stats_client.get_stats.await_args.args[1] is Platform.XBOX

    @pytest.mark.asyncio
    @pytest.mark.parametrize("player", [None, "", "   "])
    async def test_missing_player(self, test_config, stats_client, compositor, player):
        """Test a blank player id is rejected before any lookup."""
        service = StatsCardService(test_config, stats_client=stats_client, compositor=compositor)

        with pytest.raises(InvalidInputError):
            await service.render_player_card(player)

        stats_client.get_stats.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_platform(self, test_config, stats_client, compositor):
        """Test an unknown platform alias is rejected."""
        service = StatsCardService(test_config, stats_client=stats_client, compositor=compositor)

        with pytest.raises(InvalidInputError) as exc_info:
            await service.render_player_card("TestSoldier", "switch")

        assert "pc / ps / xbox" in exc_info.value.user_message
        stats_client.get_stats.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_lookup_errors_propagate(self, test_config, stats_client, compositor):
        """Test stats API errors reach the caller and nothing is rendered."""
        stats_client.get_stats.side_effect = PlayerNotFoundError()
        service = StatsCardService(test_config, stats_client=stats_client, compositor=compositor)

        with pytest.raises(PlayerNotFoundError):
            await service.render_player_card("Nobody")

        compositor.render.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_end_to_end_with_real_compositor(self, test_config, test_image):
        """Test a full render through a mocked HTTP stats endpoint."""
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json=SnapshotFactory.api_payload()))
        stats_client = StatsAPIClient(client=httpx.AsyncClient(transport=transport))
        loader = FakeAssetLoader(default=test_image)

        async with StatsCardService(test_config, stats_client=stats_client, asset_loader=loader) as service:
            data = await service.render_player_card("TestSoldier", "pc")

        image = Image.open(io.BytesIO(data))
        assert image.size == (test_config.card_width, test_config.card_height)
        assert loader.closed
        assert stats_client.client.is_closed


class TestUserMessage:
    """Test cases for user_message."""

    def test_service_errors_use_their_message(self):
        """Test service errors pass their own message through."""
        assert user_message(PlayerNotFoundError()) == "No stats found for this player."
        assert user_message(StatsAPIError("Rate limited")) == "Rate limited"
        assert user_message(RenderFailedError()) == "Failed to render the stats card."

    def test_unexpected_errors_are_generic(self):
        """Test other exceptions never leak their detail."""
        assert user_message(KeyError("secret")) == "Lookup failed, please try again later."
