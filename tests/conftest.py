"""Shared pytest fixtures for bf6-stats tests."""

import sys
from pathlib import Path

import pytest
import structlog
from PIL import Image

# Add the project root to the path if not already there
# This ensures the bf6_stats package can be imported without installing it
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from bf6_stats.config import Config
from bf6_stats.core.entities import RenderConfig
from tests.factories import FakeAssetLoader


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo any structlog configuration a test applied."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def test_image():
    """Small opaque RGBA image used as a successfully loaded asset."""
    return Image.new("RGBA", (64, 64), (200, 40, 40, 255))


@pytest.fixture
def fake_loader(test_image):
    """Loader that returns ``test_image`` for every non-empty URL."""
    return FakeAssetLoader(default=test_image)


@pytest.fixture
def failing_loader():
    """Loader for which every fetch fails."""
    return FakeAssetLoader(default=None)


@pytest.fixture
def render_config():
    """Default render configuration for a PC player."""
    return RenderConfig(platform="PC", player_name="TestSoldier")


@pytest.fixture
def test_config():
    """Configuration with defaults, independent of the environment."""
    return Config()
