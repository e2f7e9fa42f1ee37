"""Core layer for the bf6-stats card renderer.

Entities, formatting, metric building and layout geometry. Nothing in this
package performs I/O.
"""

from .entities import Metric, RenderConfig, StatsSnapshot, WeaponRecord
from .enums import Platform
from .errors import (
    InvalidInputError,
    PlayerNotFoundError,
    RenderFailedError,
    RenderUnavailableError,
    StatsAPIError,
    StatsCardError,
)

__all__ = [
    "Metric",
    "RenderConfig",
    "StatsSnapshot",
    "WeaponRecord",
    "Platform",
    "StatsCardError",
    "InvalidInputError",
    "StatsAPIError",
    "PlayerNotFoundError",
    "RenderUnavailableError",
    "RenderFailedError",
]
