"""Stats API adapter package.

This package contains the gametools stats API client for the card renderer.
"""

from .client import DEFAULT_STATS_API_URL, StatsAPIClient

__all__ = [
    "StatsAPIClient",
    "DEFAULT_STATS_API_URL",
]
