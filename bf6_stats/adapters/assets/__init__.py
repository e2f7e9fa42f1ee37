"""Remote image asset adapter."""

from .loader import AssetLoader, AssetTooLargeError, DEFAULT_MAX_BYTES, DEFAULT_TIMEOUT_SECONDS

__all__ = [
    "AssetLoader",
    "AssetTooLargeError",
    "DEFAULT_MAX_BYTES",
    "DEFAULT_TIMEOUT_SECONDS",
]
