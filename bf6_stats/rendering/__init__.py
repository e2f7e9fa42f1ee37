"""Stats card rendering with Pillow."""

from .compositor import CardCompositor, clamp_render_config

__all__ = [
    "CardCompositor",
    "clamp_render_config",
]
