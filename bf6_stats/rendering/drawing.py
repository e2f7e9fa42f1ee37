"""Pillow drawing helpers shared by the card compositor."""

import os
from functools import lru_cache
from typing import Tuple, Union

from PIL import Image, ImageChops, ImageDraw, ImageFont

Color = Tuple[int, int, int, int]
Font = Union[ImageFont.FreeTypeFont, ImageFont.ImageFont]

# Palette
BG_TOP = (15, 23, 42, 255)
BG_BOTTOM = (2, 6, 23, 255)
PANEL_BG = (30, 41, 59, 217)
TITLE_COLOR = (226, 232, 240, 255)
TEXT_COLOR = (248, 250, 252, 255)
LABEL_COLOR = (148, 163, 184, 255)
CAPTION_COLOR = (203, 213, 245, 255)
FOOTER_COLOR = (100, 116, 139, 255)
GUIDE_COLOR = (148, 163, 184, 12)

FONT_PATHS = [
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/TTF/DejaVuSans.ttf",
    "/System/Library/Fonts/Helvetica.ttc",
    "C:\\Windows\\Fonts\\segoeui.ttf",
]

BOLD_FONT_PATHS = [
    "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
    "/usr/share/fonts/TTF/DejaVuSans-Bold.ttf",
    "/System/Library/Fonts/Helvetica.ttc",
    "C:\\Windows\\Fonts\\segoeuib.ttf",
]


@lru_cache(maxsize=32)
def load_font(size: int, bold: bool = False) -> Font:
    """Load a font, falling back to Pillow's default if none is installed."""
    paths = BOLD_FONT_PATHS + FONT_PATHS if bold else FONT_PATHS
    for path in paths:
        if os.path.exists(path):
            try:
                return ImageFont.truetype(path, size)
            except OSError:
                continue
    return ImageFont.load_default(size=size)


def hex_to_rgba(value: str, alpha: float = 1.0) -> Color:
    """Parse ``#rgb`` / ``#rrggbb`` into an RGBA tuple.

    Unparseable input yields black, matching what a canvas does with a bad
    color string.
    """
    digits = (value or "").strip().lstrip("#")
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    try:
        r, g, b = (int(digits[i:i + 2], 16) for i in (0, 2, 4))
    except ValueError:
        r = g = b = 0
    return (r, g, b, max(0, min(255, round(alpha * 255))))


def with_alpha(color: Color, alpha: float) -> Color:
    return (color[0], color[1], color[2], max(0, min(255, round(alpha * 255))))


def vertical_gradient(size: Tuple[int, int], top: Color, bottom: Color) -> Image.Image:
    """Top-to-bottom linear gradient image."""
    mask = Image.linear_gradient("L").resize(size)
    return Image.composite(Image.new("RGBA", size, bottom), Image.new("RGBA", size, top), mask)


def text_width(draw: ImageDraw.ImageDraw, text: str, font: Font) -> float:
    return draw.textlength(text, font=font)


def fit_text(draw: ImageDraw.ImageDraw, text: str, font: Font, max_width: float) -> str:
    """Truncate ``text`` with an ellipsis so it fits in ``max_width``."""
    if max_width <= 0:
        return ""
    if text_width(draw, text, font) <= max_width:
        return text
    while text and text_width(draw, text + "...", font) > max_width:
        text = text[:-1]
    return text + "..." if text else ""


def paste_rounded(
    surface: Image.Image, image: Image.Image, box: Tuple[int, int, int, int], radius: int
) -> None:
    """Resize ``image`` into ``box`` and paste it with rounded corners."""
    x0, y0, x1, y1 = box
    size = (max(1, x1 - x0), max(1, y1 - y0))
    fitted = image.convert("RGBA").resize(size, resample=Image.Resampling.LANCZOS)
    mask = Image.new("L", size, 0)
    ImageDraw.Draw(mask).rounded_rectangle((0, 0, size[0] - 1, size[1] - 1), radius=radius, fill=255)
    alpha = ImageChops.multiply(fitted.getchannel("A"), mask)
    fitted.putalpha(alpha)
    surface.alpha_composite(fitted, dest=(x0, y0))


def paste_contained(surface: Image.Image, image: Image.Image, box: Tuple[int, int, int, int]) -> None:
    """Scale ``image`` to fit inside ``box`` keeping its aspect ratio, centered."""
    x0, y0, x1, y1 = box
    width, height = max(1, x1 - x0), max(1, y1 - y0)
    fitted = image.convert("RGBA")
    fitted.thumbnail((width, height), resample=Image.Resampling.LANCZOS)
    dest = (x0 + (width - fitted.width) // 2, y0 + (height - fitted.height) // 2)
    surface.alpha_composite(fitted, dest=dest)


def draw_centered(
    draw: ImageDraw.ImageDraw, center: Tuple[float, float], text: str, font: Font, fill: Color
) -> None:
    """Draw ``text`` centered on ``center``."""
    left, top, right, bottom = draw.textbbox((0, 0), text, font=font)
    x = center[0] - (right - left) / 2 - left
    y = center[1] - (bottom - top) / 2 - top
    draw.text((x, y), text, font=font, fill=fill)
