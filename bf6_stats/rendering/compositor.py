"""Stats card compositor.

Renders one PNG card from a ``StatsSnapshot`` in linear stages: clamp the
config, allocate the surface, draw the background, the header (with avatar
and rank badge fetched concurrently), the primary and secondary metric grids,
the top weapons (images fetched one at a time), the footer, then encode.
"""

import asyncio
import io
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Callable, List, Optional, Sequence

import structlog
from PIL import Image, ImageDraw

from bf6_stats.adapters.assets import AssetLoader
from bf6_stats.core.entities import Metric, RenderConfig, StatsSnapshot, WeaponRecord
from bf6_stats.core.errors import RenderFailedError, RenderUnavailableError
from bf6_stats.core.formatting import (
    coerce_number,
    format_decimal,
    format_integer,
    format_playtime_coarse,
)
from bf6_stats.core.layout import ContentArea, LayoutRect, SectionStack, grid_placement
from bf6_stats.core.metric_builder import (
    build_primary_metrics,
    build_secondary_metrics,
    select_top_weapons,
)

from .drawing import (
    BG_BOTTOM,
    BG_TOP,
    CAPTION_COLOR,
    FOOTER_COLOR,
    GUIDE_COLOR,
    LABEL_COLOR,
    PANEL_BG,
    TEXT_COLOR,
    TITLE_COLOR,
    draw_centered,
    fit_text,
    hex_to_rgba,
    load_font,
    paste_contained,
    paste_rounded,
    text_width,
    vertical_gradient,
    with_alpha,
)

logger = structlog.get_logger()

# Surface bounds, enforced before allocation
MIN_WIDTH, MAX_WIDTH = 600, 2000
MIN_HEIGHT, MAX_HEIGHT = 400, 2400
MIN_COLUMNS, MAX_COLUMNS = 1, 6
MAX_WEAPONS = 10

# Card geometry
MARGIN = 40
PANEL_INSET = 16
SECTION_GAP = 20
AVATAR_SIZE = 120
RANK_BADGE_SIZE = 110
FOOTER_HEIGHT = 40
WEAPON_MIN_HEIGHT = 36

FOOTER_SOURCE = "Data source: api.gametools.network"


@dataclass(frozen=True)
class GridStyle:
    """Sizing for one metric grid."""

    cell_height: int
    gutter: int
    label_size: int
    value_size: int
    highlight_value_size: int


PRIMARY_GRID = GridStyle(cell_height=84, gutter=14, label_size=17, value_size=28, highlight_value_size=34)
SECONDARY_GRID = GridStyle(cell_height=64, gutter=12, label_size=15, value_size=22, highlight_value_size=24)
WEAPON_ROW = GridStyle(cell_height=60, gutter=10, label_size=15, value_size=20, highlight_value_size=20)


@dataclass(frozen=True)
class HeaderText:
    """Strings shown in the header."""

    title: str
    subtitle: str
    platform_tag: str
    initial: str


def _clamp(value, low: int, high: int, default: int) -> int:
    return int(max(low, min(high, coerce_number(value, default=default))))


def clamp_render_config(config: RenderConfig) -> RenderConfig:
    """Constrain caller-supplied dimensions and counts to safe ranges."""
    defaults = RenderConfig()
    return replace(
        config,
        width=_clamp(config.width, MIN_WIDTH, MAX_WIDTH, defaults.width),
        height=_clamp(config.height, MIN_HEIGHT, MAX_HEIGHT, defaults.height),
        primary_columns=_clamp(config.primary_columns, MIN_COLUMNS, MAX_COLUMNS, defaults.primary_columns),
        secondary_columns=_clamp(config.secondary_columns, MIN_COLUMNS, MAX_COLUMNS, defaults.secondary_columns),
        weapon_count=_clamp(config.weapon_count, 0, MAX_WEAPONS, defaults.weapon_count),
    )


def compose_header_text(snapshot: StatsSnapshot, config: RenderConfig) -> HeaderText:
    """Build the header strings from the snapshot, falling back to the request."""
    title = snapshot.display_name(config.player_name or "Unknown Player").upper()
    subtitle = f"Rank: {snapshot.rank_label()}  ·  {format_playtime_coarse(snapshot.seconds_played)} played"
    return HeaderText(
        title=title,
        subtitle=subtitle,
        platform_tag=(config.platform or "?").upper(),
        initial=title[:1] or "?",
    )


class CardCompositor:
    """Renders stats cards. One instance can serve many renders; no state is kept between them."""

    def __init__(self, asset_loader: AssetLoader, now: Callable[[], datetime] = datetime.now):
        """Initialize the compositor.

        Args:
            asset_loader: Loader used for avatar, rank badge and weapon images
            now: Clock used for the footer timestamp
        """
        self.asset_loader = asset_loader
        self.now = now

    async def render(self, snapshot: StatsSnapshot, config: RenderConfig) -> bytes:
        """Render the card and return PNG bytes.

        Raises:
            RenderUnavailableError: If the surface cannot be allocated
            RenderFailedError: If any drawing or encoding stage fails
        """
        config = clamp_render_config(config)
        surface = self._create_surface(config)

        try:
            self._draw_background(surface, config)
            content_top = await self._draw_header(surface, snapshot, config)

            area = ContentArea(
                left=MARGIN,
                top=content_top,
                width=config.width - 2 * MARGIN,
                height=config.height - FOOTER_HEIGHT - PANEL_INSET - content_top,
            )
            stack = SectionStack(content_top, SECTION_GAP)

            bottom = self._draw_metric_grid(
                surface, area, stack.y, build_primary_metrics(snapshot),
                config.primary_columns, PRIMARY_GRID, config.accent_color,
            )
            stack.place(bottom)
            bottom = self._draw_metric_grid(
                surface, area, stack.y, build_secondary_metrics(snapshot),
                config.secondary_columns, SECONDARY_GRID, config.accent_color,
            )
            stack.place(bottom)
            await self._draw_weapons(surface, area, stack.y, snapshot.weapons, config)

            self._draw_footer(surface, config)
            return self._encode(surface)
        except Exception as e:
            logger.error(
                "Stats card render failed",
                player=config.player_name,
                error=repr(e),
                exc_info=True,
            )
            raise RenderFailedError() from e

    def _create_surface(self, config: RenderConfig) -> Image.Image:
        try:
            return Image.new("RGBA", (config.width, config.height), BG_BOTTOM)
        except (MemoryError, ValueError, OSError) as e:
            logger.error(
                "Failed to allocate card surface",
                width=config.width,
                height=config.height,
                error=repr(e),
            )
            raise RenderUnavailableError() from e

    def _draw_background(self, surface: Image.Image, config: RenderConfig) -> None:
        width, height = surface.size
        surface.paste(vertical_gradient(surface.size, BG_TOP, BG_BOTTOM))
        draw = ImageDraw.Draw(surface, "RGBA")

        draw.rounded_rectangle(
            (PANEL_INSET, PANEL_INSET, width - PANEL_INSET, height - PANEL_INSET),
            radius=28,
            fill=(15, 23, 42, 110),
            outline=(51, 65, 85, 160),
            width=1,
        )

        # Accent wedge from the top-right corner
        draw.polygon(
            [(width, 0), (width, height * 0.6), (width * 0.55, height * 0.3)],
            fill=hex_to_rgba(config.accent_color, 0.25),
        )

        for y in range(PANEL_INSET + 40, height - PANEL_INSET, 40):
            draw.line((PANEL_INSET, y, width - PANEL_INSET, y), fill=GUIDE_COLOR, width=1)

    async def _draw_header(self, surface: Image.Image, snapshot: StatsSnapshot, config: RenderConfig) -> int:
        """Draw the header and return the y where grid content starts."""
        text = compose_header_text(snapshot, config)
        avatar, rank_badge = await asyncio.gather(
            self.asset_loader.load(snapshot.avatar_url),
            self.asset_loader.load(snapshot.rank_image_url),
        )

        width = surface.size[0]
        draw = ImageDraw.Draw(surface, "RGBA")
        top = MARGIN

        avatar_box = (MARGIN, top, MARGIN + AVATAR_SIZE, top + AVATAR_SIZE)
        if avatar is not None:
            paste_rounded(surface, avatar, avatar_box, radius=28)
        else:
            self._draw_avatar_placeholder(draw, avatar_box, text.initial, config.accent_color)

        badge_x = width - MARGIN - RANK_BADGE_SIZE
        badge_box = (badge_x, top + 5, badge_x + RANK_BADGE_SIZE, top + 5 + RANK_BADGE_SIZE)
        if rank_badge is not None:
            paste_contained(surface, rank_badge, badge_box)
        else:
            self._draw_rank_placeholder(draw, badge_box, snapshot, config.accent_color)

        text_x = MARGIN + AVATAR_SIZE + 24
        text_width_limit = badge_x - 20 - text_x

        title_font = load_font(42, bold=True)
        draw.text((text_x, top + 10), fit_text(draw, text.title, title_font, text_width_limit),
                  font=title_font, fill=TITLE_COLOR)

        subtitle_font = load_font(20)
        draw.text((text_x, top + 64), fit_text(draw, text.subtitle, subtitle_font, text_width_limit),
                  font=subtitle_font, fill=LABEL_COLOR)

        tag_font = load_font(15, bold=True)
        tag_width = text_width(draw, text.platform_tag, tag_font) + 24
        tag_box = (text_x, top + 96, text_x + tag_width, top + 120)
        draw.rounded_rectangle(tag_box, radius=12, fill=hex_to_rgba(config.accent_color, 0.85))
        draw.text((text_x + 12, top + 99), text.platform_tag, font=tag_font, fill=TEXT_COLOR)

        return top + AVATAR_SIZE + SECTION_GAP

    def _draw_avatar_placeholder(self, draw: ImageDraw.ImageDraw, box, initial: str, accent: str) -> None:
        logger.debug("Drawing placeholder", element="avatar")
        draw.rounded_rectangle(box, radius=28, fill=hex_to_rgba(accent, 0.35), outline=hex_to_rgba(accent, 0.8), width=2)
        font = load_font(56, bold=True)
        center = ((box[0] + box[2]) / 2, (box[1] + box[3]) / 2)
        draw_centered(draw, center, initial, font, TEXT_COLOR)

    def _draw_rank_placeholder(self, draw: ImageDraw.ImageDraw, box, snapshot: StatsSnapshot, accent: str) -> None:
        logger.debug("Drawing placeholder", element="rank_badge")
        inset = 12
        ring = (box[0] + inset, box[1] + inset, box[2] - inset, box[3] - inset)
        draw.ellipse(ring, fill=(30, 41, 59, 200), outline=hex_to_rgba(accent, 0.9), width=4)
        label = f"#{int(snapshot.rank)}" if snapshot.rank is not None else "?"
        font = load_font(22, bold=True)
        center = ((box[0] + box[2]) / 2, (box[1] + box[3]) / 2)
        draw_centered(draw, center, fit_text(draw, label, font, ring[2] - ring[0] - 12), font, TEXT_COLOR)

    def _draw_metric_grid(
        self,
        surface: Image.Image,
        area: ContentArea,
        start_y: float,
        metrics: Sequence[Metric],
        columns: int,
        style: GridStyle,
        accent: str,
    ) -> float:
        """Draw one panel per metric and return the grid's bottom offset."""
        placement = area.grid(len(metrics), columns, style.cell_height, style.gutter, start_y)
        draw = ImageDraw.Draw(surface, "RGBA")
        for metric, rect in zip(metrics, placement.rects):
            self._draw_metric_panel(draw, rect, metric, style, accent)
        return placement.bottom

    def _draw_metric_panel(
        self, draw: ImageDraw.ImageDraw, rect: LayoutRect, metric: Metric, style: GridStyle, accent: str
    ) -> None:
        if metric.highlight:
            draw.rounded_rectangle(rect.box(), radius=14, fill=hex_to_rgba(accent, 0.28),
                                   outline=hex_to_rgba(accent, 0.9), width=2)
        else:
            draw.rounded_rectangle(rect.box(), radius=14, fill=PANEL_BG)
        draw.rectangle((rect.x + 14, rect.y, rect.right - 14, rect.y + 4), fill=hex_to_rgba(accent, 0.45))

        padding = 16
        inner_width = rect.width - 2 * padding
        label_font = load_font(style.label_size)
        draw.text((rect.x + padding, rect.y + 10), fit_text(draw, metric.label, label_font, inner_width / 2),
                  font=label_font, fill=LABEL_COLOR)

        if metric.caption:
            caption_font = load_font(max(11, style.label_size - 3))
            caption = fit_text(draw, metric.caption, caption_font, inner_width / 2)
            draw.text((rect.right - padding - text_width(draw, caption, caption_font), rect.y + 12),
                      caption, font=caption_font, fill=CAPTION_COLOR)

        value_font = load_font(style.highlight_value_size if metric.highlight else style.value_size, bold=True)
        value_y = rect.y + style.label_size + 18
        draw.text((rect.x + padding, value_y), fit_text(draw, metric.value, value_font, inner_width),
                  font=value_font, fill=TEXT_COLOR)

    async def _draw_weapons(
        self,
        surface: Image.Image,
        area: ContentArea,
        start_y: float,
        weapons: Sequence[WeaponRecord],
        config: RenderConfig,
    ) -> float:
        """Draw the top weapons, fetching their images one at a time first."""
        selected = select_top_weapons(weapons, config.weapon_count)
        if not selected:
            return start_y

        images: List[Optional[Image.Image]] = []
        for weapon in selected:
            images.append(await self.asset_loader.load(weapon.preview_url))

        available = area.bottom - start_y
        row_height = WEAPON_ROW.cell_height + WEAPON_ROW.gutter
        cell_height = WEAPON_ROW.cell_height
        if len(selected) * row_height > available:
            cell_height = max(WEAPON_MIN_HEIGHT, int(available / len(selected)) - WEAPON_ROW.gutter)

        placement = grid_placement(
            len(selected), 1, area.width, cell_height, WEAPON_ROW.gutter,
            start_x=area.left, start_y=start_y,
        )
        for index, (weapon, image, rect) in enumerate(zip(selected, images, placement.rects), 1):
            self._draw_weapon_row(surface, rect, index, weapon, image, config.accent_color)
        return placement.bottom

    def _draw_weapon_row(
        self,
        surface: Image.Image,
        rect: LayoutRect,
        index: int,
        weapon: WeaponRecord,
        image: Optional[Image.Image],
        accent: str,
    ) -> None:
        draw = ImageDraw.Draw(surface, "RGBA")
        draw.rounded_rectangle(rect.box(), radius=14, fill=PANEL_BG)
        draw.rectangle((rect.x, rect.y + 10, rect.x + 4, rect.bottom - 10), fill=hex_to_rgba(accent, 0.6))

        image_box = (
            int(rect.x + 16),
            int(rect.y + 6),
            int(rect.x + 16 + rect.height * 2.2),
            int(rect.bottom - 6),
        )
        if image is not None:
            paste_contained(surface, image, image_box)
        else:
            logger.debug("Drawing placeholder", element="weapon", weapon=weapon.name)
            draw.rounded_rectangle(image_box, radius=8, outline=with_alpha(LABEL_COLOR, 0.4), width=1)
            font = load_font(12)
            center = ((image_box[0] + image_box[2]) / 2, (image_box[1] + image_box[3]) / 2)
            draw_centered(draw, center, "no preview", font, LABEL_COLOR)

        text_x = image_box[2] + 20
        tag_font = load_font(13, bold=True)
        tag = (weapon.weapon_type or "").upper()
        tag_width = text_width(draw, tag, tag_font) if tag else 0
        text_limit = rect.right - 16 - text_x - (tag_width + 16 if tag else 0)

        name_font = load_font(WEAPON_ROW.value_size, bold=True)
        name = fit_text(draw, f"#{index}  {weapon.name}", name_font, text_limit)
        draw.text((text_x, rect.y + rect.height * 0.12), name, font=name_font, fill=TEXT_COLOR)

        stats_font = load_font(WEAPON_ROW.label_size)
        stats_line = (
            f"Kills {format_integer(weapon.kills)}  ·  "
            f"KPM {format_decimal(weapon.kills_per_minute, 2)}  ·  "
            f"Accuracy {weapon.accuracy or 'N/A'}"
        )
        draw.text((text_x, rect.y + rect.height * 0.56), fit_text(draw, stats_line, stats_font, text_limit),
                  font=stats_font, fill=CAPTION_COLOR)

        if tag:
            draw.text((rect.right - 16 - tag_width, rect.y + rect.height * 0.15), tag, font=tag_font, fill=LABEL_COLOR)

    def _draw_footer(self, surface: Image.Image, config: RenderConfig) -> None:
        width, height = surface.size
        draw = ImageDraw.Draw(surface, "RGBA")
        font = load_font(15)
        text = f"{FOOTER_SOURCE}  ·  Generated {self.now():%Y-%m-%d %H:%M}"
        draw.text((MARGIN, height - FOOTER_HEIGHT), fit_text(draw, text, font, width - 2 * MARGIN),
                  font=font, fill=FOOTER_COLOR)

    @staticmethod
    def _encode(surface: Image.Image) -> bytes:
        buffer = io.BytesIO()
        surface.save(buffer, format="PNG")
        return buffer.getvalue()
