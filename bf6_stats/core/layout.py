"""Grid geometry for the card sections.

Nothing here knows what is drawn inside a cell; it only produces rectangles
and the y-offsets used to stack one section below the next.
"""

import math
from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class LayoutRect:
    """Axis-aligned rectangle in surface pixels."""

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def box(self) -> tuple:
        """Pillow-style ``(x0, y0, x1, y1)`` box."""
        return (self.x, self.y, self.right, self.bottom)

    def overlaps(self, other: "LayoutRect") -> bool:
        """True when the interiors of the two rectangles intersect."""
        return (
            self.x < other.right
            and other.x < self.right
            and self.y < other.bottom
            and other.y < self.bottom
        )


@dataclass(frozen=True)
class GridPlacement:
    """Result of placing items on a grid."""

    rects: List[LayoutRect] = field(default_factory=list)
    bottom: float = 0


def grid_placement(
    item_count: int,
    columns: int,
    cell_width: float,
    cell_height: float,
    gutter: float = 0,
    start_x: float = 0,
    start_y: float = 0,
) -> GridPlacement:
    """Place ``item_count`` cells row-major on a grid.

    Item ``i`` lands in column ``i % columns`` and row ``i // columns``. Each
    row is ``cell_height + gutter`` tall, so the returned ``bottom`` is
    ``start_y + ceil(item_count / columns) * (cell_height + gutter)``.

    Raises:
        ValueError: If ``columns`` is below 1 or ``item_count`` is negative.
    """
    if columns < 1:
        raise ValueError(f"columns must be >= 1, got {columns}")
    if item_count < 0:
        raise ValueError(f"item_count must be >= 0, got {item_count}")

    column_step = cell_width + gutter
    row_height = cell_height + gutter
    rects = [
        LayoutRect(
            x=start_x + (index % columns) * column_step,
            y=start_y + (index // columns) * row_height,
            width=cell_width,
            height=cell_height,
        )
        for index in range(item_count)
    ]
    rows = math.ceil(item_count / columns)
    return GridPlacement(rects=rects, bottom=start_y + rows * row_height)


@dataclass(frozen=True)
class ContentArea:
    """The region inside the card margins that sections are laid out in."""

    left: float
    top: float
    width: float
    height: float

    @property
    def bottom(self) -> float:
        return self.top + self.height

    def column_width(self, columns: int, gutter: float = 0) -> float:
        """Width of one column when ``columns`` share the area with gutters between."""
        columns = max(1, columns)
        return max(0.0, (self.width - gutter * (columns - 1)) / columns)

    def grid(
        self, item_count: int, columns: int, cell_height: float, gutter: float, start_y: float
    ) -> GridPlacement:
        """Lay out a full-width grid starting at ``start_y``."""
        return grid_placement(
            item_count,
            columns,
            self.column_width(columns, gutter),
            cell_height,
            gutter,
            start_x=self.left,
            start_y=start_y,
        )


class SectionStack:
    """Vertical cursor for stacking card sections with a fixed gap."""

    def __init__(self, start_y: float, gap: float):
        self.y = start_y
        self.gap = gap

    def place(self, bottom: float) -> float:
        """Record where a section ended and return where the next one starts."""
        self.y = bottom + self.gap
        return self.y
