"""Display formatting for raw stats values.

Every function here is total: missing, non-numeric and non-finite input
produces a defined zero/placeholder string instead of raising.
"""

import math
from typing import Any, Optional

NumberLike = Any


def coerce_number(value: NumberLike, default: float = 0.0) -> float:
    """Coerce a raw API value to a finite float, or return ``default``."""
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, str):
        value = value.strip().replace(",", "")
        if not value:
            return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(number):
        return default
    return number


def coerce_optional_number(value: NumberLike) -> Optional[float]:
    """Like :func:`coerce_number` but keeps absence distinguishable."""
    number = coerce_number(value, default=math.nan)
    return None if math.isnan(number) else number


def coerce_optional_text(value: Any) -> Optional[str]:
    """Return a stripped string, or None for non-strings and blank strings."""
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def format_integer(value: NumberLike) -> str:
    """Comma-grouped rounded integer."""
    return f"{round(coerce_number(value)):,}"


def format_decimal(value: NumberLike, digits: int = 2) -> str:
    """Fixed-point number with ``digits`` fractional digits."""
    number = coerce_optional_number(value)
    if number is None:
        return "0"
    return f"{number:.{max(0, digits)}f}"


def format_abbreviated(value: NumberLike) -> str:
    """Abbreviate large magnitudes: 999 -> "999", 1500 -> "1.5K", 2e6 -> "2.0M".

    Bands are chosen on the unrounded magnitude, so 999999 renders as
    "1000.0K" rather than jumping to the next band.
    """
    number = coerce_number(value)
    magnitude = abs(number)
    if magnitude == 0:
        return "0"
    if magnitude < 1_000:
        return str(round(number))
    if magnitude < 1_000_000:
        return f"{number / 1_000:.1f}K"
    return f"{number / 1_000_000:.1f}M"


def format_ratio_percent(part: NumberLike, total: NumberLike) -> str:
    """``part / total`` as a one-decimal percentage; "0%" when total <= 0."""
    denominator = coerce_number(total)
    if denominator <= 0:
        return "0%"
    return f"{coerce_number(part) / denominator * 100:.1f}%"


def format_distance(meters: NumberLike) -> str:
    """Distance in metres, kilometres or thousands of kilometres."""
    distance = coerce_number(meters)
    if distance <= 0:
        return "0m"
    if distance < 1_000:
        return f"{round(distance)}m"
    if distance < 1_000_000:
        return f"{distance / 1_000:.1f}KM"
    return f"{distance / 1_000_000:.1f}k KM"


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


def format_playtime_coarse(seconds: NumberLike) -> str:
    """Coarse playtime for the header: "5 hours" or "3 days 4 hours"."""
    total = coerce_number(seconds)
    if total <= 0:
        return _plural(0, "hour")

    hours = total / 3600
    if hours < 24:
        return _plural(round(hours), "hour")

    days = int(hours // 24)
    remainder = int(hours % 24)
    text = _plural(days, "day")
    if remainder:
        text += " " + _plural(remainder, "hour")
    return text


def format_duration_compact(seconds: NumberLike) -> str:
    """Compact duration such as "2d 3h 15m".

    Leading zero-valued units are dropped; at least one unit is always
    emitted, so anything under a minute renders as "0m".
    """
    total = int(coerce_number(seconds))
    if total <= 0:
        return "0m"

    units = [
        (total // 86400, "d"),
        (total % 86400 // 3600, "h"),
        (total % 3600 // 60, "m"),
    ]
    while len(units) > 1 and units[0][0] == 0:
        units.pop(0)
    return " ".join(f"{amount}{suffix}" for amount, suffix in units)
