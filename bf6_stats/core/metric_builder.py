"""Build the metric lists shown in the card grids.

Both lists always have six entries in a fixed order, and the first entry of
each is the highlighted lead metric. Precomputed display strings from the API
win over values derived locally.
"""

from typing import List, Optional, Sequence

from .entities import Metric, StatsSnapshot, WeaponRecord
from .formatting import (
    coerce_number,
    format_abbreviated,
    format_decimal,
    format_distance,
    format_duration_compact,
    format_integer,
    format_ratio_percent,
)


def _kill_death(snapshot: StatsSnapshot) -> float:
    if snapshot.kill_death is not None:
        return snapshot.kill_death
    kills = coerce_number(snapshot.kills)
    deaths = coerce_number(snapshot.deaths)
    return kills / deaths if deaths > 0 else kills


def _kills_per_minute(snapshot: StatsSnapshot) -> float:
    if snapshot.kills_per_minute is not None:
        return snapshot.kills_per_minute
    minutes = coerce_number(snapshot.seconds_played) / 60
    return coerce_number(snapshot.kills) / minutes if minutes > 0 else 0.0


def _matches_played(snapshot: StatsSnapshot) -> float:
    if snapshot.matches_played is not None:
        return snapshot.matches_played
    return coerce_number(snapshot.wins) + coerce_number(snapshot.losses)


def _win_rate(snapshot: StatsSnapshot) -> str:
    if snapshot.win_percent:
        return snapshot.win_percent
    wins = coerce_number(snapshot.wins)
    return format_ratio_percent(wins, wins + coerce_number(snapshot.losses))


def _damage_caption(snapshot: StatsSnapshot) -> Optional[str]:
    matches = _matches_played(snapshot)
    if matches <= 0 or snapshot.damage is None:
        return None
    return f"{format_abbreviated(snapshot.damage / matches)} per match"


def build_primary_metrics(snapshot: StatsSnapshot) -> List[Metric]:
    """Score/combat overview: SPM, K/D, KPM, win rate, matches, damage."""
    return [
        Metric("SPM", format_decimal(snapshot.score_per_minute, 1), highlight=True),
        Metric(
            "K/D",
            format_decimal(_kill_death(snapshot), 2),
            caption=f"{format_integer(snapshot.kills)} K / {format_integer(snapshot.deaths)} D",
        ),
        Metric("KPM", format_decimal(_kills_per_minute(snapshot), 2)),
        Metric(
            "Win Rate",
            _win_rate(snapshot),
            caption=f"{format_integer(snapshot.wins)} W / {format_integer(snapshot.losses)} L",
        ),
        Metric("Matches", format_integer(_matches_played(snapshot))),
        Metric("Damage", format_abbreviated(snapshot.damage), caption=_damage_caption(snapshot)),
    ]


def build_secondary_metrics(snapshot: StatsSnapshot) -> List[Metric]:
    """Playstyle details: best class, accuracy, headshots, melee, distance, playtime."""
    accuracy = snapshot.accuracy or format_ratio_percent(snapshot.shots_hit, snapshot.shots_fired)
    headshots = snapshot.headshot_percent or format_ratio_percent(snapshot.headshots, snapshot.kills)

    return [
        Metric("Best Class", snapshot.best_class or "N/A", highlight=True),
        Metric("Accuracy", accuracy),
        Metric("Headshots", headshots),
        Metric(
            "Melee Kills",
            format_integer(snapshot.melee_kills),
            caption=f"Best streak {format_integer(snapshot.highest_kill_streak)}",
        ),
        Metric("Distance", format_distance(snapshot.distance_traveled)),
        Metric("Playtime", format_duration_compact(snapshot.seconds_played)),
    ]


def select_top_weapons(weapons: Sequence[WeaponRecord], count: int) -> List[WeaponRecord]:
    """Pick the ``count`` weapons with the most kills.

    The sort is stable, so weapons with equal kills keep their API order.
    Missing kill counts sort as zero.
    """
    if count <= 0 or not weapons:
        return []
    ranked = sorted(weapons, key=lambda weapon: coerce_number(weapon.kills), reverse=True)
    return ranked[:count]
