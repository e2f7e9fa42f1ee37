"""Core entities for the bf6-stats card renderer."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from .formatting import coerce_optional_number, coerce_optional_text


@dataclass
class WeaponRecord:
    """One weapon entry from the stats API."""

    name: str
    kills: Optional[float] = None
    kills_per_minute: Optional[float] = None
    accuracy: Optional[str] = None
    image_url: Optional[str] = None
    alt_image_url: Optional[str] = None
    weapon_type: Optional[str] = None

    @property
    def preview_url(self) -> Optional[str]:
        """Image to show for this weapon, falling back to the alternate art."""
        return self.image_url or self.alt_image_url

    @classmethod
    def from_api(cls, data: Any) -> "WeaponRecord":
        """Build a weapon from a raw API mapping."""
        if not isinstance(data, Mapping):
            data = {}
        return cls(
            name=coerce_optional_text(data.get("weaponName")) or "Unknown",
            kills=coerce_optional_number(data.get("kills")),
            kills_per_minute=coerce_optional_number(data.get("killsPerMinute")),
            accuracy=coerce_optional_text(data.get("accuracy")),
            image_url=coerce_optional_text(data.get("image")),
            alt_image_url=coerce_optional_text(data.get("altImage")),
            weapon_type=coerce_optional_text(data.get("type")),
        )


# Snapshot field -> gametools response key
_NUMERIC_FIELDS: Dict[str, str] = {
    "kills": "kills",
    "deaths": "deaths",
    "score_per_minute": "scorePerMinute",
    "kill_death": "killDeath",
    "kills_per_minute": "killsPerMinute",
    "wins": "wins",
    "losses": "loses",
    "matches_played": "matchesPlayed",
    "damage": "damage",
    "shots_hit": "shotsHit",
    "shots_fired": "shotsFired",
    "headshots": "headShots",
    "melee_kills": "meleeKills",
    "highest_kill_streak": "highestKillStreak",
    "distance_traveled": "distanceTraveled",
    "seconds_played": "secondsPlayed",
    "rank": "rank",
}

_TEXT_FIELDS: Dict[str, str] = {
    "user_name": "userName",
    "persona_name": "personaName",
    "rank_name": "rankName",
    "rank_image_url": "rankImg",
    "avatar_url": "avatar",
    "best_class": "bestClass",
    "win_percent": "winPercent",
    "accuracy": "accuracy",
    "headshot_percent": "headshots",
}


@dataclass
class StatsSnapshot:
    """Point-in-time stats for one player.

    Every field is optional; the API omits whatever it does not know.
    ``from_api`` is the only place the raw response mapping is read.
    """

    kills: Optional[float] = None
    deaths: Optional[float] = None
    score_per_minute: Optional[float] = None
    kill_death: Optional[float] = None
    kills_per_minute: Optional[float] = None
    wins: Optional[float] = None
    losses: Optional[float] = None
    matches_played: Optional[float] = None
    damage: Optional[float] = None
    shots_hit: Optional[float] = None
    shots_fired: Optional[float] = None
    headshots: Optional[float] = None
    melee_kills: Optional[float] = None
    highest_kill_streak: Optional[float] = None
    distance_traveled: Optional[float] = None
    seconds_played: Optional[float] = None
    rank: Optional[float] = None

    user_name: Optional[str] = None
    persona_name: Optional[str] = None
    rank_name: Optional[str] = None
    rank_image_url: Optional[str] = None
    avatar_url: Optional[str] = None
    best_class: Optional[str] = None
    win_percent: Optional[str] = None
    accuracy: Optional[str] = None
    headshot_percent: Optional[str] = None

    weapons: List[WeaponRecord] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: Any) -> "StatsSnapshot":
        """Build a snapshot from a parsed stats API response."""
        if not isinstance(data, Mapping):
            return cls()

        values: Dict[str, Any] = {}
        for attr, key in _NUMERIC_FIELDS.items():
            values[attr] = coerce_optional_number(data.get(key))
        for attr, key in _TEXT_FIELDS.items():
            values[attr] = coerce_optional_text(data.get(key))

        weapons = data.get("weapons")
        if isinstance(weapons, list):
            values["weapons"] = [WeaponRecord.from_api(item) for item in weapons]

        return cls(**values)

    def display_name(self, fallback: str) -> str:
        """Name shown in the card title."""
        return self.user_name or self.persona_name or fallback

    def rank_label(self) -> str:
        """Rank name, else ``#<rank>``, else ``Unknown``."""
        if self.rank_name:
            return self.rank_name
        if self.rank is not None:
            return f"#{int(self.rank)}"
        return "Unknown"


@dataclass(frozen=True)
class Metric:
    """A single pre-formatted stat shown in a grid panel."""

    label: str
    value: str
    caption: Optional[str] = None
    highlight: bool = False


@dataclass(frozen=True)
class RenderConfig:
    """Caller-supplied rendering options.

    Values are not trusted: the compositor clamps them before allocating
    anything.
    """

    accent_color: str = "#2563eb"
    width: int = 940
    height: int = 860
    primary_columns: int = 3
    secondary_columns: int = 3
    weapon_count: int = 3
    platform: str = "pc"
    player_name: str = ""
