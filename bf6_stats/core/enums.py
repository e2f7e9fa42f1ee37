"""Core enums for the bf6-stats card renderer."""

from enum import Enum
from typing import Dict, Optional, Union


class Platform(Enum):
    """Platforms understood by the gametools stats API."""

    PC = "pc"
    PLAYSTATION = "ps"
    XBOX = "xbox"

    @property
    def label(self) -> str:
        """Short tag shown on the card."""
        return self.value.upper()

    @classmethod
    def from_alias(
        cls, alias: Optional[str], default: Union["Platform", str] = "pc"
    ) -> Optional["Platform"]:
        """Resolve a user-typed platform name.

        An empty alias resolves to ``default``. Unknown aliases return None.
        """
        if alias is None or not alias.strip():
            if default is None or isinstance(default, cls):
                return default
            return _ALIASES.get(default.strip().lower())
        return _ALIASES.get(alias.strip().lower())


_ALIASES: Dict[str, Platform] = {
    "pc": Platform.PC,
    "steam": Platform.PC,
    "origin": Platform.PC,
    "playstation": Platform.PLAYSTATION,
    "ps": Platform.PLAYSTATION,
    "psn": Platform.PLAYSTATION,
    "ps4": Platform.PLAYSTATION,
    "ps5": Platform.PLAYSTATION,
    "xbox": Platform.XBOX,
    "xbl": Platform.XBOX,
    "xb": Platform.XBOX,
    "xboxone": Platform.XBOX,
    "xboxseries": Platform.XBOX,
}
