"""Error types surfaced to callers of the card renderer.

Each error carries a short message that is safe to show to the end user
verbatim; internal detail stays in the logs.
"""


class StatsCardError(Exception):
    """Base exception for everything the service reports to users."""

    default_message = "Lookup failed, please try again later."

    def __init__(self, message: str = ""):
        super().__init__(message or self.default_message)

    @property
    def user_message(self) -> str:
        """Message to display to the end user."""
        return str(self)


class InvalidInputError(StatsCardError):
    """Missing player identifier or unknown platform alias."""

    default_message = "Invalid request."


class StatsAPIError(StatsCardError):
    """The stats API reported an error or could not be reached."""

    default_message = "Error while requesting stats data."


class PlayerNotFoundError(StatsAPIError):
    """The stats API has no results for the player."""

    default_message = "No stats found for this player."


class RenderUnavailableError(StatsCardError):
    """The drawing surface could not be allocated."""

    default_message = "Stats card rendering is unavailable."


class RenderFailedError(StatsCardError):
    """Drawing or encoding the card failed."""

    default_message = "Failed to render the stats card."
