"""Enumerations shared by the workout log."""

from enum import Enum


class WorkoutType(Enum):
    """Workout variant discriminator.

    Values are the lowercase names used in persisted records and form input.
    """

    RUNNING = "running"
    CYCLING = "cycling"

    @property
    def label(self) -> str:
        """Capitalised display name, e.g. ``"Running"``."""
        return self.value.capitalize()


class ControllerState(Enum):
    """Interaction controller states.

    IDLE and FORM_OPEN are the two sub-states once the map is ready.
    """

    AWAITING_LOCATION = "awaiting_location"
    LOCATION_UNAVAILABLE = "location_unavailable"
    IDLE = "idle"
    FORM_OPEN = "form_open"

    @property
    def map_ready(self) -> bool:
        return self in (ControllerState.IDLE, ControllerState.FORM_OPEN)


# English month names for date labels; independent of the process locale.
MONTHS: tuple[str, ...] = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
