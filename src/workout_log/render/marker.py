"""Map marker specs for workouts.

All functions are pure; the map surface decides how to draw the result.
"""

from __future__ import annotations

from dataclasses import dataclass

from workout_log.models.enums import WorkoutType
from workout_log.models.workout import Coords, Workout

WORKOUT_ICONS: dict[WorkoutType, str] = {
    WorkoutType.RUNNING: "🏃‍♂️",
    WorkoutType.CYCLING: "🚴‍♀️",
}


@dataclass(frozen=True)
class PopupOptions:
    """Leaflet-style popup options. Popups stay open until replaced."""

    class_name: str
    close_button: bool = False
    auto_close: bool = False
    close_on_escape_key: bool = False
    close_on_click: bool = False
    max_width: int = 250
    min_width: int = 100


@dataclass(frozen=True)
class MarkerSpec:
    coords: Coords
    icon: str
    label: str
    popup: PopupOptions

    @property
    def content(self) -> str:
        return f"{self.icon} {self.label}"


def workout_title(workout: Workout) -> str:
    """e.g. ``"Running on April 14"``."""
    return f"{workout.type.label} on {workout.date_label}"


def build_marker_spec(workout: Workout) -> MarkerSpec:
    return MarkerSpec(
        coords=workout.coords,
        icon=WORKOUT_ICONS[workout.type],
        label=workout_title(workout),
        popup=PopupOptions(class_name=f"{workout.type.value}-popup"),
    )
