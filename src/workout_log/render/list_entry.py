"""Workout list entries — structured entries plus their HTML markup."""

from __future__ import annotations

from dataclasses import dataclass
from html import escape

from workout_log.models.enums import WorkoutType
from workout_log.models.workout import Workout
from workout_log.render.marker import WORKOUT_ICONS, workout_title

# Per-type (icon, unit) for the derived metric and the secondary input.
_METRIC: dict[WorkoutType, tuple[str, str]] = {
    WorkoutType.RUNNING: ("⚡️", "min/km"),
    WorkoutType.CYCLING: ("⚡️", "km/h"),
}
_SECONDARY: dict[WorkoutType, tuple[str, str]] = {
    WorkoutType.RUNNING: ("🦶🏼", "spm"),
    WorkoutType.CYCLING: ("⛰", "m"),
}

ENTRY_ID_ATTRIBUTE = "data-id"


@dataclass(frozen=True)
class Detail:
    icon: str
    value: float
    unit: str


@dataclass(frozen=True)
class ListEntrySpec:
    workout_id: int
    workout_type: WorkoutType
    title: str
    date_label: str
    distance: Detail
    duration: Detail
    metric: Detail
    secondary: Detail

    @property
    def details(self) -> tuple[Detail, ...]:
        return (self.distance, self.duration, self.metric, self.secondary)


def build_list_entry(workout: Workout) -> ListEntrySpec:
    metric_icon, metric_unit = _METRIC[workout.type]
    secondary_icon, secondary_unit = _SECONDARY[workout.type]
    return ListEntrySpec(
        workout_id=workout.id,
        workout_type=workout.type,
        title=workout_title(workout),
        date_label=workout.date_label,
        distance=Detail(WORKOUT_ICONS[workout.type], workout.distance, "km"),
        duration=Detail("⏱", workout.duration, "min"),
        metric=Detail(metric_icon, workout.metric, metric_unit),
        secondary=Detail(secondary_icon, workout.secondary, secondary_unit),
    )


def format_value(value: float, decimals: int = 1) -> str:
    """Whole numbers print bare (``"5"``); others get *decimals* places."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.{decimals}f}"


def render_list_entry_html(entry: ListEntrySpec) -> str:
    """Markup for one list item; the ``data-id`` attribute identifies it."""
    rows = "".join(
        '<div class="workout__details">'
        f'<span class="workout__icon">{escape(d.icon)}</span>'
        f'<span class="workout__value">{escape(format_value(d.value))}</span>'
        f'<span class="workout__unit">{escape(d.unit)}</span>'
        "</div>"
        for d in entry.details
    )
    return (
        f'<li class="workout workout--{entry.workout_type.value}" '
        f'{ENTRY_ID_ATTRIBUTE}="{entry.workout_id}">'
        f'<h2 class="workout__title">{escape(entry.title)}</h2>'
        f"{rows}</li>"
    )


def parse_entry_id(raw: object) -> int | None:
    """Resolve a clicked entry's identifier attribute to a workout id."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    try:
        return int(str(raw).strip())
    except ValueError:
        return None
