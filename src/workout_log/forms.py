"""Form input parsing — raw text fields in, validated workout out."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime

from workout_log.exceptions import ValidationError
from workout_log.models.enums import WorkoutType
from workout_log.models.workout import Coords, Workout, create_cycling, create_running


@dataclass(frozen=True)
class FormValues:
    """Raw field values as typed into the workout form."""

    type: str = WorkoutType.RUNNING.value
    distance: str = ""
    duration: str = ""
    cadence: str = ""
    elevation: str = ""


def parse_form_number(text: str | None) -> float:
    """Coerce a form field to a number the way a browser input does.

    Blank -> 0.0, garbage -> nan. Either fails the positivity check later,
    so bad input never raises here.
    """
    if text is None:
        return 0.0
    stripped = str(text).strip()
    if not stripped:
        return 0.0
    try:
        return float(stripped)
    except ValueError:
        return math.nan


def parse_workout_type(raw: str | WorkoutType) -> WorkoutType:
    if isinstance(raw, WorkoutType):
        return raw
    try:
        return WorkoutType(str(raw).strip().lower())
    except ValueError as exc:
        raise ValidationError(f"Unknown workout type: {raw!r}", ("type",)) from exc


def build_workout(
    values: FormValues,
    coords: Coords,
    *,
    workout_id: int | None = None,
    created_at: datetime | None = None,
    strict_elevation: bool = False,
) -> Workout:
    """Parse *values* for the selected type and construct the workout.

    Only the secondary field belonging to the selected type is read.
    Raises ValidationError without side effects when any input is invalid.
    """
    workout_type = parse_workout_type(values.type)
    distance = parse_form_number(values.distance)
    duration = parse_form_number(values.duration)

    if workout_type is WorkoutType.RUNNING:
        return create_running(
            coords,
            distance,
            duration,
            parse_form_number(values.cadence),
            workout_id=workout_id,
            created_at=created_at,
        )
    return create_cycling(
        coords,
        distance,
        duration,
        parse_form_number(values.elevation),
        workout_id=workout_id,
        created_at=created_at,
        strict_elevation=strict_elevation,
    )
