"""Workout record and its two variants.

A workout is one frozen record with a ``type`` discriminator and a
variant-specific payload. The derived metric (pace for running, speed for
cycling) is computed once by the constructor functions below and stored on
the payload; nothing recomputes it afterwards.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, NamedTuple, Union

from workout_log.exceptions import ValidationError
from workout_log.ids import default_generator
from workout_log.models.enums import MONTHS, WorkoutType

INVALID_INPUT_MESSAGE = "Inputs have to be positive numbers!"


class Coords(NamedTuple):
    """A (latitude, longitude) pair in decimal degrees."""

    lat: float
    lng: float


@dataclass(frozen=True)
class RunningDetails:
    cadence: float  # steps per minute
    pace: float  # min/km


@dataclass(frozen=True)
class CyclingDetails:
    elevation_gain: float  # metres
    speed: float  # km/h


WorkoutDetails = Union[RunningDetails, CyclingDetails]


@dataclass(frozen=True)
class Workout:
    """A single logged exercise session.

    Build instances with :func:`create_running` or :func:`create_cycling` so
    inputs are validated and the derived metric is filled in.
    """

    id: int
    type: WorkoutType
    created_at: datetime
    coords: Coords
    distance: float  # km
    duration: float  # min
    details: WorkoutDetails

    @property
    def month(self) -> str:
        return MONTHS[self.created_at.month - 1]

    @property
    def day(self) -> int:
        return self.created_at.day

    @property
    def date_label(self) -> str:
        """Creation day label, e.g. ``"April 14"``."""
        return f"{self.month} {self.day}"

    @property
    def metric(self) -> float:
        """The variant's derived metric: pace (min/km) or speed (km/h)."""
        if isinstance(self.details, RunningDetails):
            return self.details.pace
        return self.details.speed

    @property
    def secondary(self) -> float:
        """The variant's extra input: cadence or elevation gain."""
        if isinstance(self.details, RunningDetails):
            return self.details.cadence
        return self.details.elevation_gain

    @property
    def pace(self) -> float | None:
        return self.details.pace if isinstance(self.details, RunningDetails) else None

    @property
    def speed(self) -> float | None:
        return self.details.speed if isinstance(self.details, CyclingDetails) else None


# ---------------------------------------------------------------------------
# Derived metrics
# ---------------------------------------------------------------------------


def running_pace(distance: float, duration: float) -> float:
    """Minutes per kilometre."""
    return duration / distance


def cycling_speed(distance: float, duration: float) -> float:
    """Kilometres per hour; *duration* is in minutes."""
    return distance * 60 / duration


DERIVED_METRIC: dict[WorkoutType, Callable[[float, float], float]] = {
    WorkoutType.RUNNING: running_pace,
    WorkoutType.CYCLING: cycling_speed,
}


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _check_inputs(
    finite: dict[str, float], positive: tuple[str, ...]
) -> None:
    """Raise ValidationError naming every field that fails.

    All fields in *finite* must be finite numbers; those named in *positive*
    must additionally be > 0.
    """
    bad: list[str] = []
    for name, value in finite.items():
        if not _is_number(value) or not math.isfinite(value):
            bad.append(name)
        elif name in positive and value <= 0:
            bad.append(name)
    if bad:
        raise ValidationError(INVALID_INPUT_MESSAGE, fields=tuple(bad))


def validate_running_inputs(distance: float, duration: float, cadence: float) -> None:
    _check_inputs(
        {"distance": distance, "duration": duration, "cadence": cadence},
        positive=("distance", "duration", "cadence"),
    )


def validate_cycling_inputs(
    distance: float,
    duration: float,
    elevation_gain: float,
    strict_elevation: bool = False,
) -> None:
    """Elevation only has to be finite unless *strict_elevation* is set.

    A ride can end lower than it started, so zero or negative gain is
    accepted by default.
    """
    positive: tuple[str, ...] = ("distance", "duration")
    if strict_elevation:
        positive += ("elevation_gain",)
    _check_inputs(
        {"distance": distance, "duration": duration, "elevation_gain": elevation_gain},
        positive=positive,
    )


def _derived_metric(workout_type: WorkoutType, distance: float, duration: float) -> float:
    """Compute the derived metric, rejecting ratios that overflow to inf."""
    value = DERIVED_METRIC[workout_type](distance, duration)
    if not math.isfinite(value):
        raise ValidationError(INVALID_INPUT_MESSAGE, fields=("distance", "duration"))
    return value


def _check_coords(coords: Coords | tuple[float, float]) -> Coords:
    try:
        lat, lng = coords
    except (TypeError, ValueError) as exc:
        raise ValidationError("Coordinates must be a (lat, lng) pair", ("coords",)) from exc
    if not (_is_number(lat) and _is_number(lng)) or not (
        math.isfinite(lat) and math.isfinite(lng)
    ):
        raise ValidationError("Coordinates must be finite numbers", ("coords",))
    return Coords(float(lat), float(lng))


# ---------------------------------------------------------------------------
# Constructors
# ---------------------------------------------------------------------------


def create_running(
    coords: Coords | tuple[float, float],
    distance: float,
    duration: float,
    cadence: float,
    *,
    workout_id: int | None = None,
    created_at: datetime | None = None,
) -> Workout:
    """Validate inputs and build a running workout with its pace."""
    validate_running_inputs(distance, duration, cadence)
    point = _check_coords(coords)
    distance, duration = float(distance), float(duration)
    pace = _derived_metric(WorkoutType.RUNNING, distance, duration)
    return Workout(
        id=default_generator.next_id() if workout_id is None else workout_id,
        type=WorkoutType.RUNNING,
        created_at=created_at or datetime.now(),
        coords=point,
        distance=distance,
        duration=duration,
        details=RunningDetails(
            cadence=float(cadence),
            pace=pace,
        ),
    )


def create_cycling(
    coords: Coords | tuple[float, float],
    distance: float,
    duration: float,
    elevation_gain: float,
    *,
    workout_id: int | None = None,
    created_at: datetime | None = None,
    strict_elevation: bool = False,
) -> Workout:
    """Validate inputs and build a cycling workout with its speed."""
    validate_cycling_inputs(distance, duration, elevation_gain, strict_elevation)
    point = _check_coords(coords)
    distance, duration = float(distance), float(duration)
    speed = _derived_metric(WorkoutType.CYCLING, distance, duration)
    return Workout(
        id=default_generator.next_id() if workout_id is None else workout_id,
        type=WorkoutType.CYCLING,
        created_at=created_at or datetime.now(),
        coords=point,
        distance=distance,
        duration=duration,
        details=CyclingDetails(
            elevation_gain=float(elevation_gain),
            speed=speed,
        ),
    )
