"""JSON serialization for the persisted workout sequence.

Each workout becomes a flat record carrying its ``type`` discriminator and
raw inputs. The derived metric is written too, but only as a cache: on
decode it is recomputed from distance and duration and a stored value that
disagrees is ignored.
"""

from __future__ import annotations

import json
import logging
import math
from datetime import datetime
from typing import Any, Iterable

from workout_log.exceptions import PersistenceParseError, ValidationError
from workout_log.models.enums import MONTHS, WorkoutType
from workout_log.models.workout import (
    Coords,
    CyclingDetails,
    RunningDetails,
    Workout,
    create_cycling,
    create_running,
)

logger = logging.getLogger(__name__)

# Alternate spellings accepted when decoding; the camelCase forms come from
# records saved by the browser version of the app.
_ELEVATION_KEYS = ("elevation_gain", "elevationGain")


def to_record(workout: Workout) -> dict[str, Any]:
    """Convert a Workout to a JSON-compatible dict."""
    record: dict[str, Any] = {
        "id": workout.id,
        "type": workout.type.value,
        "created_at": workout.created_at.isoformat(),
        "coords": [workout.coords.lat, workout.coords.lng],
        "distance": workout.distance,
        "duration": workout.duration,
    }
    if isinstance(workout.details, RunningDetails):
        record["cadence"] = workout.details.cadence
        record["pace"] = workout.details.pace
    elif isinstance(workout.details, CyclingDetails):
        record["elevation_gain"] = workout.details.elevation_gain
        record["speed"] = workout.details.speed
    return record


def from_record(record: Any, strict_elevation: bool = False) -> Workout:
    """Rebuild a live Workout from a decoded record.

    Raises PersistenceParseError when the record is malformed or its inputs
    fail validation.
    """
    if not isinstance(record, dict):
        raise PersistenceParseError(f"Workout record is not an object: {record!r}")
    try:
        workout_type = WorkoutType(record["type"])
        workout_id = int(record["id"])
        created_at = _created_at(record, workout_id)
        lat, lng = record["coords"]
        coords = Coords(float(lat), float(lng))
        distance = float(record["distance"])
        duration = float(record["duration"])

        if workout_type is WorkoutType.RUNNING:
            workout = create_running(
                coords,
                distance,
                duration,
                float(record["cadence"]),
                workout_id=workout_id,
                created_at=created_at,
            )
        else:
            elevation = next(
                (record[k] for k in _ELEVATION_KEYS if k in record), None
            )
            if elevation is None:
                raise KeyError("elevation_gain")
            workout = create_cycling(
                coords,
                distance,
                duration,
                float(elevation),
                workout_id=workout_id,
                created_at=created_at,
                strict_elevation=strict_elevation,
            )
    except (KeyError, TypeError, ValueError, OverflowError, ValidationError) as exc:
        raise PersistenceParseError(f"Malformed workout record: {exc}") from exc

    _warn_on_stale_metric(record, workout)
    return workout


def dumps_workouts(workouts: Iterable[Workout]) -> str:
    """Serialize an ordered workout sequence to one JSON string."""
    return json.dumps([to_record(w) for w in workouts])


def loads_workouts(blob: str | None, strict_elevation: bool = False) -> list[Workout]:
    """Decode a blob written by :func:`dumps_workouts`.

    Raises PersistenceParseError when the blob is absent, not JSON, or not a
    list. Individual records that fail to decode are skipped.
    """
    if blob is None:
        raise PersistenceParseError("No persisted workouts")
    try:
        data = json.loads(blob)
    except (json.JSONDecodeError, TypeError, RecursionError) as exc:
        raise PersistenceParseError(f"Persisted workouts are not valid JSON: {exc}") from exc
    if not isinstance(data, list):
        raise PersistenceParseError("Persisted workouts must be a JSON list")

    workouts: list[Workout] = []
    for index, record in enumerate(data):
        try:
            workouts.append(from_record(record, strict_elevation=strict_elevation))
        except PersistenceParseError as exc:
            logger.warning("Skipping persisted workout #%d: %s", index, exc)
    return workouts


def _warn_on_stale_metric(record: dict, workout: Workout) -> None:
    key = "pace" if workout.type is WorkoutType.RUNNING else "speed"
    stored = record.get(key)
    if stored is None:
        return
    try:
        matches = math.isclose(float(stored), workout.metric, rel_tol=1e-9)
    except (TypeError, ValueError, OverflowError):
        matches = False
    if not matches:
        logger.debug(
            "Ignoring stored %s=%r for workout %d, recomputed %.4f",
            key,
            stored,
            workout.id,
            workout.metric,
        )


def _created_at(record: dict, workout_id: int) -> datetime:
    """Creation time of a record.

    Records from the browser app carry only ``month`` (English name) and
    ``day``; their id is the creation time in epoch milliseconds, which
    supplies the year.
    """
    if "created_at" in record:
        return datetime.fromisoformat(record["created_at"])
    month = MONTHS.index(record["month"]) + 1
    day = int(record["day"])
    try:
        year = datetime.fromtimestamp(workout_id / 1000).year
    except (OverflowError, OSError, ValueError):
        year = datetime.now().year
    return datetime(year, month, day)
