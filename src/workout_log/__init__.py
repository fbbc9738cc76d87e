"""Workout log — geolocated workouts, their store, and the map interaction controller."""

from workout_log.controller import WorkoutController
from workout_log.exceptions import (
    LocationUnavailable,
    PersistenceParseError,
    PersistenceWriteError,
    ValidationError,
    WorkoutLogError,
)
from workout_log.forms import FormValues
from workout_log.models import ControllerState, Coords, Workout, WorkoutType
from workout_log.store import WorkoutStore

__all__ = [
    "ControllerState",
    "Coords",
    "FormValues",
    "LocationUnavailable",
    "PersistenceParseError",
    "PersistenceWriteError",
    "ValidationError",
    "Workout",
    "WorkoutController",
    "WorkoutLogError",
    "WorkoutStore",
    "WorkoutType",
]
