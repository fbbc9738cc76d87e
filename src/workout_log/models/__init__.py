"""Data models for the workout log."""

from workout_log.models.enums import MONTHS, ControllerState, WorkoutType
from workout_log.models.workout import (
    DERIVED_METRIC,
    Coords,
    CyclingDetails,
    RunningDetails,
    Workout,
    create_cycling,
    create_running,
    cycling_speed,
    running_pace,
    validate_cycling_inputs,
    validate_running_inputs,
)

__all__ = [
    "DERIVED_METRIC",
    "MONTHS",
    "ControllerState",
    "Coords",
    "CyclingDetails",
    "RunningDetails",
    "Workout",
    "WorkoutType",
    "create_cycling",
    "create_running",
    "cycling_speed",
    "running_pace",
    "validate_cycling_inputs",
    "validate_running_inputs",
]
