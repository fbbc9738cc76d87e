"""Exception hierarchy for the workout log."""

from __future__ import annotations


class WorkoutLogError(Exception):
    """Base exception for all workout_log errors."""


class LocationUnavailable(WorkoutLogError):
    """The current position could not be determined (unsupported or denied)."""

    def __init__(self, reason: str = "Could not get your position") -> None:
        super().__init__(reason)
        self.reason = reason


class ValidationError(WorkoutLogError):
    """One or more workout inputs are non-finite or out of range."""

    def __init__(self, message: str, fields: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.fields = fields


class PersistenceParseError(WorkoutLogError):
    """The persisted workout blob is absent or malformed."""


class PersistenceWriteError(WorkoutLogError):
    """The persistent store could not be written."""
