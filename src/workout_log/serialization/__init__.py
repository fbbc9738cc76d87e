"""Serialization module — persist workouts as JSON records."""

from workout_log.serialization.json_records import (
    dumps_workouts,
    from_record,
    loads_workouts,
    to_record,
)

__all__ = ["dumps_workouts", "from_record", "loads_workouts", "to_record"]
