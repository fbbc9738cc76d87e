"""Tests for the workout record, its variants, and their derived metrics."""

from __future__ import annotations

import dataclasses
import math

import pytest

from workout_log.exceptions import ValidationError
from workout_log.models.enums import ControllerState, WorkoutType
from workout_log.models.workout import (
    DERIVED_METRIC,
    Coords,
    CyclingDetails,
    RunningDetails,
    create_cycling,
    create_running,
    cycling_speed,
    running_pace,
)

# ---------------------------------------------------------------------------
# Derived metrics
# ---------------------------------------------------------------------------


class TestDerivedMetrics:
    @pytest.mark.parametrize(
        "distance, duration, expected",
        [(5.0, 25.0, 5.0), (10.0, 45.0, 4.5), (0.4, 2.0, 5.0), (21.1, 120.0, 120.0 / 21.1)],
    )
    def test_running_pace_is_duration_over_distance(self, distance, duration, expected):
        assert math.isclose(running_pace(distance, duration), expected)

    @pytest.mark.parametrize(
        "distance, duration, expected",
        [(20.0, 60.0, 20.0), (30.0, 90.0, 20.0), (15.0, 30.0, 30.0), (42.0, 75.0, 33.6)],
    )
    def test_cycling_speed_is_km_per_hour(self, distance, duration, expected):
        assert math.isclose(cycling_speed(distance, duration), expected)

    def test_dispatch_table_covers_every_type(self):
        assert set(DERIVED_METRIC) == set(WorkoutType)


# ---------------------------------------------------------------------------
# create_running
# ---------------------------------------------------------------------------


class TestCreateRunning:
    def test_pace_scenario(self, make_running):
        workout = make_running(distance=5, duration=25, cadence=180)
        assert workout.type is WorkoutType.RUNNING
        assert workout.pace == 5
        assert workout.metric == 5
        assert isinstance(workout.details, RunningDetails)
        assert workout.details.cadence == 180

    def test_secondary_is_cadence(self, make_running):
        assert make_running(cadence=172).secondary == 172

    def test_speed_is_none_for_running(self, make_running):
        assert make_running().speed is None

    @pytest.mark.parametrize("field", ["distance", "duration", "cadence"])
    @pytest.mark.parametrize("bad", [0, -5, math.nan, math.inf, -math.inf])
    def test_rejects_non_positive_or_non_finite(self, make_running, field, bad):
        with pytest.raises(ValidationError) as exc_info:
            make_running(**{field: bad})
        assert field in exc_info.value.fields

    def test_reports_every_bad_field(self, make_running):
        with pytest.raises(ValidationError) as exc_info:
            make_running(distance=-1, duration=0, cadence=180)
        assert exc_info.value.fields == ("distance", "duration")

    def test_rejects_bool_and_strings(self, make_running):
        with pytest.raises(ValidationError):
            make_running(distance=True)
        with pytest.raises(ValidationError):
            make_running(duration="25")

    def test_coords_normalised_to_named_tuple(self, make_running):
        workout = make_running(coords=(45, 7))
        assert workout.coords == Coords(45.0, 7.0)
        assert workout.coords.lat == 45.0

    def test_rejects_bad_coords(self, make_running):
        with pytest.raises(ValidationError):
            make_running(coords=(math.nan, 7.0))
        with pytest.raises(ValidationError):
            make_running(coords=(1.0,))

    def test_generates_id_when_omitted(self):
        first = create_running((0, 0), 5, 25, 180)
        second = create_running((0, 0), 5, 25, 180)
        assert first.id != second.id

    def test_pace_overflow_rejected(self, make_running):
        with pytest.raises(ValidationError) as exc_info:
            make_running(distance=5e-324, duration=25)
        assert exc_info.value.fields == ("distance", "duration")


# ---------------------------------------------------------------------------
# create_cycling
# ---------------------------------------------------------------------------


class TestCreateCycling:
    def test_speed_scenario(self, make_cycling):
        workout = make_cycling(distance=20, duration=60, elevation_gain=300)
        assert workout.type is WorkoutType.CYCLING
        assert workout.speed == 20
        assert isinstance(workout.details, CyclingDetails)
        assert workout.secondary == 300
        assert workout.pace is None

    @pytest.mark.parametrize("field", ["distance", "duration"])
    @pytest.mark.parametrize("bad", [0, -3, math.nan, math.inf])
    def test_rejects_bad_distance_and_duration(self, make_cycling, field, bad):
        with pytest.raises(ValidationError) as exc_info:
            make_cycling(**{field: bad})
        assert field in exc_info.value.fields

    @pytest.mark.parametrize("elevation", [0, -120])
    def test_zero_or_negative_elevation_allowed_by_default(self, make_cycling, elevation):
        assert make_cycling(elevation_gain=elevation).secondary == elevation

    @pytest.mark.parametrize("elevation", [math.nan, math.inf])
    def test_non_finite_elevation_rejected(self, make_cycling, elevation):
        with pytest.raises(ValidationError) as exc_info:
            make_cycling(elevation_gain=elevation)
        assert exc_info.value.fields == ("elevation_gain",)

    @pytest.mark.parametrize("elevation", [0, -120])
    def test_strict_elevation_requires_positive(self, make_cycling, elevation):
        with pytest.raises(ValidationError):
            make_cycling(elevation_gain=elevation, strict_elevation=True)

    def test_subnormal_duration_does_not_divide_by_zero(self, make_cycling):
        # duration / 60 underflows to 0.0 for the smallest positive float.
        with pytest.raises(ValidationError) as exc_info:
            make_cycling(distance=10, duration=5e-324)
        assert exc_info.value.fields == ("distance", "duration")

    def test_speed_overflow_rejected(self, make_cycling):
        with pytest.raises(ValidationError):
            make_cycling(distance=1e308, duration=60)

    def test_tiny_duration_with_finite_speed(self, make_cycling):
        assert math.isclose(make_cycling(distance=10, duration=1e-300).speed, 6e302)


# ---------------------------------------------------------------------------
# Record behaviour
# ---------------------------------------------------------------------------


class TestWorkoutRecord:
    def test_frozen(self, make_running):
        workout = make_running()
        with pytest.raises(dataclasses.FrozenInstanceError):
            workout.distance = 10.0  # type: ignore[misc]
        with pytest.raises(dataclasses.FrozenInstanceError):
            workout.details.pace = 1.0  # type: ignore[misc]

    def test_date_label(self, make_running, created_at):
        workout = make_running(created_at=created_at)
        assert workout.month == "April"
        assert workout.day == 14
        assert workout.date_label == "April 14"

    def test_type_label(self):
        assert WorkoutType.RUNNING.label == "Running"
        assert WorkoutType.CYCLING.label == "Cycling"

    def test_map_ready_states(self):
        assert ControllerState.IDLE.map_ready
        assert ControllerState.FORM_OPEN.map_ready
        assert not ControllerState.AWAITING_LOCATION.map_ready
        assert not ControllerState.LOCATION_UNAVAILABLE.map_ready
