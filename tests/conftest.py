"""Shared test fixtures: fixed clocks, surfaces, a manual scheduler, and a wired controller."""

from __future__ import annotations

from datetime import datetime
from typing import Callable
from unittest.mock import MagicMock

import pytest

from map_surfaces.position import DeferredPositionProvider
from map_surfaces.session import SessionFormSurface, SessionListSurface, SessionNotifier
from map_surfaces.storage import MemoryStore
from workout_log.config import ControllerSettings
from workout_log.controller import WorkoutController
from workout_log.ids import IdGenerator
from workout_log.models.workout import Coords, Workout, create_cycling, create_running

CREATED_AT = datetime(2024, 4, 14, 9, 30)
FIXED_MS = 1_713_087_000_000  # 2024-04-14, frozen clock for id generation
HOME = (45.0703, 7.6869)  # Turin


# ---------------------------------------------------------------------------
# Manual scheduler
# ---------------------------------------------------------------------------


class ManualTask:
    def __init__(self, delay_s: float, callback: Callable[[], None]) -> None:
        self.delay_s = delay_s
        self.callback = callback
        self.cancelled = False
        self.ran = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """TaskScheduler whose tasks only run when the test says so."""

    def __init__(self) -> None:
        self.tasks: list[ManualTask] = []

    def call_later(self, delay_s: float, callback: Callable[[], None]) -> ManualTask:
        task = ManualTask(delay_s, callback)
        self.tasks.append(task)
        return task

    @property
    def live(self) -> list[ManualTask]:
        return [t for t in self.tasks if not t.cancelled and not t.ran]

    def run_pending(self) -> None:
        for task in self.live:
            task.ran = True
            task.callback()


# ---------------------------------------------------------------------------
# Workouts
# ---------------------------------------------------------------------------


@pytest.fixture
def make_running() -> Callable[..., Workout]:
    """Factory for valid running workouts; override any argument by keyword."""

    def _make(**overrides) -> Workout:
        args = {
            "coords": Coords(45.07, 7.68),
            "distance": 5.0,
            "duration": 25.0,
            "cadence": 180.0,
            "workout_id": 1,
            "created_at": CREATED_AT,
        }
        args.update(overrides)
        return create_running(**args)

    return _make


@pytest.fixture
def make_cycling() -> Callable[..., Workout]:
    """Factory for valid cycling workouts; override any argument by keyword."""

    def _make(**overrides) -> Workout:
        args = {
            "coords": Coords(45.10, 7.70),
            "distance": 20.0,
            "duration": 60.0,
            "elevation_gain": 300.0,
            "workout_id": 2,
            "created_at": CREATED_AT,
        }
        args.update(overrides)
        return create_cycling(**args)

    return _make


# ---------------------------------------------------------------------------
# Controller collaborators
# ---------------------------------------------------------------------------


@pytest.fixture
def persistence() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def position() -> DeferredPositionProvider:
    return DeferredPositionProvider()


@pytest.fixture
def map_view() -> MagicMock:
    """Mock MapView; every place_marker() call returns ``place_marker.return_value``."""
    return MagicMock(name="map_view")


@pytest.fixture
def map_factory(map_view) -> MagicMock:
    return MagicMock(name="map_factory", return_value=map_view)


@pytest.fixture
def form() -> SessionFormSurface:
    return SessionFormSurface()


@pytest.fixture
def workout_list() -> SessionListSurface:
    return SessionListSurface()


@pytest.fixture
def notifier() -> SessionNotifier:
    return SessionNotifier()


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def settings() -> ControllerSettings:
    return ControllerSettings()


@pytest.fixture
def make_controller(
    position, map_factory, form, workout_list, persistence, notifier, scheduler, settings
) -> Callable[..., WorkoutController]:
    """Build a controller from the fixtures above; keyword overrides win."""

    def _make(**overrides) -> WorkoutController:
        kwargs = {
            "position_provider": position,
            "map_factory": map_factory,
            "form": form,
            "workout_list": workout_list,
            "persistence": persistence,
            "notifier": notifier,
            "scheduler": scheduler,
            "settings": settings,
            "id_generator": IdGenerator(clock_ms=lambda: FIXED_MS),
            "clock": lambda: CREATED_AT,
        }
        kwargs.update(overrides)
        return WorkoutController(**kwargs)

    return _make


@pytest.fixture
def controller(make_controller) -> WorkoutController:
    return make_controller()


@pytest.fixture
def ready_controller(controller, position) -> WorkoutController:
    """Started controller whose map is initialised at HOME."""
    controller.start()
    position.resolve(*HOME)
    return controller


@pytest.fixture
def created_at() -> datetime:
    return CREATED_AT


@pytest.fixture
def home() -> tuple[float, float]:
    return HOME
