"""Contracts for the collaborators the controller drives.

Concrete implementations live in the ``map_surfaces`` package; tests use
mocks or small fakes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Optional, Protocol

if TYPE_CHECKING:
    from workout_log.exceptions import LocationUnavailable
    from workout_log.forms import FormValues
    from workout_log.models.enums import WorkoutType
    from workout_log.models.workout import Coords
    from workout_log.render.list_entry import ListEntrySpec
    from workout_log.render.marker import PopupOptions


@dataclass(frozen=True)
class Position:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class PanOptions:
    animate: bool = True
    duration: float = 1.0  # seconds


class PositionProvider(Protocol):
    def request_current_position(
        self,
        on_success: Callable[[Position], None],
        on_error: Callable[[LocationUnavailable], None],
    ) -> None:
        """Deliver the current position (or a failure) to one of the callbacks, possibly later."""
        ...


class MarkerHandle(Protocol):
    def bind_popup(self, popup: PopupOptions) -> MarkerHandle: ...

    def set_content(self, content: str) -> MarkerHandle: ...

    def open(self) -> MarkerHandle: ...


class MapView(Protocol):
    def add_tile_layer(self, url: str, attribution: str) -> None: ...

    def on_click(self, handler: Callable[[float, float], None]) -> None: ...

    def set_view(
        self, coords: Coords, zoom: int, pan: Optional[PanOptions] = None
    ) -> None: ...

    def place_marker(self, coords: Coords, popup: PopupOptions) -> MarkerHandle: ...


MapFactory = Callable[["Coords", int], MapView]


class PersistentStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class FormSurface(Protocol):
    def values(self) -> FormValues: ...

    def show(self) -> None: ...

    def hide(self) -> None: ...

    def clear(self) -> None: ...

    def focus_distance(self) -> None: ...

    def restore_layout(self) -> None: ...

    def show_secondary_field(self, workout_type: WorkoutType) -> None: ...


class ListSurface(Protocol):
    def append(self, entry: ListEntrySpec) -> None: ...


class Notifier(Protocol):
    def alert(self, message: str) -> None: ...


class ScheduledTask(Protocol):
    def cancel(self) -> None: ...


class TaskScheduler(Protocol):
    def call_later(self, delay_s: float, callback: Callable[[], None]) -> ScheduledTask: ...
