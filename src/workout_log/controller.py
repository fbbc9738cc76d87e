"""WorkoutController — the interaction state machine.

Mediates between the position provider, the map view, the workout form, the
workout list and persistence. Every handler runs to completion, so at most
one set of captured coordinates and one workout creation is ever pending.

States::

    AWAITING_LOCATION --success--> IDLE <--submit-- FORM_OPEN
            |                        |                  ^
         failure                 map click -------------+
            v
    LOCATION_UNAVAILABLE --request_position()--> AWAITING_LOCATION
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Callable

from workout_log.config import ControllerSettings
from workout_log.exceptions import (
    LocationUnavailable,
    PersistenceWriteError,
    ValidationError,
)
from workout_log.forms import FormValues, build_workout, parse_workout_type
from workout_log.ids import IdGenerator
from workout_log.interfaces import (
    FormSurface,
    ListSurface,
    MapFactory,
    MapView,
    Notifier,
    PanOptions,
    PersistentStore,
    Position,
    PositionProvider,
    ScheduledTask,
    TaskScheduler,
)
from workout_log.models.enums import ControllerState, WorkoutType
from workout_log.models.workout import Coords, Workout
from workout_log.render import build_list_entry, build_marker_spec, parse_entry_id
from workout_log.store import WorkoutStore

logger = logging.getLogger(__name__)

GEOLOCATION_UNSUPPORTED_MESSAGE = (
    "Location is not available on this device. Please configure a position "
    "or use a browser that supports geolocation."
)
SAVE_FAILED_MESSAGE = "Your workout was added but could not be saved."


class WorkoutController:
    """Owns the workout store and the map handle for one session.

    Usage:
        controller = WorkoutController(
            position_provider=provider,
            map_factory=FoliumMapView,
            form=form,
            workout_list=workout_list,
            persistence=JsonFileStore(path),
            notifier=notifier,
            scheduler=scheduler,
        )
        controller.start()
    """

    def __init__(
        self,
        *,
        position_provider: PositionProvider | None,
        map_factory: MapFactory,
        form: FormSurface,
        workout_list: ListSurface,
        persistence: PersistentStore,
        notifier: Notifier,
        scheduler: TaskScheduler,
        settings: ControllerSettings | None = None,
        store: WorkoutStore | None = None,
        id_generator: IdGenerator | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._position_provider = position_provider
        self._map_factory = map_factory
        self._form = form
        self._list = workout_list
        self._persistence = persistence
        self._notifier = notifier
        self._scheduler = scheduler
        self._settings = settings or ControllerSettings()
        self._store = store if store is not None else WorkoutStore()
        self._ids = id_generator or IdGenerator()
        self._clock = clock

        self._state = ControllerState.AWAITING_LOCATION
        self._map: MapView | None = None
        self._pending_coords: Coords | None = None
        self._restore_task: ScheduledTask | None = None
        # Identifies the live restore; a callback holding any other token is stale.
        self._restore_token: object | None = None
        # The restore callback runs on the scheduler's thread.
        self._restore_lock = threading.RLock()

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def state(self) -> ControllerState:
        return self._state

    @property
    def map_view(self) -> MapView | None:
        return self._map

    @property
    def pending_coords(self) -> Coords | None:
        return self._pending_coords

    @property
    def workouts(self) -> tuple[Workout, ...]:
        return self._store.all()

    @property
    def restore_pending(self) -> bool:
        with self._restore_lock:
            return self._restore_token is not None

    # ------------------------------------------------------------------
    # Startup and location
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Load persisted workouts, list them, then ask for the position.

        Loading comes first so a provider that answers synchronously still
        finds the workouts to draw markers for.
        """
        loaded = self._store.load(
            self._persistence,
            self._settings.storage_key,
            strict_elevation=self._settings.strict_elevation,
        )
        for workout in loaded:
            self._ids.observe(workout.id)
            self._list.append(build_list_entry(workout))
        self.request_position()

    def request_position(self) -> None:
        """Ask the provider for the current position once.

        Safe to call again after a failure; a no-op once the map exists.
        """
        if self._map is not None:
            logger.debug("Map already initialised, ignoring position request")
            return
        if self._position_provider is None:
            logger.warning("No position provider configured")
            self._state = ControllerState.LOCATION_UNAVAILABLE
            self._notifier.alert(GEOLOCATION_UNSUPPORTED_MESSAGE)
            return
        self._state = ControllerState.AWAITING_LOCATION
        self._position_provider.request_current_position(
            self._on_position, self._on_position_error
        )

    def _on_position(self, position: Position) -> None:
        if self._map is not None:
            logger.debug("Ignoring duplicate position %s", position)
            return
        center = Coords(position.latitude, position.longitude)
        map_view = self._map_factory(center, self._settings.zoom_level)
        map_view.add_tile_layer(self._settings.tile_url, self._settings.attribution)
        map_view.on_click(self.on_map_click)
        self._map = map_view
        self._state = ControllerState.IDLE
        logger.info("Map ready at %.5f, %.5f", center.lat, center.lng)

        for workout in self._store:
            self._render_marker(workout)

    def _on_position_error(self, error: LocationUnavailable) -> None:
        if self._map is not None:
            return
        logger.warning("Location unavailable: %s", error.reason)
        self._state = ControllerState.LOCATION_UNAVAILABLE
        self._notifier.alert(error.reason)

    # ------------------------------------------------------------------
    # Map and form events
    # ------------------------------------------------------------------

    def on_map_click(self, lat: float, lng: float) -> None:
        """Capture coordinates; open the form unless it is already open."""
        if self._map is None:
            return
        self._pending_coords = Coords(lat, lng)
        if self._state is ControllerState.FORM_OPEN:
            logger.debug("Form already open, coordinates replaced")
            return
        self._cancel_restore()
        self._form.show()
        self._form.focus_distance()
        self._state = ControllerState.FORM_OPEN

    def on_type_change(self, workout_type: str | WorkoutType) -> None:
        """Show the cadence or elevation field to match *workout_type*."""
        try:
            selected = parse_workout_type(workout_type)
        except ValidationError as exc:
            logger.warning("%s", exc)
            return
        self._form.show_secondary_field(selected)

    def on_form_submit(self, values: FormValues | None = None) -> Workout | None:
        """Validate the form and create a workout.

        Returns the new workout, or None when the submit was rejected or
        arrived with no form open.
        """
        if self._state is not ControllerState.FORM_OPEN or self._pending_coords is None:
            logger.debug("Submit ignored in state %s", self._state.name)
            return None
        if values is None:
            values = self._form.values()

        try:
            workout = build_workout(
                values,
                self._pending_coords,
                workout_id=self._ids.next_id(),
                created_at=self._clock(),
                strict_elevation=self._settings.strict_elevation,
            )
        except ValidationError as exc:
            logger.info("Rejected workout input %s: %s", exc.fields, exc)
            self._notifier.alert(str(exc))
            return None

        self._render_marker(workout)
        self._list.append(build_list_entry(workout))
        self._store.append(workout)
        self._persist()
        self._close_form()
        logger.info("Created %s workout %d", workout.type.value, workout.id)
        return workout

    def on_list_click(self, entry_id: object) -> None:
        """Pan the map to the workout behind a clicked list entry."""
        if self._map is None:
            return
        workout_id = parse_entry_id(entry_id)
        if workout_id is None:
            return
        workout = self._store.find_by_id(workout_id)
        if workout is None:
            logger.warning("No workout with id %r", entry_id)
            return
        self._map.set_view(
            workout.coords,
            self._settings.zoom_level,
            PanOptions(animate=True, duration=self._settings.pan_duration_s),
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _render_marker(self, workout: Workout) -> None:
        if self._map is None:
            return
        spec = build_marker_spec(workout)
        marker = self._map.place_marker(spec.coords, spec.popup)
        marker.set_content(spec.content)
        marker.open()

    def _persist(self) -> None:
        try:
            self._store.save(self._persistence, self._settings.storage_key)
        except PersistenceWriteError as exc:
            logger.error("Failed to persist workouts: %s", exc)
            self._notifier.alert(SAVE_FAILED_MESSAGE)

    def _close_form(self) -> None:
        self._form.clear()
        self._form.hide()
        self._pending_coords = None
        self._state = ControllerState.IDLE
        self._cancel_restore()
        self._schedule_restore()

    def _schedule_restore(self) -> None:
        token = object()

        def restore() -> None:
            self._restore_form_layout(token)

        with self._restore_lock:
            self._restore_token = token
            task = self._scheduler.call_later(self._settings.form_restore_delay_s, restore)
            # A scheduler may run the callback before call_later returns.
            if self._restore_token is token:
                self._restore_task = task

    def _restore_form_layout(self, token: object) -> None:
        with self._restore_lock:
            if token is not self._restore_token:
                logger.debug("Ignoring superseded layout restore")
                return
            self._restore_token = None
            self._restore_task = None
            self._form.restore_layout()

    def _cancel_restore(self) -> None:
        """Supersede a pending layout restore, restoring the layout now."""
        with self._restore_lock:
            if self._restore_token is None:
                return
            if self._restore_task is not None:
                self._restore_task.cancel()
            self._restore_token = None
            self._restore_task = None
            self._form.restore_layout()
