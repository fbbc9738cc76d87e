"""In-memory, append-only workout log with load/save through persistence."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterator

from workout_log.exceptions import PersistenceParseError, PersistenceWriteError
from workout_log.serialization import dumps_workouts, loads_workouts

if TYPE_CHECKING:
    from workout_log.interfaces import PersistentStore
    from workout_log.models.workout import Workout

logger = logging.getLogger(__name__)

DEFAULT_KEY = "workouts"


class WorkoutStore:
    """Ordered sequence of workouts for the current session.

    Order is insertion order; it is the only order ever shown or persisted.
    """

    def __init__(self, workouts: list[Workout] | None = None) -> None:
        self._workouts: list[Workout] = list(workouts or [])

    def __len__(self) -> int:
        return len(self._workouts)

    def __iter__(self) -> Iterator[Workout]:
        return iter(tuple(self._workouts))

    def append(self, workout: Workout) -> None:
        self._workouts.append(workout)

    def all(self) -> tuple[Workout, ...]:
        return tuple(self._workouts)

    def find_by_id(self, workout_id: int) -> Workout | None:
        for workout in self._workouts:
            if workout.id == workout_id:
                return workout
        return None

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self, persistence: PersistentStore, key: str = DEFAULT_KEY) -> None:
        """Overwrite *key* with the full serialized sequence.

        Storage failures surface as PersistenceWriteError.
        """
        blob = dumps_workouts(self._workouts)
        try:
            persistence.set(key, blob)
        except PersistenceWriteError:
            raise
        except OSError as exc:
            raise PersistenceWriteError(f"Could not save workouts: {exc}") from exc
        logger.debug("Saved %d workouts under %r", len(self._workouts), key)

    def load(
        self,
        persistence: PersistentStore,
        key: str = DEFAULT_KEY,
        strict_elevation: bool = False,
    ) -> tuple[Workout, ...]:
        """Replace the sequence with the persisted one.

        An absent or unparseable blob leaves the store empty; the error is
        logged, never raised. Returns the loaded workouts.
        """
        blob = persistence.get(key)
        try:
            loaded = loads_workouts(blob, strict_elevation=strict_elevation)
        except PersistenceParseError as exc:
            if blob is None:
                logger.debug("No persisted workouts under %r", key)
            else:
                logger.warning("Discarding persisted workouts under %r: %s", key, exc)
            loaded = []
        self._workouts = loaded
        logger.info("Loaded %d workouts", len(loaded))
        return tuple(loaded)
