"""Utility helpers bridging the Streamlit page and the workout controller.

Session wiring, map-click de-duplication, and the summary table.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Union

import pandas as pd

from map_surfaces import (
    ConfiguredPositionProvider,
    DeferredPositionProvider,
    FoliumMapView,
    JsonFileStore,
    SessionFormSurface,
    SessionListSurface,
    SessionNotifier,
)
from workout_log.config import AppSettings
from workout_log.controller import WorkoutController
from workout_log.interfaces import PersistentStore, TaskScheduler
from workout_log.models.enums import WorkoutType
from workout_log.models.workout import Workout
from workout_log.render import format_value

# ---------------------------------------------------------------------------
# Labels
# ---------------------------------------------------------------------------

TYPE_LABELS: dict[str, str] = {t.value: t.label for t in WorkoutType}

SUMMARY_COLUMNS = (
    "Date",
    "Type",
    "Distance (km)",
    "Duration (min)",
    "Pace / Speed",
    "Cadence / Elevation",
)

_METRIC_UNITS = {WorkoutType.RUNNING: "min/km", WorkoutType.CYCLING: "km/h"}
_SECONDARY_UNITS = {WorkoutType.RUNNING: "spm", WorkoutType.CYCLING: "m"}


# ---------------------------------------------------------------------------
# Session wiring
# ---------------------------------------------------------------------------


PositionSource = Union[ConfiguredPositionProvider, DeferredPositionProvider]


@dataclass
class WorkoutSession:
    """Everything one browser session needs, kept in ``st.session_state``."""

    controller: WorkoutController
    form: SessionFormSurface
    workout_list: SessionListSurface
    notifier: SessionNotifier
    position: PositionSource


def build_session(
    settings: AppSettings,
    scheduler: TaskScheduler,
    persistence: PersistentStore | None = None,
) -> WorkoutSession:
    """Wire a controller to session surfaces. Does not start it.

    With a configured home position the map opens straight away; otherwise
    the position stays pending until the user supplies or declines one.
    """
    home = settings.home_position
    position: PositionSource = (
        ConfiguredPositionProvider(home) if home is not None else DeferredPositionProvider()
    )
    form = SessionFormSurface()
    workout_list = SessionListSurface()
    notifier = SessionNotifier()
    controller = WorkoutController(
        position_provider=position,
        map_factory=FoliumMapView,
        form=form,
        workout_list=workout_list,
        persistence=persistence if persistence is not None else JsonFileStore(settings.storage_path),
        notifier=notifier,
        scheduler=scheduler,
        settings=settings.controller,
    )
    return WorkoutSession(
        controller=controller,
        form=form,
        workout_list=workout_list,
        notifier=notifier,
        position=position,
    )


# ---------------------------------------------------------------------------
# Map clicks
# ---------------------------------------------------------------------------


def new_click(
    result: dict[str, Any] | None, last_click: tuple[float, float] | None
) -> tuple[float, float] | None:
    """Return the clicked (lat, lng) if st_folium reports a click not yet handled.

    st_folium keeps returning the last click on every rerun, so the caller
    remembers the one it handled and passes it back in.
    """
    if not result:
        return None
    clicked = result.get("last_clicked")
    if not clicked:
        return None
    try:
        point = (float(clicked["lat"]), float(clicked["lng"]))
    except (KeyError, TypeError, ValueError):
        return None
    if last_click is not None and tuple(last_click) == point:
        return None
    return point


# ---------------------------------------------------------------------------
# Summary table
# ---------------------------------------------------------------------------


def workouts_dataframe(workouts: Iterable[Workout]) -> pd.DataFrame:
    """One row per workout, in store order."""
    rows = [
        {
            "Date": w.date_label,
            "Type": w.type.label,
            "Distance (km)": w.distance,
            "Duration (min)": w.duration,
            "Pace / Speed": f"{format_value(w.metric)} {_METRIC_UNITS[w.type]}",
            "Cadence / Elevation": f"{format_value(w.secondary)} {_SECONDARY_UNITS[w.type]}",
        }
        for w in workouts
    ]
    return pd.DataFrame(rows, columns=list(SUMMARY_COLUMNS))
