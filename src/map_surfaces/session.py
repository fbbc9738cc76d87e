"""Form, list and notifier surfaces held as plain session state.

The front end reads these on every render and writes user input back; the
controller only ever talks to them through their small interfaces.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Iterator

from workout_log.forms import FormValues
from workout_log.models.enums import WorkoutType
from workout_log.render.list_entry import ListEntrySpec

logger = logging.getLogger(__name__)

_SECONDARY_FIELD = {
    WorkoutType.RUNNING: "cadence",
    WorkoutType.CYCLING: "elevation",
}


class SessionFormSurface:
    """Workout form state.

    ``version`` changes whenever the inputs are cleared, so widget keys
    derived from it force the front end to drop stale widget values.
    """

    def __init__(self) -> None:
        self._values = FormValues()
        self.visible = False
        self.layout_restored = True
        self.focused_field: str | None = None
        self.secondary_field = _SECONDARY_FIELD[WorkoutType.RUNNING]
        self.version = 0

    def update(self, **fields: str) -> None:
        """Record user input, e.g. ``update(distance="5")``."""
        self._values = dataclasses.replace(self._values, **fields)

    def values(self) -> FormValues:
        return self._values

    def show(self) -> None:
        self.visible = True

    def hide(self) -> None:
        self.visible = False
        self.layout_restored = False
        self.focused_field = None

    def clear(self) -> None:
        # The type selection survives a clear; only the inputs reset.
        self._values = FormValues(type=self._values.type)
        self.version += 1

    def focus_distance(self) -> None:
        self.focused_field = "distance"

    def restore_layout(self) -> None:
        self.layout_restored = True

    def show_secondary_field(self, workout_type: WorkoutType) -> None:
        self.secondary_field = _SECONDARY_FIELD[workout_type]
        self._values = dataclasses.replace(self._values, type=workout_type.value)


class SessionListSurface:
    """Rendered workout list entries in append order."""

    def __init__(self) -> None:
        self._entries: list[ListEntrySpec] = []

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ListEntrySpec]:
        return iter(tuple(self._entries))

    def append(self, entry: ListEntrySpec) -> None:
        self._entries.append(entry)

    def ids(self) -> list[int]:
        return [e.workout_id for e in self._entries]


class SessionNotifier:
    """Collects user-facing messages until the front end shows them."""

    def __init__(self) -> None:
        self._messages: list[str] = []

    def alert(self, message: str) -> None:
        logger.info("User alert: %s", message)
        self._messages.append(message)

    def drain(self) -> list[str]:
        messages, self._messages = self._messages, []
        return messages
