"""Position providers."""

from __future__ import annotations

import logging
from typing import Callable

from workout_log.exceptions import LocationUnavailable
from workout_log.interfaces import Position

logger = logging.getLogger(__name__)

SuccessCallback = Callable[[Position], None]
ErrorCallback = Callable[[LocationUnavailable], None]

NOT_CONFIGURED_MESSAGE = (
    "No position configured. Set WORKOUT_MAP_HOME_LAT and WORKOUT_MAP_HOME_LNG."
)


class ConfiguredPositionProvider:
    """Answers immediately with a fixed position, or fails if there is none."""

    def __init__(self, position: tuple[float, float] | None) -> None:
        self._position = position

    def request_current_position(
        self, on_success: SuccessCallback, on_error: ErrorCallback
    ) -> None:
        if self._position is None:
            on_error(LocationUnavailable(NOT_CONFIGURED_MESSAGE))
            return
        lat, lng = self._position
        on_success(Position(latitude=lat, longitude=lng))


class DeferredPositionProvider:
    """Holds the request until the host settles it.

    The host calls :meth:`resolve` or :meth:`reject` once the real answer
    (e.g. from the browser) arrives; each pending request is answered once.
    """

    def __init__(self) -> None:
        self._pending: list[tuple[SuccessCallback, ErrorCallback]] = []

    @property
    def pending(self) -> bool:
        return bool(self._pending)

    def request_current_position(
        self, on_success: SuccessCallback, on_error: ErrorCallback
    ) -> None:
        self._pending.append((on_success, on_error))

    def resolve(self, latitude: float, longitude: float) -> None:
        callbacks, self._pending = self._pending, []
        for on_success, _ in callbacks:
            on_success(Position(latitude=latitude, longitude=longitude))

    def reject(self, message: str) -> None:
        callbacks, self._pending = self._pending, []
        if not callbacks:
            logger.debug("reject() with no pending request: %s", message)
        for _, on_error in callbacks:
            on_error(LocationUnavailable(message))
