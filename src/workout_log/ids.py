"""Session-unique workout identifiers.

Ids are millisecond timestamps. Two workouts created within the same
millisecond would collide, so each new id is bumped to stay strictly greater
than the last one handed out (or observed from persistence).
"""

from __future__ import annotations

import time
from typing import Callable


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


class IdGenerator:
    """Hands out strictly increasing, time-ordered integer ids."""

    def __init__(self, clock_ms: Callable[[], int] = _now_ms) -> None:
        self._clock_ms = clock_ms
        self._last = 0

    @property
    def last_id(self) -> int:
        return self._last

    def next_id(self) -> int:
        candidate = max(int(self._clock_ms()), self._last + 1)
        self._last = candidate
        return candidate

    def observe(self, existing_id: int) -> None:
        """Record an id created elsewhere (e.g. loaded from storage)."""
        if existing_id > self._last:
            self._last = existing_id


default_generator = IdGenerator()
