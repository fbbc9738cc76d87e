"""Environment-variable-based configuration."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

logger = logging.getLogger(__name__)

DEFAULT_TILE_URL = "https://tile.openstreetmap.org/{z}/{x}/{y}.png"
DEFAULT_ATTRIBUTION = (
    '&copy; <a href="https://www.openstreetmap.org/copyright">OpenStreetMap</a> contributors'
)
DEFAULT_STORAGE_PATH = Path("~/.workout_map/storage.json")


@dataclass(frozen=True)
class ControllerSettings:
    """Knobs for the interaction controller."""

    zoom_level: int = 13
    tile_url: str = DEFAULT_TILE_URL
    attribution: str = DEFAULT_ATTRIBUTION
    storage_key: str = "workouts"
    form_restore_delay_s: float = 1.0
    pan_duration_s: float = 1.0
    strict_elevation: bool = False


@dataclass(frozen=True)
class AppSettings:
    controller: ControllerSettings = field(default_factory=ControllerSettings)
    storage_path: Path = DEFAULT_STORAGE_PATH
    home_lat: float | None = None
    home_lng: float | None = None
    log_level: str = "INFO"

    @property
    def home_position(self) -> tuple[float, float] | None:
        if self.home_lat is None or self.home_lng is None:
            return None
        return (self.home_lat, self.home_lng)


def _get_float(env: Mapping[str, str], name: str, default: float | None) -> float | None:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r (not a number), using %r", name, raw, default)
        return default


def _get_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r (not an integer), using %r", name, raw, default)
        return default


def _get_bool(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(name, "").strip().lower()
    if not raw:
        return default
    return raw in ("1", "true", "yes", "on")


def load_settings(environ: Mapping[str, str] | None = None) -> AppSettings:
    """Build settings from ``WORKOUT_MAP_*`` environment variables."""
    env = os.environ if environ is None else environ
    defaults = ControllerSettings()
    controller = ControllerSettings(
        zoom_level=_get_int(env, "WORKOUT_MAP_ZOOM", defaults.zoom_level),
        tile_url=env.get("WORKOUT_MAP_TILE_URL") or defaults.tile_url,
        attribution=env.get("WORKOUT_MAP_ATTRIBUTION") or defaults.attribution,
        storage_key=env.get("WORKOUT_MAP_STORAGE_KEY") or defaults.storage_key,
        form_restore_delay_s=_get_float(
            env, "WORKOUT_MAP_FORM_RESTORE_DELAY_S", defaults.form_restore_delay_s
        ),
        pan_duration_s=_get_float(
            env, "WORKOUT_MAP_PAN_DURATION_S", defaults.pan_duration_s
        ),
        strict_elevation=_get_bool(
            env, "WORKOUT_MAP_STRICT_ELEVATION", defaults.strict_elevation
        ),
    )
    storage_path = Path(
        env.get("WORKOUT_MAP_STORAGE_PATH") or DEFAULT_STORAGE_PATH
    ).expanduser()
    return AppSettings(
        controller=controller,
        storage_path=storage_path,
        home_lat=_get_float(env, "WORKOUT_MAP_HOME_LAT", None),
        home_lng=_get_float(env, "WORKOUT_MAP_HOME_LNG", None),
        log_level=(env.get("WORKOUT_MAP_LOG_LEVEL") or "INFO").upper(),
    )
