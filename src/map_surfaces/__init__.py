"""Concrete surfaces for the workout controller — map, location, storage, scheduling."""

from map_surfaces.folium_map import FoliumMapView, FoliumMarker
from map_surfaces.position import ConfiguredPositionProvider, DeferredPositionProvider
from map_surfaces.scheduler import (
    APSchedulerTask,
    APSchedulerTaskScheduler,
    create_background_scheduler,
)
from map_surfaces.session import SessionFormSurface, SessionListSurface, SessionNotifier
from map_surfaces.storage import JsonFileStore, MemoryStore

__all__ = [
    "APSchedulerTask",
    "APSchedulerTaskScheduler",
    "ConfiguredPositionProvider",
    "DeferredPositionProvider",
    "FoliumMapView",
    "FoliumMarker",
    "JsonFileStore",
    "MemoryStore",
    "SessionFormSurface",
    "SessionListSurface",
    "SessionNotifier",
    "create_background_scheduler",
]
