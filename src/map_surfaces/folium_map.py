"""Leaflet map surface backed by folium.

The view keeps a plain record of everything the controller asked for
(center, zoom, tile layers, markers) and turns it into a ``folium.Map`` on
demand, so the front end can redraw it on every render.
"""

from __future__ import annotations

import logging
from typing import Callable

import folium

from workout_log.interfaces import PanOptions
from workout_log.models.workout import Coords
from workout_log.render.marker import PopupOptions

logger = logging.getLogger(__name__)

ClickHandler = Callable[[float, float], None]


class FoliumMarker:
    """Marker handle returned by :meth:`FoliumMapView.place_marker`."""

    def __init__(self, coords: Coords) -> None:
        self.coords = coords
        self.popup: PopupOptions | None = None
        self.content = ""
        self.is_open = False

    def bind_popup(self, popup: PopupOptions) -> "FoliumMarker":
        self.popup = popup
        return self

    def set_content(self, content: str) -> "FoliumMarker":
        self.content = content
        return self

    def open(self) -> "FoliumMarker":
        self.is_open = True
        return self

    def to_folium(self) -> folium.Marker:
        popup = None
        if self.popup is not None:
            popup = folium.Popup(
                self.content,
                show=self.is_open,
                max_width=self.popup.max_width,
                min_width=self.popup.min_width,
                close_button=self.popup.close_button,
                auto_close=self.popup.auto_close,
                close_on_escape_key=self.popup.close_on_escape_key,
                close_on_click=self.popup.close_on_click,
                class_name=self.popup.class_name,
            )
        return folium.Marker(location=[self.coords.lat, self.coords.lng], popup=popup)


class FoliumMapView:
    """MapView implementation; construct with ``FoliumMapView(center, zoom)``."""

    def __init__(self, center: Coords | tuple[float, float], zoom: int) -> None:
        self.center = Coords(*center)
        self.zoom = zoom
        self.pan: PanOptions | None = None
        self.tile_layers: list[tuple[str, str]] = []
        self.markers: list[FoliumMarker] = []
        self._click_handlers: list[ClickHandler] = []

    def add_tile_layer(self, url: str, attribution: str) -> None:
        self.tile_layers.append((url, attribution))

    def on_click(self, handler: ClickHandler) -> None:
        self._click_handlers.append(handler)

    def set_view(
        self, coords: Coords | tuple[float, float], zoom: int, pan: PanOptions | None = None
    ) -> None:
        self.center = Coords(*coords)
        self.zoom = zoom
        self.pan = pan

    def place_marker(
        self, coords: Coords | tuple[float, float], popup: PopupOptions
    ) -> FoliumMarker:
        marker = FoliumMarker(Coords(*coords)).bind_popup(popup)
        self.markers.append(marker)
        return marker

    def dispatch_click(self, lat: float, lng: float) -> None:
        """Forward a click reported by the front end to the registered handlers."""
        logger.debug("Map click at %.5f, %.5f", lat, lng)
        for handler in list(self._click_handlers):
            handler(lat, lng)

    def to_folium(self) -> folium.Map:
        fmap = folium.Map(
            location=[self.center.lat, self.center.lng],
            zoom_start=self.zoom,
            tiles=None,
        )
        for url, attribution in self.tile_layers:
            folium.TileLayer(tiles=url, attr=attribution, name="Base map").add_to(fmap)
        for marker in self.markers:
            marker.to_folium().add_to(fmap)
        return fmap
