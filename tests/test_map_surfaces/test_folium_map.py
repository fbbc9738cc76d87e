"""Tests for the folium-backed map view."""

from __future__ import annotations

from unittest.mock import MagicMock

import folium

from map_surfaces.folium_map import FoliumMapView, FoliumMarker
from workout_log.interfaces import PanOptions
from workout_log.models.workout import Coords
from workout_log.render import build_marker_spec


def _markers(fmap: folium.Map) -> list[folium.Marker]:
    return [child for child in fmap._children.values() if isinstance(child, folium.Marker)]


class TestFoliumMapView:
    def test_records_center_and_zoom(self):
        view = FoliumMapView((45.0, 7.0), 13)
        assert view.center == Coords(45.0, 7.0)
        assert view.zoom == 13
        assert view.pan is None

    def test_set_view_records_pan(self):
        view = FoliumMapView((45.0, 7.0), 13)
        view.set_view(Coords(46.0, 8.0), 15, PanOptions(animate=True, duration=1.0))
        assert view.center == Coords(46.0, 8.0)
        assert view.zoom == 15
        assert view.pan == PanOptions(animate=True, duration=1.0)

    def test_dispatch_click_reaches_handlers(self):
        view = FoliumMapView((45.0, 7.0), 13)
        handler = MagicMock()
        view.on_click(handler)
        view.dispatch_click(45.5, 7.5)
        handler.assert_called_once_with(45.5, 7.5)

    def test_dispatch_without_handlers_is_noop(self):
        FoliumMapView((45.0, 7.0), 13).dispatch_click(1.0, 2.0)

    def test_place_marker_binds_popup(self, make_running):
        spec = build_marker_spec(make_running())
        view = FoliumMapView((45.0, 7.0), 13)
        marker = view.place_marker(spec.coords, spec.popup)
        assert isinstance(marker, FoliumMarker)
        assert marker.popup == spec.popup
        assert view.markers == [marker]

    def test_to_folium_draws_tiles_and_markers(self, make_running, make_cycling):
        view = FoliumMapView((45.0, 7.0), 13)
        view.add_tile_layer("https://tiles.example/{z}/{x}/{y}.png", "Example")
        for workout in (make_running(), make_cycling()):
            spec = build_marker_spec(workout)
            view.place_marker(spec.coords, spec.popup).set_content(spec.content).open()

        fmap = view.to_folium()
        assert isinstance(fmap, folium.Map)
        assert len(_markers(fmap)) == 2
        tiles = [c for c in fmap._children.values() if isinstance(c, folium.TileLayer)]
        assert len(tiles) == 1
        assert view.tile_layers == [("https://tiles.example/{z}/{x}/{y}.png", "Example")]


class TestFoliumMarker:
    def test_chaining(self, make_running):
        spec = build_marker_spec(make_running())
        marker = FoliumMarker(spec.coords)
        assert marker.bind_popup(spec.popup).set_content(spec.content).open() is marker
        assert marker.is_open
        assert marker.content == "🏃‍♂️ Running on April 14"

    def test_popup_carries_content(self, make_running):
        spec = build_marker_spec(make_running())
        marker = FoliumMarker(spec.coords).bind_popup(spec.popup).set_content(spec.content)
        rendered = marker.to_folium()
        popups = [c for c in rendered._children.values() if isinstance(c, folium.Popup)]
        assert len(popups) == 1

    def test_marker_without_popup(self):
        rendered = FoliumMarker(Coords(45.0, 7.0)).to_folium()
        assert rendered.location == [45.0, 7.0]
        assert not any(isinstance(c, folium.Popup) for c in rendered._children.values())
