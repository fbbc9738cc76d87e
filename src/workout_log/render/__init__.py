"""Render adapters — workouts to map markers and list entries."""

from workout_log.render.list_entry import (
    Detail,
    ListEntrySpec,
    build_list_entry,
    format_value,
    parse_entry_id,
    render_list_entry_html,
)
from workout_log.render.marker import (
    WORKOUT_ICONS,
    MarkerSpec,
    PopupOptions,
    build_marker_spec,
    workout_title,
)

__all__ = [
    "WORKOUT_ICONS",
    "Detail",
    "ListEntrySpec",
    "MarkerSpec",
    "PopupOptions",
    "build_list_entry",
    "build_marker_spec",
    "format_value",
    "parse_entry_id",
    "render_list_entry_html",
    "workout_title",
]
