"""Workout Map — Streamlit front end.

Run with:
    streamlit run streamlit_app/app.py

Set WORKOUT_MAP_HOME_LAT / WORKOUT_MAP_HOME_LNG to open the map at a fixed
position; otherwise the page asks for one.
"""

from __future__ import annotations

import logging

import streamlit as st
from streamlit_folium import st_folium

from map_surfaces import DeferredPositionProvider, create_background_scheduler
from map_surfaces.scheduler import APSchedulerTaskScheduler
from workout_log.config import load_settings
from workout_log.models.enums import ControllerState, WorkoutType
from workout_log.render import render_list_entry_html

from helpers import TYPE_LABELS, WorkoutSession, build_session, new_click, workouts_dataframe

settings = load_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------

st.set_page_config(
    page_title="Workout Map",
    page_icon="🗺️",
    layout="wide",
)

st.markdown(
    """
    <style>
    .workout { list-style: none; padding: 8px 12px; margin: 6px 0;
               border-radius: 6px; background: #42484d; color: #ececec; }
    .workout--running { border-left: 5px solid #00c46a; }
    .workout--cycling { border-left: 5px solid #ffb545; }
    .workout__title { font-size: 1rem; margin: 0 0 4px 0; }
    .workout__details { display: inline-block; margin-right: 12px; }
    .workout__unit { font-size: 0.8rem; color: #aaa; margin-left: 2px; }
    </style>
    """,
    unsafe_allow_html=True,
)


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------


@st.cache_resource
def get_scheduler() -> APSchedulerTaskScheduler:
    return create_background_scheduler()


def _get_session() -> WorkoutSession:
    if "workout_session" not in st.session_state:
        session = build_session(settings, scheduler=get_scheduler())
        session.controller.start()
        st.session_state["workout_session"] = session
    return st.session_state["workout_session"]


session = _get_session()
controller = session.controller
form = session.form

for message in session.notifier.drain():
    st.error(message)


# ---------------------------------------------------------------------------
# Rendering helpers
# ---------------------------------------------------------------------------


def _render_position_prompt() -> None:
    """Let the user answer a pending position request by hand."""
    position = session.position
    if not isinstance(position, DeferredPositionProvider) or not position.pending:
        return
    st.subheader("Where are you?")
    lat_col, lng_col = st.columns(2)
    lat = lat_col.number_input("Latitude", -90.0, 90.0, 0.0, format="%.5f")
    lng = lng_col.number_input("Longitude", -180.0, 180.0, 0.0, format="%.5f")
    ok_col, deny_col = st.columns(2)
    if ok_col.button("Use this position", type="primary"):
        position.resolve(lat, lng)
        st.rerun()
    if deny_col.button("Don't share my location"):
        position.reject("User denied Geolocation")
        st.rerun()


def _render_form() -> None:
    version = form.version
    type_values = [t.value for t in WorkoutType]
    current_type = form.values().type
    selected = st.selectbox(
        "Type",
        type_values,
        index=type_values.index(current_type),
        format_func=lambda v: TYPE_LABELS[v],
        key=f"type_v{version}",
    )
    if selected != current_type:
        controller.on_type_change(selected)

    with st.form(key=f"workout_form_v{version}"):
        distance = st.text_input("Distance", placeholder="km", key=f"distance_v{version}")
        duration = st.text_input("Duration", placeholder="min", key=f"duration_v{version}")
        cadence = elevation = ""
        if form.secondary_field == "cadence":
            cadence = st.text_input("Cadence", placeholder="step/min", key=f"cadence_v{version}")
        else:
            elevation = st.text_input("Elev Gain", placeholder="meters", key=f"elevation_v{version}")
        submitted = st.form_submit_button("OK")

    if submitted:
        form.update(distance=distance, duration=duration, cadence=cadence, elevation=elevation)
        controller.on_form_submit()
        st.rerun()


def _render_list() -> None:
    for entry in session.workout_list:
        st.markdown(render_list_entry_html(entry), unsafe_allow_html=True)
        st.button(
            "Show on map",
            key=f"goto_{entry.workout_id}",
            on_click=controller.on_list_click,
            args=(entry.workout_id,),
            disabled=not controller.state.map_ready,
        )


# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------

side_col, map_col = st.columns([1, 2])

with side_col:
    st.title("Workouts")
    if controller.state is ControllerState.LOCATION_UNAVAILABLE:
        st.button("Retry location", on_click=controller.request_position)
    _render_position_prompt()

    if form.visible:
        _render_form()
    elif controller.state is ControllerState.IDLE and form.layout_restored:
        # Collapsed until the deferred restore fires after a submit.
        st.info("Click on the map to log a workout.")

    _render_list()

    if len(session.workout_list):
        with st.expander("Summary"):
            st.dataframe(workouts_dataframe(controller.workouts), hide_index=True)

with map_col:
    map_view = controller.map_view
    if map_view is None:
        if controller.state is ControllerState.AWAITING_LOCATION:
            st.info("Waiting for your location…")
        else:
            st.warning("The map is unavailable without a location.")
    else:
        result = st_folium(
            map_view.to_folium(),
            center=[map_view.center.lat, map_view.center.lng],
            zoom=map_view.zoom,
            key="workout_map",
            height=640,
            returned_objects=["last_clicked"],
        )
        click = new_click(result, st.session_state.get("_last_click"))
        if click is not None:
            st.session_state["_last_click"] = click
            map_view.dispatch_click(*click)
            st.rerun()
