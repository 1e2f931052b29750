"""Controls panel - Left column of the planner page.

Layout (top to bottom):
- One group per endpoint: text input, current-location and select-from-map
  buttons, suggestion buttons
- Instruction banner while a field takes map clicks
- "Find Route" and "Clear" buttons
- Route details (km / mins)
- Signed-in user and logout

Widgets call into ui/actions.py through on_change/on_click callbacks, so the
session is updated before the next run draws anything.
"""

import logging

import streamlit as st

from route_planner.constants import StyleConfig
from route_planner.core.session import PlanningSession
from route_planner.model.endpoint import Endpoint, EndpointRole
from route_planner.model.message import ActiveFieldBannerMessage, RouteDetailsMessage
from route_planner.ui.actions import (
    choose_suggestion,
    clear_route,
    edit_endpoint_text,
    find_route,
    request_current_location,
    select_from_map,
    text_widget_key,
)
from route_planner.ui.auth import render_user_badge

logger = logging.getLogger(__name__)

_ROLE_UI = {
    EndpointRole.START: ("Start", StyleConfig.START_ICON, "Enter starting point"),
    EndpointRole.END: ("End", StyleConfig.END_ICON, "Enter destination"),
}


def _sync_text_widget(endpoint: Endpoint) -> None:
    """Push resolver-side text (suggestion, reverse lookup, clear) into the input widget.

    Must run before the widget is instantiated in this run.
    """
    key = text_widget_key(endpoint.role)
    if st.session_state.get(key) != endpoint.text:
        st.session_state[key] = endpoint.text


def _render_endpoint_group(session: PlanningSession, role: EndpointRole) -> None:
    endpoint = session.state.endpoint(role)
    name, icon, placeholder = _ROLE_UI[role]
    is_active = session.active_field.active_role == role

    _sync_text_widget(endpoint)
    st.text_input(
        f"{icon} {name}",
        key=text_widget_key(role),
        placeholder=placeholder,
        on_change=edit_endpoint_text,
        args=(role,),
    )

    col_location, col_map = st.columns(2)
    with col_location:
        st.button(
            f"{StyleConfig.CURRENT_LOCATION_ICON} Current Location",
            key=f"current_location_{role.value}",
            on_click=request_current_location,
            args=(role,),
            width="stretch",
        )
    with col_map:
        st.button(
            f"{StyleConfig.SELECT_FROM_MAP_ICON} Set {name} from Map",
            key=f"select_from_map_{role.value}",
            on_click=select_from_map,
            args=(role,),
            type="primary" if is_active else "secondary",
            width="stretch",
        )

    for index, candidate in enumerate(endpoint.suggestions):
        st.button(
            candidate.display_name,
            key=f"suggestion_{role.value}_{endpoint.last_request_id}_{index}",
            on_click=choose_suggestion,
            args=(role, index),
            width="stretch",
        )

    if endpoint.is_resolved:
        lat, lon = endpoint.coordinates  # type: ignore[misc]
        st.caption(f"{lat:.5f}, {lon:.5f}")


def render_controls_panel(session: PlanningSession) -> None:
    """Render the complete controls panel."""
    for role in EndpointRole:
        _render_endpoint_group(session, role)

    role = session.active_field.active_role
    if role is not None:
        ActiveFieldBannerMessage(field_label=role.label).display()

    if session.state.deferred.geolocation_role is not None:
        st.caption(f"{StyleConfig.CURRENT_LOCATION_ICON} Waiting for your browser to share its location...")

    col_find, col_clear = st.columns(2)
    with col_find:
        if st.button("🚗 Find Route", type="primary", width="stretch", disabled=session.is_busy):
            find_route()
    with col_clear:
        st.button("🧹 Clear", on_click=clear_route, width="stretch")

    details = session.orchestrator.details
    if details is not None:
        RouteDetailsMessage(distance_km=details.distance, time_min=details.time).display()

    st.divider()
    render_user_badge()
