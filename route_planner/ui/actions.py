"""UI Actions - Every function a widget or map click invokes.

Actions are the only UI code that calls into PlanningSession. Each catches
the RoutePlannerError family and shows the mapped message, so a rejected
action never reaches the app-level error wrapper.

This module handles:
- Text input (edit_endpoint_text, choose_suggestion)
- Map targeting and clicks (select_from_map, dispatch_click)
- Device location (request_current_location)
- Route (find_route, clear_route)
- Deferred work (handle_deferred_actions)
"""

import logging

import streamlit as st

from route_planner.errors import GeolocationUnavailable, RoutePlannerError
from route_planner.model.endpoint import EndpointRole
from route_planner.ui.geolocation import BrowserGeolocation, PositionPending
from route_planner.ui.infra import bump_map_version, get_session, trigger_rerun
from route_planner.ui.pydeck_click_handler import MapClick

logger = logging.getLogger(__name__)

__all__ = [
    "bump_map_version",
    "choose_suggestion",
    "clear_route",
    "dispatch_click",
    "edit_endpoint_text",
    "find_route",
    "handle_deferred_actions",
    "request_current_location",
    "select_from_map",
    "text_widget_key",
]


def text_widget_key(role: EndpointRole) -> str:
    """Session-state key of an endpoint's text input."""
    return f"endpoint_text_{role.value}"


def _show(error: RoutePlannerError) -> None:
    message = error.to_message()
    if message is None:
        logger.warning(f"[ACTION] Silent error: {error}")
        return
    message.display()


# =============================================================================
# TEXT INPUT
# =============================================================================


def edit_endpoint_text(role: EndpointRole) -> None:
    """on_change callback of an endpoint's text input.

    Queues a forward search; it runs in the deferred pass of the rerun
    Streamlit performs after the callback.
    """
    text = st.session_state.get(text_widget_key(role), "")
    get_session().resolver.edit_text(role, text)


def choose_suggestion(role: EndpointRole, index: int) -> None:
    """on_click callback of a suggestion button."""
    session = get_session()
    candidate = session.resolver.select_suggestion(role, index)
    logger.info(f"[ACTION] {role.value} suggestion chosen: {candidate.display_name!r}")


# =============================================================================
# MAP
# =============================================================================


def select_from_map(role: EndpointRole) -> None:
    """on_click callback of a "select from map" button."""
    get_session().select_from_map(role)


def dispatch_click(click: MapClick) -> None:
    """Route a new map click to the active field.

    A click while no field is active shows the prompt and changes nothing.
    Otherwise the reverse lookup is queued and the script reruns so the
    deferred pass resolves it before the next render.
    """
    session = get_session()
    try:
        session.handle_map_click(lat=click.lat, lon=click.lon)
    except RoutePlannerError as e:
        _show(e)
        return
    trigger_rerun()


# =============================================================================
# DEVICE LOCATION
# =============================================================================


def request_current_location(role: EndpointRole) -> None:
    """on_click callback of a "current location" button.

    The browser answers asynchronously, so the request is deferred and
    polled by handle_deferred_actions(). The session stays busy until then.
    """
    get_session().request_current_location(role)


def _poll_geolocation() -> None:
    session = get_session()
    deferred = session.state.deferred
    if deferred.geolocation_role is None:
        return

    try:
        session.poll_current_location(BrowserGeolocation(attempt=deferred.geolocation_attempt))
    except PositionPending:
        return
    except GeolocationUnavailable as e:
        _show(e)


# =============================================================================
# ROUTE
# =============================================================================


def find_route() -> None:
    """Compute and draw the route between the current endpoints."""
    session = get_session()
    try:
        with st.spinner("🚗 Finding route..."):
            session.find_route()
    except RoutePlannerError as e:
        _show(e)
        return
    bump_map_version()


def clear_route() -> None:
    """Reset the planner. Safe to call repeatedly."""
    session = get_session()
    session.clear()
    bump_map_version()


# =============================================================================
# DEFERRED ACTIONS
# =============================================================================


def handle_deferred_actions() -> None:
    """Execute work queued by the previous run.

    Called at the start of main() every render, before any widget is drawn,
    so resolved endpoint text is in place when the inputs render:
    1. Poll the browser for a requested device position
    2. Run queued geocode lookups
    """
    session = get_session()
    _poll_geolocation()

    if not session.state.pending:
        return
    with st.spinner("🔎 Looking up places..."):
        applied = session.process_pending()
    logger.info(f"[ACTION] Deferred lookups applied: {applied}")
