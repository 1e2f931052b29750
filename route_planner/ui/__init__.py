"""User interface components for the route planner.

File Structure (layout-based naming):
- controls_panel.py: Endpoint inputs, suggestions, route buttons and details
- center_map.py: Pydeck map with route, waypoints and click marker
- auth.py: Login page and user badge

Core Components:
- actions.py: All action functions (text edit, map click, route, clear, deferred)
- infra.py: Session access, rerun/map-version wrappers, state machine listener
- pydeck_click_handler.py: st_deckgl rendering with click de-duplication
- geolocation.py: Browser position provider
"""

from route_planner.ui.actions import (
    bump_map_version,
    choose_suggestion,
    clear_route,
    dispatch_click,
    edit_endpoint_text,
    find_route,
    handle_deferred_actions,
    request_current_location,
    select_from_map,
)
from route_planner.ui.auth import is_signed_in, render_login_page, render_user_badge
from route_planner.ui.center_map import MapRenderer
from route_planner.ui.controls_panel import render_controls_panel
from route_planner.ui.infra import StreamlitUIListener

__all__ = [
    "MapRenderer",
    "StreamlitUIListener",
    "render_controls_panel",
    "render_login_page",
    "render_user_badge",
    "is_signed_in",
    "bump_map_version",
    "choose_suggestion",
    "clear_route",
    "dispatch_click",
    "edit_endpoint_text",
    "find_route",
    "handle_deferred_actions",
    "request_current_location",
    "select_from_map",
]
