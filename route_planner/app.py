"""Route Planner - Interactive driving route planning on OpenStreetMap.

Set a start and a destination by typing (with suggestions), by clicking the
map or from the device location, then compute the driving route.

Run: streamlit run route_planner/app.py
"""

import logging
import traceback

import streamlit as st

from route_planner.constants import AppConfig
from route_planner.core.session import PlanningSession
from route_planner.ui import (
    MapRenderer,
    StreamlitUIListener,
    dispatch_click,
    handle_deferred_actions,
    is_signed_in,
    render_controls_panel,
    render_login_page,
)
from route_planner.ui.infra import SESSION_KEY, get_session
from route_planner.ui.pydeck_click_handler import render_pydeck_map

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


# =============================================================================
# SESSION STATE
# =============================================================================


def _new_session() -> PlanningSession:
    return PlanningSession.create(listeners=(StreamlitUIListener(),))


def init_session_state() -> None:
    """Create the PlanningSession once per browser session."""
    if SESSION_KEY not in st.session_state:
        st.session_state[SESSION_KEY] = _new_session()


def reset_ui_state() -> None:
    """Replace the session with a fresh one after an error.

    The map version is carried over and bumped so the map component is
    recreated instead of replaying its last click.
    """
    logger.info("Resetting UI state due to error recovery")
    old_version = get_session().map_layer.version if SESSION_KEY in st.session_state else 0
    session = _new_session()
    session.map_layer.version = old_version
    session.map_layer.invalidate_size()
    st.session_state[SESSION_KEY] = session
    logger.info("UI state reset complete")


# =============================================================================
# MAIN
# =============================================================================


def main() -> None:
    """Application entry point."""
    st.set_page_config(page_title=AppConfig.TITLE, page_icon=AppConfig.ICON, layout=AppConfig.LAYOUT)

    if not is_signed_in():
        render_login_page()
        return

    init_session_state()
    st.title(f"{AppConfig.ICON} {AppConfig.TITLE}")

    try:
        _run_app_ui()
    except Exception as e:
        error_msg = f"{type(e).__name__}: {e}"
        full_traceback = traceback.format_exc()
        logger.error(f"[UI] UI error caught: {error_msg}\n{full_traceback}")

        st.error(f"⚠️ Something went wrong: {error_msg}")
        reset_ui_state()

        if st.button("🔄 Reset and Continue", type="primary"):
            st.rerun()


def _run_app_ui() -> None:
    """Run the planner page. Separated for the error handling wrapper."""
    session = get_session()
    logger.info(
        f"[MAIN] Render cycle starting: active={session.active_field.get_state_name()}, "
        f"map_version={session.map_layer.version}"
    )

    handle_deferred_actions()

    col_ctrl, col_map = st.columns([1, 2])

    with col_ctrl:
        render_controls_panel(session)

    with col_map:
        renderer = MapRenderer(state=session.state, map_layer=session.map_layer)
        click = render_pydeck_map(renderer.render(), key=renderer.component_key)
        if click is not None:
            dispatch_click(click)


if __name__ == "__main__":
    main()
