"""Infrastructure utilities for Streamlit UI operations.

Wraps the Streamlit calls actions need (st.rerun, map version) so tests can
patch one place instead of every caller.

Only infrastructure belongs here. Session object access stays in actions.py.
"""

import logging

import streamlit as st
from statemachine import State

from route_planner.core.session import PlanningSession

logger = logging.getLogger(__name__)

SESSION_KEY = "planning_session"


def get_session() -> PlanningSession:
    """The PlanningSession of the current browser session (created by init_session_state)."""
    return st.session_state[SESSION_KEY]


def trigger_rerun(scope: str = "app") -> None:
    """Mockable wrapper around st.rerun(). Raises StopExecution in Streamlit."""
    st.rerun(scope=scope)


def bump_map_version() -> None:
    """Create a fresh map component on the next render.

    The new component key has no memory of previous click events and
    recomputes its viewport.
    """
    session = st.session_state.get(SESSION_KEY)
    if session is None:
        return
    session.map_layer.invalidate_size()


class StreamlitUIListener:
    """python-statemachine listener for active-field transitions.

    Logs every transition. When the target actually changes, the map is
    remounted so a click made for the previous field cannot be replayed for
    the new one.

    Usage:
        session = PlanningSession.create(listeners=(StreamlitUIListener(),))
    """

    def after_transition(self, event: str, source: State, target: State) -> None:
        logger.info(f"[ACTIVE FIELD] {source.name} --({event})--> {target.name}")
        if source != target:
            bump_map_version()
