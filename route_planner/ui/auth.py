"""Sign-in gate using Streamlit's built-in OIDC authentication.

st.login() redirects to the provider configured under [auth] in
.streamlit/secrets.toml (Authlib must be installed). st.user carries the
signed-in identity across reruns; st.logout() clears it.
"""

import logging

import streamlit as st
from streamlit.errors import StreamlitAPIException

from route_planner.constants import AppConfig, AuthConfig
from route_planner.model.message import LoginFailedMessage

logger = logging.getLogger(__name__)


def is_signed_in() -> bool:
    """True if the planner may be shown."""
    if not AuthConfig.REQUIRE_LOGIN:
        return True
    return bool(st.user.is_logged_in)


def _start_login() -> None:
    try:
        st.login(AuthConfig.PROVIDER)
    except StreamlitAPIException as e:
        logger.error(f"[AUTH] Sign-in failed: {e}")
        st.session_state["_login_failed"] = True


def render_login_page() -> None:
    """Landing page shown to signed-out users."""
    _, col_center, _ = st.columns([1, 2, 1])
    with col_center:
        st.header(f"{AppConfig.ICON} Welcome to {AppConfig.TITLE}")
        st.write("Sign in to access your personalized route planning experience")
        st.button(
            f"Sign in with {AuthConfig.PROVIDER_LABEL}",
            type="primary",
            on_click=_start_login,
            width="stretch",
        )
        if st.session_state.pop("_login_failed", False):
            LoginFailedMessage().display()
        st.caption(f"Secure authentication powered by {AuthConfig.PROVIDER_LABEL}")


def render_user_badge() -> None:
    """Signed-in user's name and the logout button."""
    if not AuthConfig.REQUIRE_LOGIN:
        return
    name = st.user.get("name") or st.user.get("email") or "Signed in"
    st.caption(f"👤 {name}")
    if st.button("Logout"):
        logger.info(f"[AUTH] Logout: {name}")
        st.logout()
