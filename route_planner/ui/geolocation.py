"""Browser geolocation via streamlit-js-eval.

get_geolocation() renders a hidden component that calls
navigator.geolocation.getCurrentPosition(). The first script run returns
None; the browser's answer arrives with a later rerun as either
{"coords": {"latitude", "longitude", ...}, "timestamp"} or
{"error": {"code", "message"}}.

The request therefore spans reruns: actions set
SessionState.deferred.geolocation_role, and handle_deferred_actions() asks
BrowserGeolocation for the position on each run until it is answered.
"""

import logging
from typing import Any

from streamlit_js_eval import get_geolocation  # type: ignore[import-untyped]

from route_planner.errors import GeolocationUnavailable

logger = logging.getLogger(__name__)

# W3C GeolocationPositionError codes
GEOLOCATION_ERRORS = {
    1: "Location permission denied",
    2: "Location unavailable",
    3: "Location request timed out",
}


class PositionPending(Exception):
    """The browser has not answered yet. Try again on the next rerun."""


def parse_position(payload: Any) -> tuple[float, float]:
    """Convert a browser geolocation payload to (lat, lon).

    Raises:
        GeolocationUnavailable: On an error payload or a payload without coordinates
    """
    if not isinstance(payload, dict):
        raise GeolocationUnavailable()

    error = payload.get("error")
    if error:
        code = error.get("code") if isinstance(error, dict) else None
        reason = GEOLOCATION_ERRORS.get(code) or (error.get("message") if isinstance(error, dict) else None)
        raise GeolocationUnavailable(reason or "Geolocation not supported")

    coords = payload.get("coords") or {}
    try:
        return float(coords["latitude"]), float(coords["longitude"])
    except (KeyError, TypeError, ValueError) as e:
        raise GeolocationUnavailable(f"Invalid position from browser: {e}") from e


class BrowserGeolocation:
    """GeolocationProvider backed by the browser.

    Args:
        attempt: Request counter. Each new request needs a new component key,
            otherwise the component returns the previous answer.
    """

    def __init__(self, attempt: int) -> None:
        self.component_key = f"geolocation_{attempt}"

    def current_position(self) -> tuple[float, float]:
        """Raises PositionPending until the browser answers, then returns or raises GeolocationUnavailable."""
        payload = get_geolocation(component_key=self.component_key)
        if payload is None:
            raise PositionPending()
        logger.debug(f"[GEOLOCATION] Browser payload: {payload!r}")
        return parse_position(payload)
