"""MapLayer - What is drawn on the map besides the basemap.

Holds at most one route overlay and at most one click marker. The renderer
reads this object each run; only RouteOrchestrator and the click handler
mutate it.

`version` is part of the map component key. invalidate_size() bumps it so
the next render creates a fresh component instance, which recomputes the
viewport and forgets stale click events.
"""

import logging

from route_planner.model.endpoint import LatLon
from route_planner.model.route_result import RouteResult

logger = logging.getLogger(__name__)


class MapLayer:
    def __init__(self) -> None:
        self.click_marker: LatLon | None = None
        self.route_overlay: RouteResult | None = None
        self.version = 0

    def place_click_marker(self, lat: float, lon: float) -> None:
        """Show the marker at the clicked point, replacing any previous one."""
        self.click_marker = (lat, lon)
        logger.debug(f"[MAP] Click marker at ({lat:.5f}, {lon:.5f})")

    def remove_click_marker(self) -> None:
        self.click_marker = None

    def add_overlay(self, route: RouteResult) -> None:
        """Draw a route.

        Raises:
            RuntimeError: If an overlay is already live (retract it first)
        """
        if self.route_overlay is not None:
            raise RuntimeError(f"Route overlay already live: {self.route_overlay!r}")
        self.route_overlay = route
        logger.info(f"[MAP] Overlay added: {route!r}")

    def remove_overlay(self) -> bool:
        """Retract the live overlay. Returns False if there was none."""
        if self.route_overlay is None:
            return False
        logger.info(f"[MAP] Overlay removed: {self.route_overlay!r}")
        self.route_overlay = None
        return True

    def invalidate_size(self) -> int:
        """Force a fresh map component on the next render."""
        self.version += 1
        logger.info(f"[MAP] Bumped map version -> {self.version}")
        return self.version

    def __repr__(self) -> str:
        return f"MapLayer(version={self.version}, overlay={self.route_overlay!r}, marker={self.click_marker})"
