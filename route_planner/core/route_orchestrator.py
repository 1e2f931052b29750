"""RouteOrchestrator - Computes, draws and clears the single route.

Flow of compute_route():
1. Validate that both endpoints have coordinates (IncompleteEndpoints)
2. Retract the live overlay so at most one route is ever drawn
3. Ask the routing engine for a two-waypoint route while the busy flag is held
4. Store the RouteResult and draw its overlay

Engine failures propagate as RouteNotFound/RoutingUnavailable after the
busy flag has been released.
"""

import logging

from route_planner.core.active_field import ActiveFieldController
from route_planner.core.location_resolver import LocationResolver
from route_planner.core.loading_state import LoadingState
from route_planner.core.map_layer import MapLayer
from route_planner.core.routing_engine import OSRMRoutingEngine
from route_planner.errors import IncompleteEndpoints
from route_planner.model.endpoint import EndpointRole, LatLon
from route_planner.model.route_result import RouteDetails, RouteRequest, RouteResult

logger = logging.getLogger(__name__)


class RouteOrchestrator:
    """Owns the live RouteResult and its overlay."""

    def __init__(
        self,
        engine: OSRMRoutingEngine,
        map_layer: MapLayer,
        loading: LoadingState,
        resolver: LocationResolver,
        active_field: ActiveFieldController,
    ) -> None:
        self.engine = engine
        self.map_layer = map_layer
        self.loading = loading
        self.resolver = resolver
        self.active_field = active_field
        self.route: RouteResult | None = None

    @property
    def details(self) -> RouteDetails | None:
        """Formatted distance/time of the live route."""
        return self.route.details if self.route is not None else None

    def compute_route(self, start: LatLon | None, end: LatLon | None) -> RouteResult:
        """Compute and draw the route between two points.

        Raises:
            IncompleteEndpoints: If either point is missing (engine not called)
            RouteNotFound: If the engine has no route
            RoutingUnavailable: If the engine cannot be reached
        """
        missing = tuple(
            role.label for role, coords in ((EndpointRole.START, start), (EndpointRole.END, end)) if coords is None
        )
        if missing:
            raise IncompleteEndpoints(missing=missing)

        self._retract()
        request = RouteRequest(start=start, end=end)  # type: ignore[arg-type]
        with self.loading.track("route"):
            result = self.engine.route(request)

        self.route = result
        self.map_layer.add_overlay(result)
        logger.info(f"[ROUTE] Distance: {result.details.distance} km, Time: {result.details.time} mins")
        return result

    def find_route(self) -> RouteResult:
        """Compute the route between the resolver's current endpoints."""
        return self.compute_route(
            start=self.resolver.endpoint(EndpointRole.START).coordinates,
            end=self.resolver.endpoint(EndpointRole.END).coordinates,
        )

    def clear_route(self) -> None:
        """Reset the planner: route, overlay, click marker, endpoints and active field."""
        self._retract()
        self.map_layer.remove_click_marker()
        self.resolver.clear()
        self.active_field.clear_target()
        logger.info("[ROUTE] Cleared")

    def _retract(self) -> None:
        self.map_layer.remove_overlay()
        self.route = None
