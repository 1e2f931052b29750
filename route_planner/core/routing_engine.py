"""Routing engine client for the OSRM HTTP API.

Sole responsibility: talk to OSRM and return a normalized RouteResult.
Encapsulates the OSRM-specific details:
- coordinate formatting (internal (lat, lon) -> OSRM "lon,lat;lon,lat")
- URL construction (/route/v1/{profile}/...)
- response validation ("code" must be "Ok" and at least one route)

Only the first route is used; alternatives are never requested.

Service: https://project-osrm.org/docs/v5.24.0/api/#route-service
"""

import logging

import requests

from route_planner.constants import RoutingConfig
from route_planner.errors import RouteNotFound, RoutingUnavailable
from route_planner.model.endpoint import LatLon
from route_planner.model.route_result import RouteRequest, RouteResult

logger = logging.getLogger(__name__)


class OSRMRoutingEngine:
    """OSRM /route client.

    Example:
        engine = OSRMRoutingEngine()
        result = engine.route(RouteRequest(start=(19.076, 72.8777), end=(19.2183, 72.9781)))
    """

    def __init__(
        self,
        base_url: str = RoutingConfig.BASE_URL,
        profile: str = RoutingConfig.PROFILE,
        timeout: float = RoutingConfig.TIMEOUT_S,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize engine client.

        Args:
            base_url: OSRM server root
            profile: Travel mode (driving, walking, cycling)
            timeout: Seconds to wait for a response before giving up
            session: Optional pre-configured session (tests inject one)
        """
        self.base_url = base_url.rstrip("/")
        self.profile = profile
        self.timeout = timeout
        self.session = session or requests.Session()

    @staticmethod
    def format_coordinates(coords: list[LatLon]) -> str:
        """Convert list of (lat, lon) to OSRM format 'lon,lat;lon,lat;...'."""
        return ";".join(f"{lon},{lat}" for lat, lon in coords)

    def route(self, request: RouteRequest) -> RouteResult:
        """Compute a route through exactly two waypoints.

        Args:
            request: Start/end waypoints and interaction options

        Returns:
            RouteResult with distance (m), duration (s) and [lon, lat] geometry.

        Raises:
            RoutingUnavailable: On network error, HTTP error status or invalid JSON
            RouteNotFound: If OSRM answers but has no route between the points
        """
        waypoints = request.waypoints
        if len(waypoints) != RoutingConfig.WAYPOINT_COUNT:
            raise ValueError(f"Route requires exactly {RoutingConfig.WAYPOINT_COUNT} waypoints, got {len(waypoints)}")

        url = f"{self.base_url}/route/v1/{self.profile}/{self.format_coordinates(waypoints)}"
        params = {
            "overview": "full",
            "geometries": "geojson",
            "alternatives": "false",
            "steps": "false",
        }

        logger.info(f"[ROUTE] Requesting {self.profile} route {waypoints[0]} -> {waypoints[1]}")
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise RoutingUnavailable(f"Routing service unreachable: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise RoutingUnavailable(f"Routing service returned invalid JSON (HTTP {response.status_code})") from e

        # OSRM returns 400 with code "NoRoute"/"InvalidQuery" and a JSON body
        code = data.get("code") if isinstance(data, dict) else None
        if code is None:
            raise RoutingUnavailable(f"Unexpected routing response (HTTP {response.status_code})")
        if code != "Ok":
            raise RouteNotFound(data.get("message") or code)

        routes = data.get("routes") or []
        if not routes:
            raise RouteNotFound("Routing engine returned no routes")

        route = routes[0]
        geometry = route.get("geometry") or {}
        result = RouteResult(
            distance_m=float(route["distance"]),
            duration_s=float(route["duration"]),
            geometry=[[float(lon), float(lat)] for lon, lat, *_ in geometry.get("coordinates", [])],
            waypoints=tuple(waypoints),
        )
        logger.info(f"[ROUTE] Routes found: {result!r}")
        return result
