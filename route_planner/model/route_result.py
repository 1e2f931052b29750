"""Route data - request sent to the routing engine and its result.

RouteRequest: exactly two waypoints, no waypoint insertion, no drag rerouting
RouteResult: one computed route (distance, duration, drawable geometry)
RouteDetails: display strings derived from RouteResult (km / minutes)
"""

from dataclasses import dataclass, field

from route_planner.constants import RoutingConfig
from route_planner.model.endpoint import LatLon


@dataclass(frozen=True)
class RouteRequest:
    """Parameters for a single routing-engine call.

    Attributes:
        start: (lat, lon) of the first waypoint
        end: (lat, lon) of the last waypoint
        add_waypoints: Allow the engine/UI to insert intermediate waypoints
        route_while_dragging: Recompute while a waypoint is being dragged
    """

    start: LatLon
    end: LatLon
    add_waypoints: bool = False
    route_while_dragging: bool = False

    @property
    def waypoints(self) -> list[LatLon]:
        """Ordered waypoints (always exactly two)."""
        return [self.start, self.end]


@dataclass(frozen=True)
class RouteDetails:
    """Route summary formatted for display, e.g. distance="15.32", time="28.50"."""

    distance: str  # kilometers, 2 decimal places
    time: str  # minutes, 2 decimal places


@dataclass(frozen=True)
class RouteResult:
    """A computed route.

    Attributes:
        distance_m: Total distance in meters
        duration_s: Total travel time in seconds
        geometry: Path as [[lon, lat], ...] (GeoJSON order, ready for pydeck)
        waypoints: The (lat, lon) waypoints the route was computed for
    """

    distance_m: float
    duration_s: float
    geometry: list[list[float]] = field(default_factory=list)
    waypoints: tuple[LatLon, ...] = ()

    @property
    def distance_km(self) -> float:
        return self.distance_m / RoutingConfig.METERS_PER_KM

    @property
    def duration_min(self) -> float:
        return self.duration_s / RoutingConfig.SECONDS_PER_MINUTE

    @property
    def details(self) -> RouteDetails:
        """Distance in km and time in minutes, both with 2 decimal places."""
        return RouteDetails(distance=f"{self.distance_km:.2f}", time=f"{self.duration_min:.2f}")

    def __repr__(self) -> str:
        return f"RouteResult({self.distance_km:.2f}km, {self.duration_min:.2f}min, {len(self.geometry)} points)"
