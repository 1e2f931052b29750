"""Core planning logic, independent of Streamlit rendering.

- GeocodeClient: Nominatim forward search and reverse lookup
- OSRMRoutingEngine: OSRM route service client
- LoadingState: Reference-counted busy flag
- ActiveFieldController: Which endpoint takes the next map click (state machine)
- LocationResolver: Owner of the start/end Endpoints
- MapLayer: Route overlay and click marker
- RouteOrchestrator: Compute, draw and clear the route
- PlanningSession: Wires all of the above around one SessionState
"""

from route_planner.core.active_field import ActiveFieldController
from route_planner.core.context import DeferredContext, SessionState
from route_planner.core.geocode_client import GeocodeClient
from route_planner.core.loading_state import LoadingState
from route_planner.core.location_resolver import LocationResolver
from route_planner.core.map_layer import MapLayer
from route_planner.core.route_orchestrator import RouteOrchestrator
from route_planner.core.routing_engine import OSRMRoutingEngine
from route_planner.core.session import GeolocationProvider, PlanningSession

__all__ = [
    # Services
    "GeocodeClient",
    "OSRMRoutingEngine",
    # State
    "SessionState",
    "DeferredContext",
    "LoadingState",
    "ActiveFieldController",
    # Components
    "LocationResolver",
    "MapLayer",
    "RouteOrchestrator",
    "PlanningSession",
    "GeolocationProvider",
]
