"""Data model classes for route planning.

- PlaceCandidate: One geocoding result (name + coordinates)
- Endpoint: Start or destination anchor (text, coordinates, suggestions)
- PendingLookup: Issued geocode request waiting to settle
- RouteRequest / RouteResult / RouteDetails: Routing engine input and output
- Message / ToastMessage: User-facing messages
"""

from route_planner.model.endpoint import Endpoint, EndpointRole, LatLon
from route_planner.model.pending_lookup import LookupKind, PendingLookup, ResolutionSource
from route_planner.model.place_candidate import PlaceCandidate
from route_planner.model.route_result import RouteDetails, RouteRequest, RouteResult

__all__ = [
    "LatLon",
    "EndpointRole",
    "Endpoint",
    "PlaceCandidate",
    "LookupKind",
    "ResolutionSource",
    "PendingLookup",
    "RouteRequest",
    "RouteResult",
    "RouteDetails",
]
