"""PendingLookup - An issued geocode request that has not settled yet.

Every lookup carries the request id that was current for its field when it
was issued. LocationResolver compares it to Endpoint.last_request_id on
completion and drops it if a newer request has been issued since.
"""

from dataclasses import dataclass
from enum import Enum

from route_planner.model.endpoint import EndpointRole, LatLon


class LookupKind(Enum):
    """Direction of the geocoding call."""

    FORWARD_SEARCH = "forward_search"  # text -> candidates
    REVERSE_LOOKUP = "reverse_lookup"  # point -> display name


class ResolutionSource(Enum):
    """Which input modality produced the lookup."""

    TYPED = "typed"
    MAP_CLICK = "map_click"
    GEOLOCATION = "geolocation"


@dataclass(frozen=True)
class PendingLookup:
    """A geocode request waiting to be executed and settled.

    STRICT CONTRACT:
    - FORWARD_SEARCH: query is set, coordinates is None
    - REVERSE_LOOKUP: coordinates is set, query is None
    """

    role: EndpointRole
    request_id: int
    kind: LookupKind
    source: ResolutionSource
    query: str | None = None
    coordinates: LatLon | None = None

    def __post_init__(self) -> None:
        if self.kind == LookupKind.FORWARD_SEARCH:
            if self.query is None or self.coordinates is not None:
                raise ValueError("FORWARD_SEARCH lookup must have query and no coordinates")
        elif self.kind == LookupKind.REVERSE_LOOKUP:
            if self.coordinates is None or self.query is not None:
                raise ValueError("REVERSE_LOOKUP lookup must have coordinates and no query")

    @property
    def display_name(self) -> str:
        """Short description for logging."""
        if self.kind == LookupKind.FORWARD_SEARCH:
            return f"search #{self.request_id} [{self.role.value}] {self.query!r}"
        lat, lon = self.coordinates  # type: ignore[misc]
        return f"reverse #{self.request_id} [{self.role.value}] ({lat:.5f}, {lon:.5f}) via {self.source.value}"
