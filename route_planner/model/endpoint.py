"""Endpoint - One of the two route anchors (start or destination).

An Endpoint holds what the user sees in the input field (text), the resolved
position (coordinates) and the suggestions from the last forward search.

Mutated only through LocationResolver. Two instances exist per planning
session and are reset, never replaced, on clear.
"""

from dataclasses import dataclass, field
from enum import Enum

from route_planner.model.place_candidate import PlaceCandidate

# Internal coordinate order is (lat, lon) - geographic standard.
# Pydeck layers convert to [lon, lat] at render time.
LatLon = tuple[float, float]


class EndpointRole(Enum):
    """Which route anchor an Endpoint represents."""

    START = "start"
    END = "end"

    @property
    def label(self) -> str:
        """Human-friendly name for prompts and banners."""
        return "starting point" if self is EndpointRole.START else "destination"


@dataclass
class Endpoint:
    """Text, coordinates and pending suggestions for one route anchor.

    Attributes:
        role: START or END
        text: Current input field text
        coordinates: (lat, lon) of the last completed resolution, or None
        suggestions: Candidates from the latest forward search
        last_request_id: Request id of the most recently issued lookup for this field.
            Completions carrying an older id are stale and dropped.
    """

    role: EndpointRole
    text: str = ""
    coordinates: LatLon | None = None
    suggestions: list[PlaceCandidate] = field(default_factory=list)
    last_request_id: int = 0

    def clear(self) -> None:
        """Reset to the empty state. Keeps last_request_id so old lookups stay stale."""
        self.text = ""
        self.coordinates = None
        self.suggestions = []

    @property
    def is_resolved(self) -> bool:
        """True if coordinates are available for routing."""
        return self.coordinates is not None

    def __repr__(self) -> str:
        coords = f"({self.coordinates[0]:.5f}, {self.coordinates[1]:.5f})" if self.coordinates else "None"
        return (
            f"Endpoint(role={self.role.value}, text={self.text!r}, coords={coords}, "
            f"suggestions={len(self.suggestions)}, request={self.last_request_id})"
        )
