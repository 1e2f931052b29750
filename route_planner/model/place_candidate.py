"""PlaceCandidate - A single geocoding result."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PlaceCandidate:
    """A named place with coordinates, produced by GeocodeClient.

    Immutable. Consumed once when the user picks it as a suggestion.

    Attributes:
        display_name: Full place name as returned by the geocoder
        lat: Latitude in decimal degrees (WGS84)
        lon: Longitude in decimal degrees (WGS84)
    """

    display_name: str
    lat: float
    lon: float

    @property
    def coordinates(self) -> tuple[float, float]:
        """Return (lat, lon) tuple."""
        return (self.lat, self.lon)

    @staticmethod
    def from_nominatim(item: dict) -> "PlaceCandidate":
        """Build from one Nominatim JSON object.

        Nominatim encodes lat/lon as strings.

        Raises:
            KeyError: If display_name, lat or lon is missing
            ValueError: If lat/lon cannot be parsed as float
        """
        return PlaceCandidate(
            display_name=str(item["display_name"]),
            lat=float(item["lat"]),
            lon=float(item["lon"]),
        )
