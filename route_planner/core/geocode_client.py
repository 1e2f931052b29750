"""Geocoding client for the Nominatim HTTP API.

Provides the two lookups the planner needs:
- forward_search: free text -> up to 5 PlaceCandidates (suggestions)
- reverse_lookup: (lat, lon) -> one PlaceCandidate (display name)

No retries. Forward search errors are swallowed into an empty list because
suggestions are optional; reverse lookup errors raise GeocodeUnavailable so
the caller can keep the resolved point and skip the name.

Service: https://nominatim.org/release-docs/develop/api/Overview/
"""

import logging

import requests

from route_planner.constants import GeocodeConfig
from route_planner.errors import GeocodeUnavailable
from route_planner.model.place_candidate import PlaceCandidate

logger = logging.getLogger(__name__)


class GeocodeClient:
    """Nominatim forward/reverse geocoding over a shared requests.Session.

    Example:
        client = GeocodeClient()
        candidates = client.forward_search(query="Gateway of India")
        place = client.reverse_lookup(lat=19.076, lon=72.8777)
    """

    def __init__(
        self,
        base_url: str = GeocodeConfig.BASE_URL,
        user_agent: str = GeocodeConfig.USER_AGENT,
        timeout: float = GeocodeConfig.TIMEOUT_S,
        limit: int = GeocodeConfig.SEARCH_LIMIT,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize client.

        Args:
            base_url: Nominatim server root (no trailing slash needed)
            user_agent: Identifying User-Agent required by the usage policy
            timeout: Seconds to wait for a response before giving up
            limit: Maximum number of forward search results
            session: Optional pre-configured session (tests inject one)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.limit = limit
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": user_agent, "Accept": "application/json"})

    def _get_json(self, path: str, params: dict) -> object:
        """GET a Nominatim endpoint and decode JSON.

        Raises:
            GeocodeUnavailable: On network error, HTTP error status or invalid JSON
        """
        url = f"{self.base_url}/{path}"
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.RequestException as e:
            raise GeocodeUnavailable(f"{path} request failed: {e}") from e
        except ValueError as e:
            raise GeocodeUnavailable(f"{path} returned invalid JSON: {e}") from e

    def forward_search(self, query: str) -> list[PlaceCandidate]:
        """Search places matching free text.

        Queries shorter than GeocodeConfig.MIN_QUERY_LENGTH never reach the service.

        Args:
            query: User-typed text

        Returns:
            Up to `limit` candidates in service order; empty on error or short query.
        """
        if len(query) < GeocodeConfig.MIN_QUERY_LENGTH:
            logger.debug(f"[GEOCODE] Search skipped: {query!r} shorter than {GeocodeConfig.MIN_QUERY_LENGTH} chars")
            return []

        try:
            data = self._get_json("search", params={"q": query, "format": "json", "limit": self.limit})
        except GeocodeUnavailable as e:
            logger.error(f"[GEOCODE] Error fetching suggestions for {query!r}: {e}")
            return []

        if not isinstance(data, list):
            logger.error(f"[GEOCODE] Unexpected search response for {query!r}: {type(data).__name__}")
            return []

        candidates = []
        for item in data[: self.limit]:
            try:
                candidates.append(PlaceCandidate.from_nominatim(item))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(f"[GEOCODE] Skipping malformed search result {item!r}: {e}")

        logger.info(f"[GEOCODE] Search {query!r} -> {len(candidates)} suggestions")
        return candidates

    def reverse_lookup(self, lat: float, lon: float) -> PlaceCandidate:
        """Find the place name at a point.

        Args:
            lat: Latitude in decimal degrees
            lon: Longitude in decimal degrees

        Returns:
            PlaceCandidate with the service's display name. Coordinates are the
            queried point unless the service returns its own.

        Raises:
            GeocodeUnavailable: On service failure or when no place is found
        """
        data = self._get_json("reverse", params={"lat": lat, "lon": lon, "format": "json"})

        if not isinstance(data, dict):
            raise GeocodeUnavailable(f"Unexpected reverse response type: {type(data).__name__}")
        if "error" in data:
            raise GeocodeUnavailable(f"Reverse lookup failed at ({lat:.5f}, {lon:.5f}): {data['error']}")
        if "display_name" not in data:
            raise GeocodeUnavailable(f"Reverse lookup at ({lat:.5f}, {lon:.5f}) has no display_name")

        try:
            place = PlaceCandidate.from_nominatim(data)
        except (KeyError, TypeError, ValueError):
            place = PlaceCandidate(display_name=str(data["display_name"]), lat=lat, lon=lon)

        logger.info(f"[GEOCODE] Reverse ({lat:.5f}, {lon:.5f}) -> {place.display_name!r}")
        return place
