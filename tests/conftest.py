"""Shared pytest fixtures for route_planner tests.

Provides fake collaborators for the three external services (geocoding,
routing, device position) so planner tests never touch the network.

COORDINATES:
    Tests use points around Mumbai, the default map center:
    START (19.0760, 72.8777) and END (19.2183, 72.9781).
"""

from collections.abc import Callable
from typing import Any
from unittest.mock import MagicMock

import pytest
import requests

from route_planner.core.session import PlanningSession
from route_planner.errors import GeocodeUnavailable, GeolocationUnavailable, RouteNotFound
from route_planner.model.place_candidate import PlaceCandidate
from route_planner.model.route_result import RouteRequest, RouteResult

START = (19.0760, 72.8777)
END = (19.2183, 72.9781)

GATEWAY = PlaceCandidate(display_name="Gateway of India, Apollo Bandar, Mumbai", lat=18.9220, lon=72.8347)
GATEWAY_HOTEL = PlaceCandidate(display_name="Gateway Hotel, Colaba, Mumbai", lat=18.9210, lon=72.8330)
THANE = PlaceCandidate(display_name="Thane, Maharashtra, India", lat=19.2183, lon=72.9781)


# =============================================================================
# FAKE SERVICES
# =============================================================================


class FakeGeocodeClient:
    """In-memory geocoder recording every call.

    Args:
        search_results: query -> candidates. Unknown queries return [].
        reverse_results: (lat, lon) -> candidate. Unknown points raise GeocodeUnavailable.
        on_search: Optional hook run during a search (simulates the user typing meanwhile)
    """

    def __init__(
        self,
        search_results: dict[str, list[PlaceCandidate]] | None = None,
        reverse_results: dict[tuple[float, float], PlaceCandidate] | None = None,
        on_search: Callable[[str], None] | None = None,
    ) -> None:
        self.search_results = search_results or {}
        self.reverse_results = reverse_results or {}
        self.on_search = on_search
        self.search_calls: list[str] = []
        self.reverse_calls: list[tuple[float, float]] = []

    def forward_search(self, query: str) -> list[PlaceCandidate]:
        self.search_calls.append(query)
        if self.on_search is not None:
            self.on_search(query)
        return list(self.search_results.get(query, []))

    def reverse_lookup(self, lat: float, lon: float) -> PlaceCandidate:
        self.reverse_calls.append((lat, lon))
        if (lat, lon) not in self.reverse_results:
            raise GeocodeUnavailable(f"No place at ({lat}, {lon})")
        return self.reverse_results[(lat, lon)]


class FakeRoutingEngine:
    """Routing engine returning a fixed result or raising a fixed error."""

    def __init__(self, result: RouteResult | None = None, error: Exception | None = None) -> None:
        self.result = result
        self.error = error
        self.requests: list[RouteRequest] = []

    def route(self, request: RouteRequest) -> RouteResult:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.result is None:
            raise RouteNotFound("No route configured")
        return RouteResult(
            distance_m=self.result.distance_m,
            duration_s=self.result.duration_s,
            geometry=self.result.geometry,
            waypoints=tuple(request.waypoints),
        )


class FakeGeolocation:
    """Device position provider with a fixed answer."""

    def __init__(self, position: tuple[float, float] | None = None, reason: str = "Location permission denied") -> None:
        self.position = position
        self.reason = reason
        self.calls = 0

    def current_position(self) -> tuple[float, float]:
        self.calls += 1
        if self.position is None:
            raise GeolocationUnavailable(self.reason)
        return self.position


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def mumbai_route() -> RouteResult:
    """15.32 km / 28.5 min route from START to END."""
    return RouteResult(
        distance_m=15320.0,
        duration_s=1710.0,
        geometry=[[START[1], START[0]], [72.93, 19.15], [END[1], END[0]]],
    )


@pytest.fixture
def geocoder() -> FakeGeocodeClient:
    return FakeGeocodeClient(
        search_results={
            "Gateway": [GATEWAY, GATEWAY_HOTEL],
            "Thane": [THANE],
        },
        reverse_results={
            START: PlaceCandidate(display_name="Bandra Kurla Complex, Mumbai", lat=START[0], lon=START[1]),
            END: THANE,
        },
    )


@pytest.fixture
def engine(mumbai_route: RouteResult) -> FakeRoutingEngine:
    return FakeRoutingEngine(result=mumbai_route)


@pytest.fixture
def session(geocoder: FakeGeocodeClient, engine: FakeRoutingEngine) -> PlanningSession:
    """Planning session wired to fakes, no UI listener."""
    return PlanningSession.create(geocoder=geocoder, engine=engine)  # type: ignore[arg-type]


@pytest.fixture
def resolved_session(session: PlanningSession) -> PlanningSession:
    """Session with both endpoints resolved to START and END."""
    session.resolver.apply_candidate(
        session.state.start.role, PlaceCandidate(display_name="Start place", lat=START[0], lon=START[1])
    )
    session.resolver.apply_candidate(session.state.end.role, THANE)
    return session


@pytest.fixture
def fake_st(session: PlanningSession, monkeypatch: pytest.MonkeyPatch) -> MagicMock:
    """Replace the streamlit module used by actions/infra with a mock holding a real session_state dict."""
    from route_planner.ui import actions, infra

    st_mock = MagicMock()
    st_mock.session_state = {infra.SESSION_KEY: session}
    monkeypatch.setattr(infra, "st", st_mock)
    monkeypatch.setattr(actions, "st", st_mock)
    return st_mock


@pytest.fixture
def http_response() -> Callable[..., MagicMock]:
    """Factory for mock requests.Response objects."""
    return _http_response


def _http_response(json_data: Any = None, status_code: int = 200, json_error: bool = False) -> MagicMock:
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    if json_error:
        response.json.side_effect = ValueError("Expecting value")
    else:
        response.json.return_value = json_data
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status_code} Error")
    else:
        response.raise_for_status.return_value = None
    return response


@pytest.fixture
def fake_geolocation() -> type[FakeGeolocation]:
    """The FakeGeolocation class, for tests that build providers with their own answer."""
    return FakeGeolocation
