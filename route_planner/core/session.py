"""PlanningSession - Wires the planner components around one SessionState.

One instance lives in st.session_state per browser session. The UI talks to
the planner only through this object and the components it exposes.
"""

import logging
from typing import Any, Protocol

from route_planner.constants import ResolverConfig
from route_planner.core.active_field import ActiveFieldController
from route_planner.core.context import SessionState
from route_planner.core.geocode_client import GeocodeClient
from route_planner.core.loading_state import LoadingState
from route_planner.core.location_resolver import LocationResolver
from route_planner.core.map_layer import MapLayer
from route_planner.core.route_orchestrator import RouteOrchestrator
from route_planner.core.routing_engine import OSRMRoutingEngine
from route_planner.errors import GeolocationUnavailable
from route_planner.model.endpoint import EndpointRole
from route_planner.model.pending_lookup import PendingLookup, ResolutionSource
from route_planner.model.route_result import RouteResult

logger = logging.getLogger(__name__)


class GeolocationProvider(Protocol):
    def current_position(self) -> tuple[float, float]:
        """Return (lat, lon) of the device or raise GeolocationUnavailable."""
        ...


class PlanningSession:
    """Facade over resolver, active field, orchestrator and map layer."""

    def __init__(
        self,
        state: SessionState,
        geocoder: GeocodeClient,
        engine: OSRMRoutingEngine,
        clear_coordinates_on_edit: bool = ResolverConfig.CLEAR_COORDINATES_ON_EDIT,
    ) -> None:
        self.state = state
        self.loading = LoadingState()
        self.map_layer = MapLayer()
        self.active_field = ActiveFieldController(context=state)

        self.resolver = LocationResolver(
            state=state,
            geocoder=geocoder,
            loading=self.loading,
            active_field=self.active_field,
            clear_coordinates_on_edit=clear_coordinates_on_edit,
        )
        self.orchestrator = RouteOrchestrator(
            engine=engine,
            map_layer=self.map_layer,
            loading=self.loading,
            resolver=self.resolver,
            active_field=self.active_field,
        )

    @staticmethod
    def create(
        geocoder: GeocodeClient | None = None,
        engine: OSRMRoutingEngine | None = None,
        listeners: tuple[Any, ...] = (),
    ) -> "PlanningSession":
        """Factory with default HTTP clients.

        Args:
            geocoder: Geocoding client (Nominatim client if None)
            engine: Routing engine (OSRM client if None)
            listeners: python-statemachine listeners for the active field,
                e.g. StreamlitUIListener. Leave empty for tests.
        """
        session = PlanningSession(
            state=SessionState(),
            geocoder=geocoder or GeocodeClient(),
            engine=engine or OSRMRoutingEngine(),
        )
        for listener in listeners:
            session.active_field.add_listener(listener)
        logger.info(f"Created PlanningSession with {len(listeners)} listener(s)")
        return session

    @property
    def is_busy(self) -> bool:
        return self.loading.is_busy

    # ==========================================================================
    # Input modalities
    # ==========================================================================

    def select_from_map(self, role: EndpointRole) -> None:
        """Make `role` receive the next map clicks."""
        self.active_field.target(role)

    def handle_map_click(self, lat: float, lon: float) -> PendingLookup:
        """Resolve the active field to the clicked point.

        Raises:
            NoActiveField: If no field is targeted. Nothing is mutated and no
                marker is placed.
        """
        role = self.active_field.require_target()
        self.map_layer.place_click_marker(lat=lat, lon=lon)
        return self.resolver.resolve_point(role, lat=lat, lon=lon, source=ResolutionSource.MAP_CLICK)

    def use_current_location(self, role: EndpointRole, provider: GeolocationProvider) -> PendingLookup:
        """Resolve `role` to the device position.

        Raises:
            GeolocationUnavailable: If the provider fails. The endpoint is unchanged.
        """
        with self.loading.track("geolocation"):
            lat, lon = provider.current_position()
        logger.info(f"[GEOLOCATION] {role.value} at ({lat:.5f}, {lon:.5f})")
        return self.resolver.resolve_point(role, lat=lat, lon=lon, source=ResolutionSource.GEOLOCATION)

    def request_current_location(self, role: EndpointRole) -> None:
        """Ask for the device position of `role`, answered over later reruns.

        The busy flag is held from here until poll_current_location() settles
        the request or cancel_current_location() drops it. A repeated request
        retargets the outstanding one.
        """
        deferred = self.state.deferred
        if deferred.geolocation_role is None:
            self.loading.begin("geolocation")
        deferred.request_geolocation(role)
        logger.info(f"[GEOLOCATION] Requested for {role.value} (attempt {deferred.geolocation_attempt})")

    def poll_current_location(self, provider: GeolocationProvider) -> PendingLookup | None:
        """Try to settle the outstanding device position request.

        Returns None when nothing is outstanding. Exceptions other than
        GeolocationUnavailable (a provider still waiting for the browser)
        propagate and keep the request open.

        Raises:
            GeolocationUnavailable: The request is settled, endpoint unchanged.
        """
        role = self.state.deferred.geolocation_role
        if role is None:
            return None
        try:
            lookup = self.use_current_location(role, provider)
        except GeolocationUnavailable:
            self._settle_current_location()
            raise
        self._settle_current_location()
        return lookup

    def cancel_current_location(self) -> None:
        if self.state.deferred.geolocation_role is not None:
            logger.info("[GEOLOCATION] Request cancelled")
            self._settle_current_location()

    def _settle_current_location(self) -> None:
        self.state.deferred.clear()
        self.loading.end("geolocation")

    def process_pending(self) -> int:
        """Run queued geocode lookups. Called from the deferred-action pass."""
        return self.resolver.run_pending()

    # ==========================================================================
    # Route
    # ==========================================================================

    def find_route(self) -> RouteResult:
        return self.orchestrator.find_route()

    def clear(self) -> None:
        self.cancel_current_location()
        self.orchestrator.clear_route()

    def __repr__(self) -> str:
        return f"PlanningSession({self.state!r}, {self.loading!r}, {self.map_layer!r})"
