"""LocationResolver - Canonical owner of the start and end Endpoints.

All three input modalities funnel through here:
- typing: edit_text() -> forward search -> suggestions -> select_suggestion()
- map click: resolve_point(source=MAP_CLICK) -> reverse lookup
- device location: resolve_point(source=GEOLOCATION) -> reverse lookup

Geocode calls are never made inline. Each issued lookup is queued on the
SessionState and executed by run_pending() in the deferred-action pass at the
start of the next render. Every issue/modification of a field bumps its
request id; a lookup whose id is no longer the field's latest is skipped
before its call and discarded on completion.
"""

import logging

from route_planner.constants import GeocodeConfig, ResolverConfig
from route_planner.core.active_field import ActiveFieldController
from route_planner.core.context import SessionState
from route_planner.core.geocode_client import GeocodeClient
from route_planner.core.loading_state import LoadingState
from route_planner.errors import GeocodeUnavailable
from route_planner.model.endpoint import Endpoint, EndpointRole
from route_planner.model.pending_lookup import LookupKind, PendingLookup, ResolutionSource
from route_planner.model.place_candidate import PlaceCandidate

logger = logging.getLogger(__name__)


class LocationResolver:
    """Mediates text, suggestion, map-click and geolocation input for both endpoints."""

    def __init__(
        self,
        state: SessionState,
        geocoder: GeocodeClient,
        loading: LoadingState,
        active_field: ActiveFieldController,
        clear_coordinates_on_edit: bool = ResolverConfig.CLEAR_COORDINATES_ON_EDIT,
    ) -> None:
        self.state = state
        self.geocoder = geocoder
        self.loading = loading
        self.active_field = active_field
        self.clear_coordinates_on_edit = clear_coordinates_on_edit

    def endpoint(self, role: EndpointRole) -> Endpoint:
        return self.state.endpoint(role)

    # ==========================================================================
    # Issuing
    # ==========================================================================

    def edit_text(self, role: EndpointRole, text: str) -> PendingLookup | None:
        """Apply a text edit to an endpoint and make it the active field.

        Issues a forward search when the text is long enough. Shorter text
        still invalidates any in-flight search but leaves suggestions as they are.

        Returns:
            The queued lookup, or None if no search was issued.
        """
        endpoint = self.endpoint(role)
        endpoint.text = text
        if self.clear_coordinates_on_edit:
            endpoint.coordinates = None
        self.active_field.target(role)

        request_id = self.state.next_request_id(role)
        if len(text) < GeocodeConfig.MIN_QUERY_LENGTH:
            logger.debug(f"[GEOCODE] {role.value}: {text!r} too short, no search issued")
            return None

        lookup = PendingLookup(
            role=role,
            request_id=request_id,
            kind=LookupKind.FORWARD_SEARCH,
            source=ResolutionSource.TYPED,
            query=text,
        )
        self._issue(lookup)
        return lookup

    def resolve_point(self, role: EndpointRole, lat: float, lon: float, source: ResolutionSource) -> PendingLookup:
        """Queue a reverse lookup that will resolve `role` to the given point."""
        lookup = PendingLookup(
            role=role,
            request_id=self.state.next_request_id(role),
            kind=LookupKind.REVERSE_LOOKUP,
            source=source,
            coordinates=(lat, lon),
        )
        self._issue(lookup)
        return lookup

    def _issue(self, lookup: PendingLookup) -> None:
        self.state.pending.append(lookup)
        self.loading.begin(lookup.display_name)
        logger.info(f"[GEOCODE] Issued {lookup.display_name}")

    # ==========================================================================
    # Direct resolution
    # ==========================================================================

    def select_suggestion(self, role: EndpointRole, index: int) -> PlaceCandidate:
        """Resolve an endpoint from one of its current suggestions.

        Raises:
            IndexError: If index is not a current suggestion
        """
        candidate = self.endpoint(role).suggestions[index]
        self.apply_candidate(role, candidate)
        return candidate

    def apply_candidate(self, role: EndpointRole, candidate: PlaceCandidate) -> None:
        """Take text and coordinates from a candidate. In-flight lookups become stale."""
        self.state.next_request_id(role)
        endpoint = self.endpoint(role)
        endpoint.text = candidate.display_name
        endpoint.coordinates = candidate.coordinates
        endpoint.suggestions = []
        logger.info(f"[GEOCODE] {role.value} resolved from suggestion: {endpoint!r}")

    def clear_endpoint(self, role: EndpointRole) -> None:
        self.state.next_request_id(role)
        self.endpoint(role).clear()
        logger.info(f"[GEOCODE] Cleared {role.value}")

    def clear(self) -> None:
        """Reset both endpoints to empty text, no coordinates, no suggestions."""
        for role in EndpointRole:
            self.clear_endpoint(role)

    # ==========================================================================
    # Settling
    # ==========================================================================

    def run(self, lookup: PendingLookup) -> bool:
        """Execute one lookup and apply its result if it is still current.

        The loading counter is released whatever the outcome.

        Returns:
            True if the result was applied, False if the lookup was stale.
        """
        try:
            if not self.state.is_latest(lookup):
                logger.info(f"[GEOCODE] Skipping stale {lookup.display_name}")
                return False
            if lookup.kind == LookupKind.FORWARD_SEARCH:
                return self._run_forward_search(lookup)
            return self._run_reverse_lookup(lookup)
        finally:
            self.loading.end(lookup.display_name)

    def run_pending(self) -> int:
        """Drain the pending queue in issue order.

        Returns:
            Number of lookups whose result was applied.
        """
        applied = 0
        while self.state.pending:
            lookup = self.state.pending.pop(0)
            if self.run(lookup):
                applied += 1
        return applied

    def _run_forward_search(self, lookup: PendingLookup) -> bool:
        candidates = self.geocoder.forward_search(query=lookup.query)  # type: ignore[arg-type]
        if not self.state.is_latest(lookup):
            logger.info(f"[GEOCODE] Discarding stale result of {lookup.display_name}")
            return False
        self.endpoint(lookup.role).suggestions = candidates
        return True

    def _run_reverse_lookup(self, lookup: PendingLookup) -> bool:
        lat, lon = lookup.coordinates  # type: ignore[misc]
        place: PlaceCandidate | None
        try:
            place = self.geocoder.reverse_lookup(lat=lat, lon=lon)
        except GeocodeUnavailable as e:
            logger.warning(f"[GEOCODE] Reverse lookup failed, keeping point only: {e}")
            place = None

        if not self.state.is_latest(lookup):
            logger.info(f"[GEOCODE] Discarding stale result of {lookup.display_name}")
            return False

        # The queried point wins; the lookup only names it.
        endpoint = self.endpoint(lookup.role)
        endpoint.coordinates = (lat, lon)
        if place is not None:
            endpoint.text = place.display_name
        endpoint.suggestions = []
        logger.info(f"[GEOCODE] {lookup.role.value} resolved via {lookup.source.value}: {endpoint!r}")
        return True
