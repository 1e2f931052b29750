"""Session state for one planning session.

SessionState is the single explicit object holding all mutable planning
state. It is stored in st.session_state and passed by reference to the
components that mutate it:

- LocationResolver: start/end Endpoints, pending lookups
- ActiveFieldController: `state` (python-statemachine model field)
- UI actions: deferred flags

Contexts are pure data holders - no business logic.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from route_planner.model.endpoint import Endpoint, EndpointRole
from route_planner.model.pending_lookup import PendingLookup


@dataclass
class DeferredContext:
    """Deferred action flags for work that runs on the next render cycle.

    When set, handle_deferred_actions() performs the work at the start of the
    next script run.
    """

    geolocation_role: EndpointRole | None = None  # Waiting for browser position
    geolocation_attempt: int = 0  # Bumped per request, keys the browser component

    def request_geolocation(self, role: EndpointRole) -> None:
        self.geolocation_role = role
        self.geolocation_attempt += 1

    def clear(self) -> None:
        self.geolocation_role = None


@dataclass
class SessionState:
    """Shared context/model for the planning session.

    Note: The 'state' field is managed by python-statemachine when this
    object is passed as the ActiveFieldController model. It stores the
    current active-field state value.
    """

    # State managed by python-statemachine (model pattern)
    state: str | None = None

    start: Endpoint = field(default_factory=lambda: Endpoint(role=EndpointRole.START))
    end: Endpoint = field(default_factory=lambda: Endpoint(role=EndpointRole.END))

    # Issued lookups waiting for the deferred pass, oldest first
    pending: list[PendingLookup] = field(default_factory=list)
    deferred: DeferredContext = field(default_factory=DeferredContext)

    # Monotonic source for per-field request ids
    _request_counter: int = 0

    def endpoint(self, role: EndpointRole) -> Endpoint:
        """Return the Endpoint for a role."""
        return self.start if role == EndpointRole.START else self.end

    def next_request_id(self, role: EndpointRole) -> int:
        """Issue a new request id and record it as the field's latest.

        Ids increase across both fields, so each field's sequence is monotonic.
        """
        self._request_counter += 1
        self.endpoint(role).last_request_id = self._request_counter
        return self._request_counter

    def is_latest(self, lookup: PendingLookup) -> bool:
        """True if no newer request was issued for the lookup's field."""
        return self.endpoint(lookup.role).last_request_id == lookup.request_id

    def __repr__(self) -> str:
        return (
            f"SessionState(active={self.state}, start={self.start!r}, end={self.end!r}, "
            f"pending={len(self.pending)})"
        )
