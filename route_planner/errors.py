"""Exceptions for route planning failures.

Every error that reaches the user maps to a ToastMessage via to_message().
GeocodeUnavailable is recovered where it is raised and never shown.
"""

from route_planner.model.message import (
    GeolocationUnavailableMessage,
    IncompleteEndpointsMessage,
    NoActiveFieldMessage,
    RouteNotFoundMessage,
    ToastMessage,
)


class RoutePlannerError(Exception):
    """Base class for all route planner errors."""

    def to_message(self) -> ToastMessage | None:
        """User-facing message for this error, or None if it stays silent."""
        return None


class GeocodeUnavailable(RoutePlannerError):
    """Network or service failure during forward search or reverse lookup."""


class IncompleteEndpoints(RoutePlannerError):
    """Route requested before both endpoints have coordinates."""

    def __init__(self, missing: tuple[str, ...]) -> None:
        self.missing = missing
        super().__init__(f"Endpoints without coordinates: {', '.join(missing)}")

    def to_message(self) -> ToastMessage:
        return IncompleteEndpointsMessage(missing=self.missing)


class NoActiveField(RoutePlannerError):
    """Map clicked while no endpoint is selected as click target."""

    def __init__(self) -> None:
        super().__init__("No active field selected for map click")

    def to_message(self) -> ToastMessage:
        return NoActiveFieldMessage()


class RouteNotFound(RoutePlannerError):
    """Routing engine returned no path."""

    def __init__(self, reason: str = "") -> None:
        self.reason = reason
        super().__init__(reason or "No route found")

    def to_message(self) -> ToastMessage:
        return RouteNotFoundMessage(reason=self.reason)


class RoutingUnavailable(RouteNotFound):
    """Routing engine could not be reached or answered with an HTTP error."""


class GeolocationUnavailable(RoutePlannerError):
    """Device position could not be obtained (unsupported, denied, timeout)."""

    def __init__(self, reason: str = "Geolocation not supported") -> None:
        self.reason = reason
        super().__init__(reason)

    def to_message(self) -> ToastMessage:
        return GeolocationUnavailableMessage(reason=self.reason)
