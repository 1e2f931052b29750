"""Tests for RouteOrchestrator: validation, overlay lifecycle, details, clear.

Note: Fixtures are defined in conftest.py (FakeRoutingEngine, resolved_session).
"""

from typing import TYPE_CHECKING

import pytest

from route_planner.core.session import PlanningSession
from route_planner.errors import IncompleteEndpoints, RouteNotFound, RoutingUnavailable
from route_planner.model.endpoint import EndpointRole
from route_planner.model.route_result import RouteDetails

if TYPE_CHECKING:
    from conftest import FakeRoutingEngine

START = (19.0760, 72.8777)
END = (19.2183, 72.9781)


class TestComputeRoute:
    def test_mumbai_scenario(self, session: PlanningSession, engine: "FakeRoutingEngine") -> None:
        """15320 m / 1710 s is shown as 15.32 km and 28.50 mins."""
        result = session.orchestrator.compute_route(start=START, end=END)

        assert session.orchestrator.details == RouteDetails(distance="15.32", time="28.50")
        assert session.orchestrator.route is result
        assert session.map_layer.route_overlay is result
        assert not session.is_busy

    def test_sends_exactly_two_waypoints(self, session: PlanningSession, engine: "FakeRoutingEngine") -> None:
        session.orchestrator.compute_route(start=START, end=END)
        (request,) = engine.requests
        assert request.waypoints == [START, END]
        assert request.add_waypoints is False
        assert request.route_while_dragging is False

    @pytest.mark.parametrize(
        "start,end,missing",
        [
            (None, END, ("starting point",)),
            (START, None, ("destination",)),
            (None, None, ("starting point", "destination")),
        ],
    )
    def test_incomplete_endpoints(
        self,
        session: PlanningSession,
        engine: "FakeRoutingEngine",
        start: tuple[float, float] | None,
        end: tuple[float, float] | None,
        missing: tuple[str, ...],
    ) -> None:
        """The engine is never called without both coordinates."""
        with pytest.raises(IncompleteEndpoints) as exc_info:
            session.orchestrator.compute_route(start=start, end=end)
        assert exc_info.value.missing == missing
        assert engine.requests == []
        assert exc_info.value.to_message().message == "Select both start and end locations."

    def test_second_route_replaces_first(self, session: PlanningSession) -> None:
        """At most one overlay is ever live."""
        first = session.orchestrator.compute_route(start=START, end=END)
        second = session.orchestrator.compute_route(start=END, end=START)
        assert first is not second
        assert session.map_layer.route_overlay is second

    def test_route_not_found(self, session: PlanningSession, engine: "FakeRoutingEngine") -> None:
        """Failure leaves no route, no overlay and a released busy flag."""
        session.orchestrator.compute_route(start=START, end=END)
        engine.error = RouteNotFound("NoRoute")

        with pytest.raises(RouteNotFound):
            session.orchestrator.compute_route(start=START, end=END)

        assert session.orchestrator.route is None
        assert session.orchestrator.details is None
        assert session.map_layer.route_overlay is None
        assert not session.is_busy

    def test_routing_unavailable(self, session: PlanningSession, engine: "FakeRoutingEngine") -> None:
        engine.error = RoutingUnavailable("Routing service unreachable")
        with pytest.raises(RoutingUnavailable):
            session.orchestrator.compute_route(start=START, end=END)
        assert session.loading.count == 0


class TestFindRoute:
    def test_uses_resolver_endpoints(self, resolved_session: PlanningSession, engine: "FakeRoutingEngine") -> None:
        resolved_session.find_route()
        assert engine.requests[0].waypoints == [START, END]

    def test_cleared_endpoint_blocks_recompute(
        self, resolved_session: PlanningSession, engine: "FakeRoutingEngine"
    ) -> None:
        resolved_session.find_route()
        resolved_session.resolver.clear_endpoint(EndpointRole.END)

        with pytest.raises(IncompleteEndpoints):
            resolved_session.find_route()
        assert len(engine.requests) == 1


class TestClearRoute:
    def test_clear_resets_everything(self, resolved_session: PlanningSession) -> None:
        resolved_session.select_from_map(EndpointRole.START)
        resolved_session.handle_map_click(lat=19.1, lon=72.9)
        resolved_session.find_route()

        resolved_session.clear()

        assert resolved_session.orchestrator.route is None
        assert resolved_session.map_layer.route_overlay is None
        assert resolved_session.map_layer.click_marker is None
        assert resolved_session.active_field.active_role is None
        assert not resolved_session.state.start.is_resolved
        assert not resolved_session.state.end.is_resolved

    def test_clear_is_idempotent(self, resolved_session: PlanningSession) -> None:
        resolved_session.find_route()
        resolved_session.clear()
        snapshot = (
            resolved_session.state.start.text,
            resolved_session.state.end.coordinates,
            resolved_session.map_layer.route_overlay,
            resolved_session.active_field.get_state_name(),
        )
        resolved_session.clear()
        assert snapshot == (
            resolved_session.state.start.text,
            resolved_session.state.end.coordinates,
            resolved_session.map_layer.route_overlay,
            resolved_session.active_field.get_state_name(),
        )

    def test_clear_on_fresh_session(self, session: PlanningSession) -> None:
        session.clear()
        assert session.orchestrator.route is None
