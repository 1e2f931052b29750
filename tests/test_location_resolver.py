"""Tests for LocationResolver: text edits, suggestions, point resolution, staleness.

Note: Fixtures are defined in conftest.py (FakeGeocodeClient, session).
"""

from typing import TYPE_CHECKING

import pytest

from route_planner.core.session import PlanningSession
from route_planner.model.endpoint import EndpointRole
from route_planner.model.pending_lookup import LookupKind, ResolutionSource
from route_planner.model.place_candidate import PlaceCandidate

if TYPE_CHECKING:
    from conftest import FakeGeocodeClient

START = EndpointRole.START
END = EndpointRole.END


class TestTextEdit:
    def test_edit_sets_text_and_active_field(self, session: PlanningSession) -> None:
        session.resolver.edit_text(END, "Th")
        assert session.state.end.text == "Th"
        assert session.active_field.active_role == END

    def test_short_text_issues_nothing(self, session: PlanningSession, geocoder: "FakeGeocodeClient") -> None:
        """Two characters: no lookup queued, no search call, suggestions untouched."""
        session.state.start.suggestions = ["kept"]  # type: ignore[list-item]
        assert session.resolver.edit_text(START, "Ga") is None
        session.process_pending()

        assert session.state.pending == []
        assert geocoder.search_calls == []
        assert session.state.start.suggestions == ["kept"]
        assert not session.is_busy

    def test_three_characters_searches(self, session: PlanningSession, geocoder: "FakeGeocodeClient") -> None:
        lookup = session.resolver.edit_text(START, "Gat")
        assert lookup is not None
        assert lookup.kind == LookupKind.FORWARD_SEARCH
        assert lookup.source == ResolutionSource.TYPED
        assert session.is_busy

        session.process_pending()
        assert geocoder.search_calls == ["Gat"]
        assert not session.is_busy

    def test_search_fills_suggestions(self, session: PlanningSession) -> None:
        session.resolver.edit_text(START, "Gateway")
        session.process_pending()
        names = [c.display_name for c in session.state.start.suggestions]
        assert names == ["Gateway of India, Apollo Bandar, Mumbai", "Gateway Hotel, Colaba, Mumbai"]

    def test_edit_keeps_coordinates_by_default(self, resolved_session: PlanningSession) -> None:
        coords = resolved_session.state.start.coordinates
        resolved_session.resolver.edit_text(START, "Somewhere else")
        assert resolved_session.state.start.coordinates == coords

    def test_edit_clears_coordinates_when_enabled(self, resolved_session: PlanningSession) -> None:
        resolved_session.resolver.clear_coordinates_on_edit = True
        resolved_session.resolver.edit_text(START, "Somewhere else")
        assert resolved_session.state.start.coordinates is None


class TestSuggestionSelection:
    def test_select_takes_name_and_coordinates(self, session: PlanningSession) -> None:
        session.resolver.edit_text(START, "Gateway")
        session.process_pending()
        candidate = session.state.start.suggestions[1]

        chosen = session.resolver.select_suggestion(START, 1)

        assert chosen == candidate
        assert session.state.start.text == candidate.display_name
        assert session.state.start.coordinates == candidate.coordinates
        assert session.state.start.suggestions == []

    def test_select_invalidates_in_flight_search(self, session: PlanningSession, geocoder: "FakeGeocodeClient") -> None:
        session.resolver.edit_text(START, "Gateway")
        session.process_pending()
        session.resolver.edit_text(START, "Gateway Hotel")  # queued, not yet run
        session.resolver.select_suggestion(START, 0)

        session.process_pending()

        assert geocoder.search_calls == ["Gateway"]
        assert session.state.start.suggestions == []
        assert not session.is_busy

    def test_select_out_of_range(self, session: PlanningSession) -> None:
        with pytest.raises(IndexError):
            session.resolver.select_suggestion(END, 0)


class TestStaleLookups:
    def test_older_search_skipped(self, session: PlanningSession, geocoder: "FakeGeocodeClient") -> None:
        """Only the latest edit of a field is searched."""
        session.resolver.edit_text(END, "Tha")
        session.resolver.edit_text(END, "Thane")
        session.process_pending()

        assert geocoder.search_calls == ["Thane"]
        assert [c.display_name for c in session.state.end.suggestions] == ["Thane, Maharashtra, India"]
        assert session.loading.count == 0

    def test_result_discarded_after_newer_edit(self, session: PlanningSession, geocoder: "FakeGeocodeClient") -> None:
        """A newer edit made while a search is running wins over its result."""
        geocoder.on_search = lambda query: session.resolver.edit_text(START, "Ga") if query == "Gateway" else None
        session.resolver.edit_text(START, "Gateway")

        session.process_pending()

        assert geocoder.search_calls == ["Gateway"]
        assert session.state.start.suggestions == []
        assert session.state.start.text == "Ga"
        assert not session.is_busy

    def test_fields_are_independent(self, session: PlanningSession, geocoder: "FakeGeocodeClient") -> None:
        """An edit on one field never makes the other field's lookup stale."""
        session.resolver.edit_text(START, "Gateway")
        session.resolver.edit_text(END, "Thane")
        assert session.process_pending() == 2
        assert geocoder.search_calls == ["Gateway", "Thane"]

    def test_request_ids_increase(self, session: PlanningSession) -> None:
        first = session.resolver.edit_text(START, "Gateway")
        second = session.resolver.edit_text(START, "Gateway Hotel")
        assert first is not None and second is not None
        assert second.request_id > first.request_id
        assert session.state.start.last_request_id == second.request_id

    def test_clear_makes_pending_stale(self, session: PlanningSession, geocoder: "FakeGeocodeClient") -> None:
        session.resolver.edit_text(START, "Gateway")
        session.resolver.clear()
        session.process_pending()
        assert geocoder.search_calls == []
        assert session.state.start.suggestions == []
        assert not session.is_busy


class TestPointResolution:
    def test_reverse_lookup_sets_text_and_coordinates(self, session: PlanningSession) -> None:
        session.resolver.resolve_point(END, lat=19.2183, lon=72.9781, source=ResolutionSource.MAP_CLICK)
        session.process_pending()
        assert session.state.end.text == "Thane, Maharashtra, India"
        assert session.state.end.coordinates == (19.2183, 72.9781)

    def test_reverse_lookup_keeps_queried_point(
        self, session: PlanningSession, geocoder: "FakeGeocodeClient"
    ) -> None:
        """The place found nearby only names the point; its own coordinates are ignored."""
        geocoder.reverse_results[(19.10, 72.88)] = PlaceCandidate.from_nominatim(
            {"display_name": "Kurla West, Mumbai", "lat": "19.1012345", "lon": "72.8831234"}
        )
        session.select_from_map(START)
        session.handle_map_click(lat=19.10, lon=72.88)
        session.process_pending()

        assert session.state.start.text == "Kurla West, Mumbai"
        assert session.state.start.coordinates == (19.10, 72.88)
        assert session.state.start.coordinates == session.map_layer.click_marker

    def test_reverse_failure_keeps_point_and_text(self, session: PlanningSession) -> None:
        session.resolver.edit_text(START, "My typed text")
        session.resolver.resolve_point(START, lat=19.10, lon=72.88, source=ResolutionSource.MAP_CLICK)
        session.process_pending()

        assert session.state.start.coordinates == (19.10, 72.88)
        assert session.state.start.text == "My typed text"
        assert not session.is_busy

    def test_point_resolution_supersedes_search(self, session: PlanningSession, geocoder: "FakeGeocodeClient") -> None:
        session.resolver.edit_text(END, "Thane")
        session.resolver.resolve_point(END, lat=19.2183, lon=72.9781, source=ResolutionSource.GEOLOCATION)
        session.process_pending()
        assert geocoder.search_calls == []
        assert geocoder.reverse_calls == [(19.2183, 72.9781)]


class TestClear:
    def test_clear_both(self, resolved_session: PlanningSession) -> None:
        resolved_session.resolver.clear()
        for endpoint in (resolved_session.state.start, resolved_session.state.end):
            assert endpoint.text == ""
            assert endpoint.coordinates is None
            assert endpoint.suggestions == []

    def test_clear_one_endpoint(self, resolved_session: PlanningSession) -> None:
        resolved_session.resolver.clear_endpoint(START)
        assert resolved_session.state.start.coordinates is None
        assert resolved_session.state.end.coordinates == (19.2183, 72.9781)
