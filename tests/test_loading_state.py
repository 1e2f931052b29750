"""Tests for LoadingState reference counting."""

import itertools

import pytest
from hypothesis import given, settings, strategies as st

from route_planner.core.loading_state import LoadingState


class TestLoadingState:
    def test_idle_initially(self) -> None:
        loading = LoadingState()
        assert loading.count == 0
        assert not loading.is_busy

    def test_busy_while_any_operation_in_flight(self) -> None:
        loading = LoadingState()
        loading.begin("search")
        loading.begin("route")
        loading.end("search")
        assert loading.is_busy
        loading.end("route")
        assert not loading.is_busy

    @pytest.mark.parametrize("order", list(itertools.permutations(["search", "reverse", "route"])))
    def test_returns_to_idle_in_any_settle_order(self, order: tuple[str, ...]) -> None:
        """Overlapping operations may settle in any order."""
        loading = LoadingState()
        for op in ["search", "reverse", "route"]:
            loading.begin(op)
        for op in order:
            assert loading.is_busy
            loading.end(op)
        assert loading.count == 0

    def test_end_without_begin_raises(self) -> None:
        """The counter never goes negative."""
        loading = LoadingState()
        with pytest.raises(RuntimeError):
            loading.end("route")
        assert loading.count == 0

    def test_track_releases_on_exception(self) -> None:
        loading = LoadingState()
        with pytest.raises(ValueError):
            with loading.track("route"):
                assert loading.is_busy
                raise ValueError("engine failed")
        assert not loading.is_busy


class TestLoadingStateHypothesis:
    """Property-based checks over arbitrary interleavings of begin/end."""

    @given(ops=st.lists(st.booleans(), max_size=60))
    @settings(max_examples=50)
    def test_count_tracks_balance(self, ops: list[bool]) -> None:
        """True = begin, False = end. Unmatched ends are rejected, never counted."""
        loading = LoadingState()
        expected = 0
        for is_begin in ops:
            if is_begin:
                loading.begin("op")
                expected += 1
            elif expected == 0:
                with pytest.raises(RuntimeError):
                    loading.end("op")
            else:
                loading.end("op")
                expected -= 1
            assert loading.count == expected >= 0
            assert loading.is_busy == (expected > 0)
