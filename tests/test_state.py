"""Tests for core/state.py - load lifecycle and filter updates."""

from unittest.mock import MagicMock

import pytest

from core.data import prepare_context
from core.errors import FetchError
from core.filters import DashboardFilters
from core.metrics_overview import compute_overview
from core.state import (
    DashboardState,
    begin_load,
    context,
    filtered_view,
    finish_load,
    reset_filters,
    set_filter,
)


class TestLoad:
    """Tests for begin_load / finish_load."""

    def test_begin_load_is_loading_and_empty(self) -> None:
        state = begin_load()

        assert state.loading
        assert state.store.empty
        assert state.error is None

    def test_successful_load(self, mixed_store) -> None:
        fetch = MagicMock(return_value=mixed_store)

        state = finish_load(begin_load(), fetch)

        fetch.assert_called_once_with()
        assert not state.loading
        assert state.error is None
        assert state.store is mixed_store
        assert state.options["region"] == ["Asia", "Europe", "Northern America"]

    def test_fetch_failure_degrades_to_empty_state(self, caplog) -> None:
        fetch = MagicMock(side_effect=FetchError("http://data.test", "connection refused"))
        loading = begin_load()
        assert loading.loading

        state = finish_load(loading, fetch)

        fetch.assert_called_once_with()
        assert state.loading is False
        assert "connection refused" in state.error
        assert state.store.empty
        assert filtered_view(state).empty
        assert all(values == [] for values in state.options.values())
        assert "Data load failed" in caplog.text

        payload = compute_overview(state.filters, context(state))
        for datum in payload["chart_data"].values():
            assert datum["labels"] == []
            assert datum["values"] == []
            assert datum["series"] == []

    def test_other_errors_propagate(self) -> None:
        fetch = MagicMock(side_effect=RuntimeError("bug"))

        with pytest.raises(RuntimeError):
            finish_load(begin_load(), fetch)

    def test_reload_replaces_store_and_keeps_filters(self, mixed_store, scenario_store) -> None:
        state = finish_load(begin_load(), lambda: mixed_store)
        state = set_filter(state, "topic", "energy")

        reloading = begin_load(state)
        assert reloading.store.empty
        reloaded = finish_load(reloading, lambda: scenario_store)

        assert reloaded.filters.topic == "energy"
        assert reloaded.store is scenario_store
        assert reloaded.options["country"] == ["China", "France"]


class TestFilterUpdates:
    """Tests for set_filter / reset_filters / filtered_view."""

    @pytest.fixture
    def loaded(self, mixed_store) -> DashboardState:
        return finish_load(begin_load(), lambda: mixed_store)

    def test_set_filter_returns_new_state(self, loaded) -> None:
        updated = set_filter(loaded, "region", "Asia")

        assert updated.filters.region == "Asia"
        assert loaded.filters.region == ""
        assert updated.store is loaded.store
        assert len(filtered_view(updated)) == 3

    def test_options_do_not_change_with_filters(self, loaded) -> None:
        updated = set_filter(loaded, "region", "Europe")

        assert updated.options is loaded.options

    def test_reset_filters(self, loaded) -> None:
        updated = reset_filters(set_filter(set_filter(loaded, "region", "Asia"), "endYear", "2020"))

        assert updated.filters == DashboardFilters()
        assert len(filtered_view(updated)) == len(loaded.store)

    def test_context_matches_prepare_context(self, loaded) -> None:
        updated = set_filter(loaded, "topic", "oil")

        ctx = context(updated)

        assert ctx["filtered_records"].index.tolist() == prepare_context({"topic": "oil"}, loaded.store)["filtered_records"].index.tolist()
