"""Dashboard session state.

The state is an immutable value; every user action returns a new one. This
keeps the filter engine and aggregators testable without a running UI.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, Optional

import pandas as pd

from core.data import FilterOptions, RecordStore, derive_options, empty_store, prepare_context
from core.errors import FetchError
from core.filters import DashboardFilters, apply_filters
from core.filters import set_filter as _set_criterion

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class DashboardState:
    store: RecordStore = field(default_factory=empty_store)
    options: FilterOptions = field(default_factory=lambda: derive_options(empty_store().frame))
    filters: DashboardFilters = field(default_factory=DashboardFilters)
    loading: bool = False
    error: Optional[str] = None


def begin_load(state: Optional[DashboardState] = None) -> DashboardState:
    """Start a load: the previous store is dropped, filters are kept."""
    filters = state.filters if state is not None else DashboardFilters()
    return DashboardState(filters=filters, loading=True)


def finish_load(state: DashboardState, fetch: Callable[[], RecordStore]) -> DashboardState:
    try:
        store = fetch()
    except FetchError as exc:
        logger.exception("Data load failed")
        store = empty_store(source=exc.url)
        return replace(state, store=store, options=derive_options(store.frame), loading=False, error=str(exc))
    return replace(state, store=store, options=derive_options(store.frame), loading=False, error=None)


def set_filter(state: DashboardState, dimension: str, value: Any) -> DashboardState:
    return replace(state, filters=_set_criterion(state.filters, dimension, value))


def reset_filters(state: DashboardState) -> DashboardState:
    return replace(state, filters=DashboardFilters())


def filtered_view(state: DashboardState) -> pd.DataFrame:
    return apply_filters(state.store.frame, state.filters)


def context(state: DashboardState) -> Dict[str, object]:
    return prepare_context(state.filters, state.store)
