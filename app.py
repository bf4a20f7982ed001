from contextlib import contextmanager
from typing import Dict, Optional

import streamlit as st

from core.config import DATA_URL, configure_logging
from core.data import load_store
from core.filters import DIMENSIONS, DashboardFilters
from core.metrics_overview import WIDE_CHARTS, compute_overview
from core.state import begin_load, context, finish_load, set_filter

configure_logging()

DIMENSION_LABELS: Dict[str, str] = {
    "end_year": "End Year",
    "topic": "Topic",
    "region": "Region",
    "country": "Country",
    "pestle": "PESTLE",
    "source": "Source",
    "sector": "Sector",
}

CHART_TITLES: Dict[str, str] = {
    "intensity_by_year": "Intensity Line Chart",
    "relevance_by_year": "Relevance Bar Chart",
    "region_distribution": "Regions Doughnut Chart",
    "topic_frequency": "Topics Frequency Bar Chart",
    "source_bubbles": "Sources Bubble Chart",
    "likelihood_by_country": "Country vs. Likelihood Line Chart",
}


# ---------- UI / layout helpers ----------
def inject_base_styles():
    if st.session_state.get("_base_css_injected"):
        return
    st.markdown(
        """
        <style>
        .card {border: 1px solid #e5e7eb;border-radius: 12px;padding: 16px;background: #ffffff;
               box-shadow: 0 1px 2px rgba(0,0,0,0.04); margin-bottom: 12px;}
        .card-title {font-weight: 600;font-size: 1.0rem;color: #111827;margin-bottom: 8px;}
        .chip-row {display: flex;flex-wrap: wrap;gap: 6px;margin-top: 6px;}
        .chip {background: #f3f4f6;border: 1px solid #e5e7eb;border-radius: 14px;padding: 4px 10px;font-size: 0.85rem;color: #374151;}
        </style>
        """,
        unsafe_allow_html=True,
    )
    st.session_state["_base_css_injected"] = True


@contextmanager
def card(title: str):
    container = st.container()
    container.markdown(f"<div class='card'><div class='card-title'>{title}</div>", unsafe_allow_html=True)
    body = container.container()
    with body:
        yield body
    container.markdown("</div>", unsafe_allow_html=True)


def format_filter_summary(filters: DashboardFilters) -> str:
    active = filters.active()
    if not active:
        return "<span class='chip'>Filters: none</span>"
    return "".join(f"<span class='chip'>{DIMENSION_LABELS[d]}: {v}</span>" for d, v in active.items())


def _option_label(value: object) -> str:
    return "Select..." if value == "" else str(value)


def clear_filters():
    for dimension in DIMENSIONS:
        st.session_state[f"filter_{dimension}"] = ""


def refresh_data():
    load_store.cache_clear()


def render_chart(key: str, spec: Optional[dict], empty: bool):
    with card(CHART_TITLES[key]):
        if empty:
            st.info("No records match the selected filters.")
            return
        st.vega_lite_chart(spec, use_container_width=key not in WIDE_CHARTS)


# ---------- UI setup ----------
st.set_page_config(page_title="Insights Dashboard", layout="wide")
inject_base_styles()
st.title("Insights Dashboard")

state = begin_load()
with st.spinner("Loading..."):
    state = finish_load(state, fetch=lambda: load_store(DATA_URL))

with st.sidebar:
    st.markdown("### Filters")
    for dimension in DIMENSIONS:
        choice = st.selectbox(
            DIMENSION_LABELS[dimension],
            options=[""] + list(state.options[dimension]),
            format_func=_option_label,
            key=f"filter_{dimension}",
        )
        state = set_filter(state, dimension, choice)
    st.button("Clear filters", on_click=clear_filters)
    st.markdown("---")
    st.button("Refresh data", on_click=refresh_data)

if state.error:
    st.error(f"Could not load data: {state.error}")
    st.stop()

payload = compute_overview(state.filters, context(state))
counts = payload["row_counts"]

cols = st.columns(3)
cols[0].metric("Records", f"{counts['records']:,}")
cols[1].metric("Matching filters", f"{counts['filtered']:,}")
cols[2].metric("Skipped (malformed)", f"{counts['dropped']:,}", help="Records missing a field or carrying a value of the wrong type.")
st.markdown(f"<div class='chip-row'>{format_filter_summary(state.filters)}</div>", unsafe_allow_html=True)

chart_keys = list(payload["charts"].keys())
for i in range(0, len(chart_keys), 2):
    row = st.columns(2)
    for col, key in zip(row, chart_keys[i : i + 2]):
        with col:
            datum = payload["chart_data"][key]
            render_chart(key, payload["charts"][key], not datum["labels"] and not datum["series"])
