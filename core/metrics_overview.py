from __future__ import annotations

from dataclasses import asdict
from typing import Any, Callable, Dict

import pandas as pd

from core.charts import ChartDatum, build_chart, chart_width, to_vega_spec
from core.filters import DashboardFilters
from core.metrics_countries import compute_likelihood_by_country
from core.metrics_distribution import compute_region_distribution, compute_topic_frequency
from core.metrics_sources import compute_source_bubbles
from core.metrics_years import compute_intensity_by_year, compute_relevance_by_year

Aggregator = Callable[[pd.DataFrame], ChartDatum]

# Display order: two charts per row.
AGGREGATORS: Dict[str, Aggregator] = {
    "intensity_by_year": compute_intensity_by_year,
    "relevance_by_year": compute_relevance_by_year,
    "region_distribution": compute_region_distribution,
    "topic_frequency": compute_topic_frequency,
    "source_bubbles": compute_source_bubbles,
    "likelihood_by_country": compute_likelihood_by_country,
}

# Charts that scroll horizontally and grow with the number of records.
WIDE_CHARTS = {"intensity_by_year", "relevance_by_year", "source_bubbles", "likelihood_by_country"}


def compute_chart_data(df: pd.DataFrame) -> Dict[str, ChartDatum]:
    return {key: aggregate(df) for key, aggregate in AGGREGATORS.items()}


def compute_overview(filters: DashboardFilters, ctx: Dict[str, Any]) -> Dict[str, Any]:
    records: pd.DataFrame = ctx.get("records", pd.DataFrame())
    df: pd.DataFrame = ctx.get("filtered_records", pd.DataFrame())

    chart_data = compute_chart_data(df)
    width = chart_width(len(df))
    charts = {
        key: to_vega_spec(build_chart(datum, width=width if key in WIDE_CHARTS else None))
        for key, datum in chart_data.items()
    }
    return {
        "filters": asdict(filters),
        "row_counts": {
            "records": int(len(records)),
            "filtered": int(len(df)),
            "dropped": int(ctx.get("dq_removed_rows", 0) or 0),
        },
        "chart_data": {key: asdict(datum) for key, datum in chart_data.items()},
        "charts": charts,
        "chart_width": width,
    }
