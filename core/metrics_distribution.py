from __future__ import annotations

import pandas as pd

from core.charts import ChartDatum, ChartKind


def count_by(df: pd.DataFrame, dimension: str) -> pd.DataFrame:
    """Record count per distinct value, in first-seen order.

    Blank values form their own group so the counts always add up to len(df).
    """
    if df.empty:
        return pd.DataFrame({dimension: pd.Series(dtype=object), "count": pd.Series(dtype="int64")})
    keys = df[dimension].map(lambda v: "" if v is None or (not isinstance(v, str) and pd.isna(v)) else v)
    return keys.groupby(keys, sort=False).size().rename("count").rename_axis(dimension).reset_index()


def _distribution(df: pd.DataFrame, dimension: str, kind: ChartKind, title: str) -> ChartDatum:
    counts = count_by(df, dimension)
    return ChartDatum(
        kind=kind,
        title=title,
        labels=[str(v) for v in counts[dimension].tolist()],
        values=[int(v) for v in counts["count"].tolist()],
    )


def compute_region_distribution(df: pd.DataFrame) -> ChartDatum:
    return _distribution(df, "region", "doughnut", "Regions")


def compute_topic_frequency(df: pd.DataFrame) -> ChartDatum:
    return _distribution(df, "topic", "horizontal_bar", "Topics")
