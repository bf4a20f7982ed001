from __future__ import annotations

import pandas as pd

from core.charts import ChartDatum, ChartKind
from core.data import as_float, as_int
from core.schemas import YEAR_FIELD


def _by_year(df: pd.DataFrame, column: str, kind: ChartKind, title: str) -> ChartDatum:
    if df.empty:
        return ChartDatum(kind=kind, title=title, per_record=True)
    return ChartDatum(
        kind=kind,
        title=title,
        labels=[as_int(v) for v in df[YEAR_FIELD].tolist()],
        values=[as_float(v) for v in df[column].tolist()],
        per_record=True,
    )


def compute_intensity_by_year(df: pd.DataFrame) -> ChartDatum:
    return _by_year(df, "intensity", "line", "Intensity")


def compute_relevance_by_year(df: pd.DataFrame) -> ChartDatum:
    return _by_year(df, "relevance", "bar", "Relevance")
