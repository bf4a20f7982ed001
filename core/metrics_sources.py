from __future__ import annotations

import pandas as pd

from core.charts import ChartDatum
from core.metrics_distribution import count_by


def compute_source_bubbles(df: pd.DataFrame) -> ChartDatum:
    """One bubble per source: x is its 1-based position, y its record count, r twice that."""
    counts = count_by(df, "source")
    labels = [str(v) for v in counts["source"].tolist()]
    values = [int(v) for v in counts["count"].tolist()]
    series = [
        {"label": label, "x": position, "y": count, "r": count * 2}
        for position, (label, count) in enumerate(zip(labels, values), start=1)
    ]
    return ChartDatum(kind="bubble", title="Sources", labels=labels, values=values, series=series)
