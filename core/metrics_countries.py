from __future__ import annotations

import pandas as pd

from core.charts import ChartDatum


def compute_likelihood_by_country(df: pd.DataFrame) -> ChartDatum:
    """Mean likelihood per country, countries in first-seen order.

    Records without a likelihood are left out of both the sum and the count,
    so [40, null] averages to 40 rather than 20 (which is what treating the
    blank as 0 while still counting it would give). A country where no record
    has a likelihood gets None.
    """
    title = "Likelihood"
    if df.empty:
        return ChartDatum(kind="line", title=title)
    countries = df["country"].map(lambda v: v if isinstance(v, str) else "")
    likelihood = pd.to_numeric(df["likelihood"], errors="coerce")
    grouped = likelihood.groupby(countries, sort=False).agg(["sum", "count"])
    values = [
        float(row["sum"]) / int(row["count"]) if int(row["count"]) else None
        for _, row in grouped.iterrows()
    ]
    return ChartDatum(kind="line", title=title, labels=[str(c) for c in grouped.index.tolist()], values=values)
