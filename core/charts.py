from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional

import altair as alt
import pandas as pd

from core.config import CHART_HEIGHT, MAX_CHART_WIDTH, PX_PER_RECORD

alt.data_transformers.disable_max_rows()

ChartKind = Literal["line", "bar", "doughnut", "horizontal_bar", "bubble"]


@dataclass(frozen=True)
class ChartDatum:
    """Input for one chart: index-aligned labels/values, or bubble series.

    `per_record` charts carry one point per record, so their labels repeat.
    """

    kind: ChartKind
    title: str
    labels: List[Any] = field(default_factory=list)
    values: List[Optional[float]] = field(default_factory=list)
    series: List[Dict[str, Any]] = field(default_factory=list)
    per_record: bool = False

    @property
    def empty(self) -> bool:
        return not self.labels and not self.series


def to_vega_spec(chart: alt.Chart) -> Dict[str, Any]:
    """Convert an Altair chart into a Vega-Lite spec dict (JSON-serializable)."""
    return chart.to_dict()


def chart_width(row_count: int) -> int:
    return min(row_count * PX_PER_RECORD, MAX_CHART_WIDTH)


def _display_label(value: Any) -> str:
    if value is None or value == "":
        return "(none)"
    return str(value)


def _frame(datum: ChartDatum) -> pd.DataFrame:
    if datum.per_record:
        # Position keeps repeated years apart; the axis shows only the year.
        keys = [f"{_display_label(label)}#{i}" for i, label in enumerate(datum.labels, start=1)]
        return pd.DataFrame({"key": keys, "label": [_display_label(x) for x in datum.labels], "value": datum.values})
    return pd.DataFrame({"label": [_display_label(x) for x in datum.labels], "value": datum.values})


def _x_axis(datum: ChartDatum) -> alt.X:
    if datum.per_record:
        return alt.X("key:N", sort=None, title="End Year", axis=alt.Axis(labelExpr="split(datum.label, '#')[0]"))
    return alt.X("label:N", sort=None, title=None)


def build_chart(datum: ChartDatum, *, width: Optional[int] = None) -> alt.Chart:
    if datum.kind == "bubble":
        df = pd.DataFrame(datum.series, columns=["label", "x", "y", "r"])
        df["label"] = df["label"].map(_display_label)
        chart = (
            alt.Chart(df)
            .mark_circle(opacity=0.6)
            .encode(
                x=alt.X("x:Q", title="Source", scale=alt.Scale(zero=True)),
                y=alt.Y("y:Q", title="Records", scale=alt.Scale(zero=True)),
                size=alt.Size("r:Q", legend=None),
                color=alt.Color("label:N", title="Source", sort=None),
                tooltip=[alt.Tooltip("label:N", title="Source"), alt.Tooltip("y:Q", title="Records")],
            )
        )
    elif datum.kind == "doughnut":
        chart = (
            alt.Chart(_frame(datum))
            .mark_arc(innerRadius=60)
            .encode(
                theta=alt.Theta("value:Q"),
                color=alt.Color("label:N", title=datum.title, sort=None),
                tooltip=[alt.Tooltip("label:N", title=datum.title), alt.Tooltip("value:Q", title="Records")],
            )
        )
    elif datum.kind == "horizontal_bar":
        chart = (
            alt.Chart(_frame(datum))
            .mark_bar()
            .encode(
                y=alt.Y("label:N", sort=None, title=None),
                x=alt.X("value:Q", title=datum.title, scale=alt.Scale(zero=True)),
                tooltip=[alt.Tooltip("label:N", title="Topic"), alt.Tooltip("value:Q", title="Records")],
            )
        )
    else:
        base = alt.Chart(_frame(datum))
        mark = base.mark_bar() if datum.kind == "bar" else base.mark_line(point=True)
        chart = mark.encode(
            x=_x_axis(datum),
            y=alt.Y("value:Q", title=datum.title),
            tooltip=[alt.Tooltip("label:N", title="Label"), alt.Tooltip("value:Q", title=datum.title)],
        )
    props: Dict[str, Any] = {"height": CHART_HEIGHT, "title": datum.title}
    if width:
        props["width"] = width
    return chart.properties(**props)
